"""Keyboard and mouse navigation around the growing plant."""

from __future__ import annotations

from typing import Optional

import numpy as np

from plantgrow.growth import PlantConfig
from plantgrow.transform import MatrixStack, translation

_MOUSE_SCALE = 1900.0


class Navigator:
    """Camera motion, growth speed and viewer flags driven by user input.

    ``curview`` is the accumulated view matrix and ``start`` the view the
    plant is first seen from.
    """

    def __init__(self, config: Optional[PlantConfig] = None) -> None:
        self.config = config or PlantConfig()
        self.zpos = 0.0
        self.yspin = 0.0
        self.xspin = 0.0
        self.x_old_mouse = -1
        self.y_old_mouse = -1
        self.mouse_down = False
        self.start = translation(0.0, 0.0, -15.0)
        self.curview = self.start.copy()
        self.time_cur = 1.0
        self.time_step = 0.0
        self.quit = False
        self.make_movie = False

    def key(self, key: str) -> Optional[str]:
        """Apply a key press.

        Returns ``"capture"``, ``"save"`` or ``"load"`` for keys that the
        caller has to carry out, otherwise ``None``.
        """
        self.x_old_mouse = -1
        speed, spin, incr = self.config.speed, self.config.spin, self.config.time_incr
        match key:
            case "f" | "8":
                self.zpos += speed
            case "g":
                self.time_step += incr
            case "G":
                self.time_step -= incr
            case "h":
                self.time_step = 0.0
            case "2" | "b":
                self.zpos -= speed
            case "d" | "+":
                self.xspin += spin
            case "u" | "-":
                self.xspin -= spin
            case "6" | "r":
                self.yspin += spin
            case "4" | "l":
                self.yspin -= spin
            case "5" | "k":
                self.xspin = 0.0
                self.yspin = 0.0
                self.zpos = 0.0
            case "s":
                self.reset_view()
            case "q":
                self.quit = True
            case "7":
                self.zpos += speed
                self.yspin -= spin
            case "9":
                self.zpos += speed
                self.yspin += spin
            case "1":
                self.zpos -= speed
                self.yspin -= spin
            case "3":
                self.zpos -= speed
                self.yspin += spin
            case "c":
                return "capture"
            case "m":
                self.make_movie = not self.make_movie
            case "S":
                return "save"
            case "L":
                return "load"
        return None

    def mouse(self, button: str, pressed: bool) -> None:
        """Apply a press or release of the ``"left"``, ``"right"`` or ``"middle"`` button."""
        if button == "left":
            if pressed:
                self.zpos += self.config.speed
        elif button == "right":
            if pressed:
                self.zpos -= self.config.speed
        elif button == "middle":
            if pressed:
                self.mouse_down = True
            else:
                self.mouse_down = False
                self.x_old_mouse = -1

    def motion(self, x: int, y: int) -> None:
        """Spin the view while the middle button is held and the mouse moves."""
        if not self.mouse_down:
            return
        if self.x_old_mouse != -1:
            self.yspin -= (x - self.x_old_mouse) * self.config.spin / _MOUSE_SCALE
            self.xspin -= (y - self.y_old_mouse) * self.config.spin / _MOUSE_SCALE
        self.x_old_mouse = x
        self.y_old_mouse = y

    def reset_view(self) -> None:
        """Return to the starting view."""
        self.curview = self.start.copy()

    def update_view(self) -> np.ndarray:
        """Apply one frame of spin and motion to the view and return it."""
        stack = MatrixStack()
        stack.rotate(self.yspin, 0, 1, 0)
        stack.rotate(self.xspin, 1, 0, 0)
        stack.translate(0.0, 0.0, self.zpos)
        stack.multiply(self.curview)
        self.curview = stack.matrix
        return self.curview.copy()

    def step_time(self) -> float:
        """Advance the plant's time by one step, never growing below zero."""
        if self.time_cur > 0 or self.time_step > 0:
            self.time_cur += self.time_step
        return self.time_cur