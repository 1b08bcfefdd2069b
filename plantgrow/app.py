"""Interactive window that renders the growing plant."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from plantgrow.bitmap import write_bmp
from plantgrow.camera import Navigator
from plantgrow.geometry import PrimitiveKind
from plantgrow.growth import PlantConfig, StateTree, StateTreeFull
from plantgrow.persistence import load_state, save_state
from plantgrow.plant import ColoredMesh, PlantBuilder

STATE_FILE = "out.state"


def frame_filename(index: int) -> str:
    """Name of the bitmap that holds captured frame ``index``."""
    return f"frame{index:05d}.bmp"


def _floats(gl, values):
    """Pack ``values`` into a GL float array."""
    values = list(values)
    return (gl.GLfloat * len(values))(*values)


class PlantWindow:
    """The plant, the camera and the frame counter behind the viewer window."""

    def __init__(
        self,
        config: Optional[PlantConfig] = None,
        state_file=None,
        rng: Optional[random.Random] = None,
        width: int = 500,
        height: int = 500,
    ) -> None:
        self.config = config or PlantConfig()
        self.rng = rng or random.Random()
        self.navigator = Navigator(self.config)
        self.tree = StateTree(config=self.config, rng=self.rng)
        self.builder = PlantBuilder(self.tree)
        self.width = width
        self.height = height
        self.frame = 0
        self.state_path = Path(STATE_FILE)
        self.exit_code = 0
        self._capture_pending = False
        if state_file is not None:
            self._load(state_file)

    def _save(self, path=None) -> None:
        save_state(path or self.state_path, self.navigator.curview,
                   self.navigator.time_cur, self.tree)

    def _load(self, path) -> None:
        saved = load_state(path)
        self.navigator.start = saved.view.copy()
        self.navigator.curview = saved.view.copy()
        self.navigator.time_cur = saved.time_cur
        self.tree = saved.to_tree(self.config, self.rng)
        self.builder = PlantBuilder(self.tree)

    def _handle_key(self, key: str) -> Optional[str]:
        command = self.navigator.key(key)
        if command == "save":
            self._save()
        elif command == "load":
            self._load(self.state_path)
        elif command == "capture":
            self._capture_pending = True
        return command

    def _advance(self) -> tuple[np.ndarray, list[ColoredMesh]]:
        """Move the camera and the clock one frame on; return the view and meshes."""
        view = self.navigator.update_view()
        self.navigator.step_time()
        meshes = self.builder.build(self.navigator.time_cur, view)
        return view, meshes

    def _write_frame(self, pixels: bytes) -> Path:
        path = Path(frame_filename(self.frame))
        self.frame += 1
        write_bmp(path, self.width, self.height, pixels)
        return path

    def _init_gl(self, gl) -> None:
        gl.glClearColor(0.0, 0.0, 0.0, 0.0)
        gl.glShadeModel(gl.GL_SMOOTH)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glLightfv(gl.GL_LIGHT1, gl.GL_AMBIENT, _floats(gl, (0.46, 0.46, 0.46, 1.0)))
        gl.glLightfv(gl.GL_LIGHT1, gl.GL_DIFFUSE, _floats(gl, (1.0, 1.0, 1.0, 1.0)))
        gl.glLightfv(gl.GL_LIGHT1, gl.GL_SPECULAR, _floats(gl, (2.0, 2.0, 2.0, 1.0)))
        gl.glEnable(gl.GL_LIGHT1)
        gl.glEnable(gl.GL_LIGHTING)
        gl.glMaterialfv(gl.GL_FRONT_AND_BACK, gl.GL_SHININESS, _floats(gl, (100.0,)))
        gl.glEnable(gl.GL_COLOR_MATERIAL)
        gl.glColorMaterial(gl.GL_FRONT_AND_BACK, gl.GL_DIFFUSE)
        gl.glMaterialfv(gl.GL_FRONT, gl.GL_AMBIENT, _floats(gl, self.config.grey))
        gl.glHint(gl.GL_POLYGON_SMOOTH_HINT, gl.GL_NICEST)
        gl.glHint(gl.GL_PERSPECTIVE_CORRECTION_HINT, gl.GL_NICEST)
        gl.glHint(gl.GL_LINE_SMOOTH_HINT, gl.GL_NICEST)

    def _render(self, gl) -> bool:
        """Draw one frame; return False when the viewer should close."""
        if self.navigator.quit:
            return False
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        gl.glFrustum(-self.width / 1000.0, self.width / 1000.0,
                     -self.height / 1000.0, self.height / 1000.0, 1.0, 1000.0)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        try:
            view, meshes = self._advance()
        except StateTreeFull:
            self.exit_code = 1
            return False

        gl.glLoadMatrixf(_floats(gl, view.flatten(order="F")))
        gl.glLightfv(gl.GL_LIGHT0, gl.GL_POSITION, _floats(gl, (0.0, -1.0, 1.0, 0.0)))
        gl.glLightfv(gl.GL_LIGHT1, gl.GL_POSITION, _floats(gl, (-0.4, 1.0, 0.5, 0.0)))

        modes = {PrimitiveKind.QUAD_STRIP: gl.GL_QUAD_STRIP,
                 PrimitiveKind.POLYGON: gl.GL_POLYGON}
        for mesh in meshes:
            gl.glLoadMatrixf(_floats(gl, mesh.matrix.flatten(order="F")))
            gl.glColor3f(*mesh.color)
            for primitive in mesh.primitives:
                gl.glBegin(modes[primitive.kind])
                for normal, vertex in zip(primitive.normals, primitive.vertices):
                    gl.glNormal3f(*normal)
                    gl.glVertex3f(*vertex)
                gl.glEnd()

        if self.navigator.make_movie or self._capture_pending:
            self._capture_pending = False
            self._capture(gl)
        return True

    def _capture(self, gl) -> None:
        buffer = (gl.GLubyte * (3 * self.width * self.height))()
        gl.glPixelStorei(gl.GL_PACK_ALIGNMENT, 1)
        gl.glReadPixels(0, 0, self.width, self.height, gl.GL_RGB,
                        gl.GL_UNSIGNED_BYTE, buffer)
        self._write_frame(bytes(buffer))

    def run(self) -> int:
        """Open the window and run until the viewer quits; return the exit code."""
        import pyglet
        from pyglet.window import mouse as pyglet_mouse

        try:
            from pyglet.gl import gl_compat as gl
        except ImportError:
            from pyglet.gl import gl

        owner = self
        buttons = {pyglet_mouse.LEFT: "left", pyglet_mouse.RIGHT: "right",
                   pyglet_mouse.MIDDLE: "middle"}

        class _Window(pyglet.window.Window):
            def on_draw(self):
                if not owner._render(gl):
                    self.close()
                    pyglet.app.exit()

            def on_resize(self, width, height):
                owner.width, owner.height = width, height
                gl.glViewport(0, 0, width, height)
                return pyglet.event.EVENT_HANDLED

            def on_text(self, text):
                for char in text:
                    owner._handle_key(char)

            def on_mouse_press(self, x, y, button, modifiers):
                if button in buttons:
                    owner.navigator.mouse(buttons[button], True)

            def on_mouse_release(self, x, y, button, modifiers):
                if button in buttons:
                    owner.navigator.mouse(buttons[button], False)

            def on_mouse_drag(self, x, y, dx, dy, pressed, modifiers):
                owner.navigator.motion(x, owner.height - y)

        options = dict(width=self.width, height=self.height,
                       caption="plant-grow", resizable=True)
        try:
            config = pyglet.gl.Config(double_buffer=True, depth_size=24,
                                      major_version=2, minor_version=1)
            window = _Window(config=config, **options)
        except pyglet.window.NoSuchConfigException:
            window = _Window(**options)
        window.set_location(100, 100)
        self._init_gl(gl)
        pyglet.clock.schedule_interval(lambda dt: None, 1 / 60)
        pyglet.app.run()
        return self.exit_code


def main(argv=None) -> int:
    """Start the viewer, optionally from a saved state file."""
    parser = argparse.ArgumentParser(prog="plant-grow", description="Watch a plant grow.")
    parser.add_argument("state_file", nargs="?", help="state file to start from")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    try:
        window = PlantWindow(state_file=args.state_file)
    except (OSError, ValueError) as exc:
        print(f"plant-grow: cannot load {args.state_file}: {exc}", file=sys.stderr)
        return 1
    return window.run()


if __name__ == "__main__":
    sys.exit(main())