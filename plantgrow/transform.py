"""4x4 homogeneous transforms and a modelview matrix stack."""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator

import numpy as np


def identity() -> np.ndarray:
    """The 4x4 identity matrix."""
    return np.eye(4)


def rotation(angle: float, x: float, y: float, z: float) -> np.ndarray:
    """Rotation by ``angle`` degrees about the axis (x, y, z)."""
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0.0:
        raise ValueError("rotation axis must not be zero")
    x, y, z = x / norm, y / norm, z / norm
    rad = math.radians(angle)
    c, s = math.cos(rad), math.sin(rad)
    t = 1.0 - c
    return np.array(
        [
            [x * x * t + c, x * y * t - z * s, x * z * t + y * s, 0.0],
            [y * x * t + z * s, y * y * t + c, y * z * t - x * s, 0.0],
            [x * z * t - y * s, y * z * t + x * s, z * z * t + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def translation(x: float, y: float, z: float) -> np.ndarray:
    """Translation by (x, y, z)."""
    matrix = np.eye(4)
    matrix[:3, 3] = (x, y, z)
    return matrix


def frustum(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """Perspective projection for the given view volume."""
    if near <= 0 or far <= 0 or left == right or bottom == top or near == far:
        raise ValueError("invalid frustum")
    return np.array(
        [
            [2 * near / (right - left), 0.0, (right + left) / (right - left), 0.0],
            [0.0, 2 * near / (top - bottom), (top + bottom) / (top - bottom), 0.0],
            [0.0, 0.0, -(far + near) / (far - near), -2 * far * near / (far - near)],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


class MatrixStack:
    """A current matrix with a stack of saved copies.

    Every operation post-multiplies the current matrix, so the most
    recent transform applies to vertices first.
    """

    def __init__(self, matrix=None) -> None:
        self.matrix = identity() if matrix is None else self._as_matrix(matrix)
        self._stack: list[np.ndarray] = []

    @staticmethod
    def _as_matrix(matrix) -> np.ndarray:
        result = np.array(matrix, dtype=float)
        if result.shape != (4, 4):
            raise ValueError("expected a 4x4 matrix")
        return result

    def __len__(self) -> int:
        return len(self._stack)

    def load_identity(self) -> None:
        self.matrix = identity()

    def load(self, matrix) -> None:
        self.matrix = self._as_matrix(matrix)

    def multiply(self, matrix) -> None:
        self.matrix = self.matrix @ self._as_matrix(matrix)

    def rotate(self, angle: float, x: float, y: float, z: float) -> None:
        self.matrix = self.matrix @ rotation(angle, x, y, z)

    def translate(self, x: float, y: float, z: float) -> None:
        self.matrix = self.matrix @ translation(x, y, z)

    def push(self) -> None:
        self._stack.append(self.matrix.copy())

    def pop(self) -> None:
        if not self._stack:
            raise IndexError("matrix stack is empty")
        self.matrix = self._stack.pop()

    @contextmanager
    def saved(self) -> Iterator["MatrixStack"]:
        """Restore the current matrix when the block ends."""
        self.push()
        try:
            yield self
        finally:
            self.pop()