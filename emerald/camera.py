"""Cameras and the projection and view matrices they produce."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def orthographic(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float = -1.0,
    far: float = 1.0,
) -> np.ndarray:
    """Right-handed orthographic projection mapping depth to [-1, 1]."""
    matrix = np.eye(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def _translation(offset: Sequence[float]) -> np.ndarray:
    matrix = np.eye(4)
    matrix[:3, 3] = offset
    return matrix


def _rotation_z(angle: float) -> np.ndarray:
    cos, sin = math.cos(angle), math.sin(angle)
    matrix = np.eye(4)
    matrix[0, 0] = cos
    matrix[0, 1] = -sin
    matrix[1, 0] = sin
    matrix[1, 1] = cos
    return matrix


class Camera:
    """A camera defined only by its projection matrix."""

    def __init__(self, projection: np.ndarray | None = None) -> None:
        self.projection = np.eye(4) if projection is None else np.array(projection, dtype=float)

    def __repr__(self) -> str:
        return f"Camera(projection={self.projection.tolist()!r})"


class OrthographicCamera:
    """A 2D camera with a position and a rotation about the z axis, in degrees."""

    def __init__(self, left: float, right: float, bottom: float, top: float) -> None:
        self._position = np.zeros(3)
        self._rotation = 0.0
        self._view = np.eye(4)
        self.set_projection(left, right, bottom, top)

    def set_projection(self, left: float, right: float, bottom: float, top: float) -> None:
        """Replace the projection, keeping position and rotation."""
        self._projection = orthographic(left, right, bottom, top, -1.0, 1.0)
        self._view_projection = self._projection @ self._view

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = np.array(value, dtype=float)
        self._recalculate_view()

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate_view()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection.copy()

    def _recalculate_view(self) -> None:
        transform = _translation(self._position) @ _rotation_z(math.radians(self._rotation))
        self._view = np.linalg.inv(transform)
        self._view_projection = self._projection @ self._view