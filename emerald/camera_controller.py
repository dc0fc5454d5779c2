"""Keyboard and mouse control of an orthographic camera."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from emerald.camera import OrthographicCamera
from emerald.codes import KeyCode
from emerald.events import Event, EventDispatcher, MouseScrolledEvent, WindowResizeEvent
from emerald.timestep import Timestep

_TRANSLATION_SPEED_PER_ZOOM = 1.25
_ROTATION_SPEED = 90.0
_ZOOM_STEP = 0.25
_MIN_ZOOM = 0.25
_MAX_ZOOM = 10.0

_NO_KEYS_HELD: frozenset[KeyCode] = frozenset()


class OrthographicCameraController:
    """Moves a camera with W/A/S/D, turns it with Q/E, zooms on scroll.

    ``is_key_pressed`` answers whether a key is held; without it no key is.
    """

    def __init__(
        self,
        aspect_ratio: float,
        variable_zoom: bool = False,
        rotation: bool = False,
        is_key_pressed: Callable[[KeyCode], bool] | None = None,
    ) -> None:
        self.aspect_ratio = float(aspect_ratio)
        self._zoom_level = 1.0
        self.camera = OrthographicCamera(
            -self.aspect_ratio * self._zoom_level,
            self.aspect_ratio * self._zoom_level,
            -self._zoom_level,
            self._zoom_level,
        )
        self.variable_zoom = variable_zoom
        self.rotation_enabled = rotation
        self._is_key_pressed = is_key_pressed or _NO_KEYS_HELD.__contains__
        self._position = np.zeros(3)
        self._camera_rotation = 0.0
        self.translation_speed = 0.0
        self.rotation_speed = _ROTATION_SPEED

    @property
    def zoom_level(self) -> float:
        return self._zoom_level

    @zoom_level.setter
    def zoom_level(self, level: float) -> None:
        self._zoom_level = float(level)
        self._calculate_view()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    def on_update(self, timestep: Timestep | float) -> None:
        """Apply held keys for one frame."""
        dt = float(timestep)
        pressed = self._is_key_pressed
        self.translation_speed = self._zoom_level * _TRANSLATION_SPEED_PER_ZOOM
        step = self.translation_speed * dt
        theta = math.radians(self._camera_rotation)
        forward = np.array([-math.sin(theta), math.cos(theta), 0.0])
        right = np.array([math.cos(theta), math.sin(theta), 0.0])

        if pressed(KeyCode.W):
            self._position += forward * step
        if pressed(KeyCode.A):
            self._position -= right * step
        if pressed(KeyCode.S):
            self._position -= forward * step
        if pressed(KeyCode.D):
            self._position += right * step

        if self.rotation_enabled:
            if pressed(KeyCode.Q):
                self._camera_rotation -= self.rotation_speed * dt
            if pressed(KeyCode.E):
                self._camera_rotation += self.rotation_speed * dt
            if self._camera_rotation > 180.0:
                self._camera_rotation -= 360.0
            elif self._camera_rotation <= -180.0:
                self._camera_rotation += 360.0
            self.camera.rotation = self._camera_rotation

        self.camera.position = self._position

    def on_event(self, event: Event) -> None:
        """React to scrolling (when zoom is variable) and window resizes."""
        dispatcher = EventDispatcher(event)
        if self.variable_zoom:
            dispatcher.dispatch(MouseScrolledEvent, self._on_mouse_scrolled)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resized)

    def _calculate_view(self) -> None:
        self.camera.set_projection(
            -self.aspect_ratio * self._zoom_level,
            self.aspect_ratio * self._zoom_level,
            -self._zoom_level,
            self._zoom_level,
        )

    def _on_mouse_scrolled(self, event: MouseScrolledEvent) -> bool:
        zoom = self._zoom_level - event.y_offset * _ZOOM_STEP
        self._zoom_level = min(max(zoom, _MIN_ZOOM), _MAX_ZOOM)
        self._calculate_view()
        return False

    def _on_window_resized(self, event: WindowResizeEvent) -> bool:
        self.aspect_ratio = float(event.width) / float(event.height)
        self._calculate_view()
        return False