"""A first-person fly camera driven by keyboard movement and mouse look."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from voxelcraft.matrix import look_at, normalize

_WORLD_UP = np.array([0.0, 1.0, 0.0])
_PITCH_LIMIT = 89.0


@dataclass
class Camera:
    """Camera position and orientation; angles are in degrees."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    yaw: float = -90.0
    pitch: float = 0.0
    speed: float = 10.0
    mouse_sens: float = 0.1
    first_mouse: bool = True
    last_x: float = 0.0
    last_y: float = 0.0

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)

    def direction(self) -> np.ndarray:
        """Unit vector the camera looks along."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        return normalize(
            (
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            )
        )

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.position + self.direction(), _WORLD_UP)

    def _right(self) -> np.ndarray:
        return normalize(np.cross(self.direction(), _WORLD_UP))

    def move_forward(self, dt: float) -> None:
        self.position = self.position + self.direction() * (dt * self.speed)

    def move_backward(self, dt: float) -> None:
        self.position = self.position - self.direction() * (dt * self.speed)

    def move_right(self, dt: float) -> None:
        self.position = self.position + self._right() * (dt * self.speed)

    def move_left(self, dt: float) -> None:
        self.position = self.position - self._right() * (dt * self.speed)

    def process_mouse(self, x: float, y: float) -> None:
        """Turn the camera by the cursor's movement since the last call."""
        if self.first_mouse:
            self.last_x = x
            self.last_y = y
            self.first_mouse = False
            return

        dx = (x - self.last_x) * self.mouse_sens
        dy = (self.last_y - y) * self.mouse_sens
        self.last_x = x
        self.last_y = y

        self.yaw += dx
        self.pitch = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, self.pitch + dy))