"""Camera transforms, projections and the visible rectangle."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from sibox.vector import Vector2


def _vec3(value, name: str) -> np.ndarray:
    array = np.asarray(value, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"{name} must have three components")
    return array.copy()


@dataclass
class Transform:
    """Position, Euler rotation in radians (applied X, then Y, then Z) and scale."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = _vec3(self.position, "position")
        self.rotation = _vec3(self.rotation, "rotation")
        self.scale = _vec3(self.scale, "scale")

    def matrix(self) -> np.ndarray:
        """4x4 matrix: translation * rotation * scale, acting on column vectors."""
        rx, ry, rz = self.rotation
        cx, sx = math.cos(rx), math.sin(rx)
        cy, sy = math.cos(ry), math.sin(ry)
        cz, sz = math.cos(rz), math.sin(rz)
        rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
        rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
        rot_z = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
        result = np.eye(4)
        result[:3, :3] = rot_z @ rot_y @ rot_x @ np.diag(self.scale)
        result[:3, 3] = self.position
        return result


@dataclass
class Rect:
    """An axis-aligned rectangle given by its minimum corner and size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def size(self) -> Vector2:
        return Vector2(self.width, self.height)

    def overlaps_with(self, other: "Rect") -> bool:
        """True if the two rectangles share some area."""
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )


def _perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    if aspect == 0:
        raise ValueError("camera aspect ratio must not be zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    focal = 1.0 / math.tan(fovy / 2.0)
    result = np.zeros((4, 4))
    result[0, 0] = focal / aspect
    result[1, 1] = focal
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def _ortho(left, right, bottom, top, near, far) -> np.ndarray:
    if right == left or top == bottom:
        raise ValueError("orthographic view has no area; is the aspect ratio zero?")
    if far == near:
        raise ValueError("near and far planes must differ")
    result = np.eye(4)
    result[0, 0] = 2.0 / (right - left)
    result[1, 1] = 2.0 / (top - bottom)
    result[2, 2] = -2.0 / (far - near)
    result[0, 3] = -(right + left) / (right - left)
    result[1, 3] = -(top + bottom) / (top - bottom)
    result[2, 3] = -(far + near) / (far - near)
    return result


@dataclass
class Camera:
    """A camera; ``fov`` is the vertical field of view in radians."""

    transform: Transform = field(default_factory=Transform)
    fov: float = 90.0
    ortho_size: float = 24.0
    near_plane: float = 0.1
    far_plane: float = 1000.0
    aspect: float = 0.0

    def view_matrix(self) -> np.ndarray:
        return np.linalg.inv(self.transform.matrix())

    def perspective_view_proj_matrix(self) -> np.ndarray:
        projection = _perspective(self.fov, self.aspect, self.near_plane, self.far_plane)
        return projection @ self.view_matrix()

    def orthographic_view_proj_matrix(self) -> np.ndarray:
        half_height = self.ortho_size / 2.0
        half_width = self.ortho_size * self.aspect / 2.0
        projection = _ortho(
            -half_width, half_width, -half_height, half_height, self.near_plane, self.far_plane
        )
        return projection @ self.view_matrix()

    def camera_rect(self) -> Rect:
        """The world-space rectangle the orthographic view covers."""
        height = self.ortho_size
        width = height * self.aspect
        x, y = self.transform.position[0], self.transform.position[1]
        return Rect(float(x - width / 2), float(y - height / 2), float(width), float(height))

    def rect_overlaps_camera(self, rect: Rect) -> bool:
        return rect.overlaps_with(self.camera_rect())