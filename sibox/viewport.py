"""A rectangular region of the window showing a world through a camera."""

from __future__ import annotations

from typing import Protocol

from sibox.camera import Camera


class Renderable(Protocol):
    def render(self) -> None: ...


class Viewport:
    """Holds a camera, the world it renders, and its offset and size in the window.

    The camera's aspect ratio follows the viewport size; a zero height leaves
    the aspect ratio unchanged.
    """

    def __init__(self) -> None:
        self.world: Renderable | None = None
        self.offset: tuple[int, int] = (0, 0)
        self.should_clear = True
        self.clear_color: tuple[float, float, float, float] = (0.1, 0.1, 0.1, 1.0)
        self._camera: Camera | None = None
        self._size: tuple[int, int] = (0, 0)

    @property
    def camera(self) -> Camera | None:
        return self._camera

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    def _update_aspect(self) -> None:
        width, height = self._size
        if self._camera is not None and height != 0:
            self._camera.aspect = width / height

    def set_camera(self, camera: Camera | None) -> None:
        self._camera = camera
        self._update_aspect()

    def set_size(self, size) -> None:
        width, height = (int(v) for v in size)
        if width < 0 or height < 0:
            raise ValueError("viewport size must not be negative")
        self._size = (width, height)
        self._update_aspect()

    def set_offset_and_size(self, offset, size) -> None:
        x, y = (int(v) for v in offset)
        self.offset = (x, y)
        self.set_size(size)

    def render(self) -> None:
        """Render the world, if one is set."""
        if self.world is not None:
            self.world.render()