import pytest

from sibox.camera import Camera
from sibox.viewport import Viewport


class RecordingWorld:
    def __init__(self):
        self.renders = 0

    def render(self):
        self.renders += 1


def test_set_camera_uses_size_for_aspect():
    viewport = Viewport()
    viewport.set_size((800, 600))
    camera = Camera()
    viewport.set_camera(camera)
    assert viewport.camera is camera
    assert camera.aspect == pytest.approx(800 / 600)


def test_set_size_updates_camera():
    viewport = Viewport()
    camera = Camera()
    viewport.set_camera(camera)
    viewport.set_size((1920, 1080))
    assert viewport.size == (1920, 1080)
    assert (viewport.width, viewport.height) == (1920, 1080)
    assert camera.aspect == pytest.approx(1920 / 1080)


def test_zero_height_keeps_aspect():
    viewport = Viewport()
    camera = Camera(aspect=1.5)
    viewport.set_camera(camera)
    assert camera.aspect == 1.5
    viewport.set_size((640, 0))
    assert camera.aspect == 1.5


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Viewport().set_size((-1, 10))


def test_set_offset_and_size():
    viewport = Viewport()
    camera = Camera()
    viewport.set_camera(camera)
    viewport.set_offset_and_size((10, 20), (300, 150))
    assert viewport.offset == (10, 20)
    assert viewport.size == (300, 150)
    assert camera.aspect == pytest.approx(300 / 150)


def test_render_renders_world():
    viewport = Viewport()
    world = RecordingWorld()
    viewport.world = world
    viewport.render()
    viewport.render()
    assert world.renders == 2


def test_defaults():
    viewport = Viewport()
    assert viewport.should_clear is True
    assert viewport.clear_color == (0.1, 0.1, 0.1, 1.0)
    assert viewport.camera is None