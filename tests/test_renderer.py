import numpy as np
import pytest

from sibox.camera import Camera
from sibox.renderer import (
    TILE_QUAD_INDICES,
    TILE_QUAD_POSITIONS,
    DebugSeverity,
    DebugSource,
    DebugType,
    Renderer,
    RendererSpecification,
    format_gl_debug_message,
    tile_quad_layout,
)


class _World:
    def __init__(self, renderer, quads):
        self.renderer = renderer
        self.quads = quads
        self.calls = 0

    def render(self):
        self.calls += 1
        for _ in range(self.quads):
            self.renderer.quad_batch.draw_quad((0, 0, 0), (1, 1), (1, 1, 1, 1))


def test_format_debug_message_full():
    text = format_gl_debug_message(DebugSource.API, DebugType.ERROR, 7, DebugSeverity.HIGH, "bad")
    assert text == "OpenGL Error (High severity, id: 7): from API, Error: bad"


def test_format_debug_message_notification_ignored():
    assert (
        format_gl_debug_message(
            DebugSource.API, DebugType.OTHER, 1, DebugSeverity.NOTIFICATION, "info"
        )
        is None
    )


def test_format_debug_message_ignored_id():
    assert (
        format_gl_debug_message(DebugSource.API, DebugType.ERROR, 131185, DebugSeverity.LOW, "x")
        is None
    )


def test_format_debug_message_unknown_values():
    text = format_gl_debug_message(1, 2, 3, 4, "msg")
    assert text == "OpenGL Error (Unknown severity, id: 3): from Unknown, Unknown: msg"


def test_tile_quad_data():
    assert TILE_QUAD_INDICES == (0, 1, 2, 2, 3, 0)
    assert len(TILE_QUAD_POSITIONS) == 4
    layout = tile_quad_layout()
    assert layout.stride == 12


def test_create_viewport_sets_size():
    renderer = Renderer()
    viewport = renderer.create_viewport((800, 600))
    assert viewport.size == (800, 600)
    assert renderer.viewports == (viewport,)


def test_remove_viewport():
    renderer = Renderer()
    viewport = renderer.create_viewport((10, 10))
    assert renderer.remove_viewport(viewport) is True
    assert renderer.viewports == ()
    assert renderer.remove_viewport(viewport) is False


def test_window_resize_affects_first_viewport_only():
    renderer = Renderer()
    first = renderer.create_viewport((10, 10))
    second = renderer.create_viewport((20, 20))
    renderer.on_window_resize((640, 480))
    assert first.size == (640, 480)
    assert second.size == (20, 20)


def test_window_resize_updates_camera_aspect():
    renderer = Renderer()
    viewport = renderer.create_viewport((10, 10))
    camera = Camera()
    viewport.set_camera(camera)
    renderer.on_window_resize((200, 100))
    assert camera.aspect == pytest.approx(2.0)


def test_render_flushes_each_viewport():
    submissions = []
    renderer = Renderer(submit=submissions.append)
    viewport = renderer.create_viewport((100, 50))
    camera = Camera()
    viewport.set_camera(camera)
    world = _World(renderer, 3)
    viewport.world = world
    renderer.begin_frame()
    renderer.render()
    assert world.calls == 1
    assert renderer.stats.draw_calls == 1
    assert renderer.stats.quad_count == 3
    assert len(submissions) == 1
    assert submissions[0].index_count == 18
    np.testing.assert_allclose(
        submissions[0].view_projection, camera.orthographic_view_proj_matrix()
    )
    assert renderer.current_viewport is None
    assert renderer.quad_batch.index_count == 0


def test_begin_frame_resets_stats():
    renderer = Renderer()
    renderer.stats.draw_calls = 5
    renderer.stats.quad_count = 2
    renderer.begin_frame()
    assert renderer.stats.total_quads() == 0
    assert renderer.stats.draw_calls == 0


def test_debug_ui_callbacks_run_after_viewports():
    renderer = Renderer()
    order = []
    viewport = renderer.create_viewport((4, 4))

    class World:
        def render(self):
            order.append("world")

    viewport.world = World()
    renderer.debug_ui_callbacks.append(lambda: order.append("ui"))
    renderer.render()
    assert order == ["world", "ui"]


def test_set_vsync():
    renderer = Renderer(RendererSpecification(vsync=False))
    renderer.set_vsync(True)
    assert renderer.specification.vsync is True


def test_texture_slots_capped():
    renderer = Renderer(max_texture_slots=64)
    assert renderer.data.max_texture_slots == 32


def test_shutdown():
    renderer = Renderer()
    renderer.create_viewport((1, 1))
    renderer.shaders.create_shader("Quad")
    renderer.shutdown()
    assert renderer.initialised is False
    assert renderer.viewports == ()
    assert len(renderer.shaders) == 0
    with pytest.raises(RuntimeError):
        renderer.begin_frame()
    renderer.shutdown()
    assert renderer.initialised is False


def test_context_manager_shuts_down():
    with Renderer() as renderer:
        renderer.create_viewport((2, 2))
        assert renderer.initialised is True
    assert renderer.initialised is False
    with pytest.raises(RuntimeError):
        renderer.create_viewport((2, 2))