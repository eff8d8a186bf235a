"""The renderer: viewports, the shared quad batch and frame bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from sibox.batch import QuadBatch, RendererData, RenderStats
from sibox.render_buffer import BufferElement, BufferLayout, ShaderDataType
from sibox.shader_library import ShaderLibrary
from sibox.viewport import Viewport

logger = logging.getLogger(__name__)

# Each tile quad is very slightly larger than 1x1 so neighbouring tiles leave no seams.
TILE_QUAD_POSITIONS = (
    (0.0, 0.0, 0.0),
    (1.0001, 0.0, 0.0),
    (1.0001, 1.0001, 0.0),
    (0.0, 1.0001, 0.0),
)
TILE_QUAD_INDICES = (0, 1, 2, 2, 3, 0)

IGNORED_DEBUG_MESSAGE_IDS = frozenset({131185})


@dataclass
class RendererSpecification:
    vsync: bool = False


class DebugSource(IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class DebugType(IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268


class DebugSeverity(IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


_SOURCE_NAMES = {
    DebugSource.API: "API",
    DebugSource.WINDOW_SYSTEM: "Window System",
    DebugSource.SHADER_COMPILER: "Shader Compiler",
    DebugSource.THIRD_PARTY: "Third Party",
    DebugSource.APPLICATION: "Application",
    DebugSource.OTHER: "Other",
}

_TYPE_NAMES = {
    DebugType.ERROR: "Error",
    DebugType.DEPRECATED_BEHAVIOR: "Deprecated Behaviour",
    DebugType.UNDEFINED_BEHAVIOR: "Undefined Behaviour",
    DebugType.PORTABILITY: "Portability",
    DebugType.PERFORMANCE: "Performance",
    DebugType.OTHER: "Other",
    DebugType.MARKER: "Marker",
}

_SEVERITY_NAMES = {
    DebugSeverity.HIGH: "High",
    DebugSeverity.MEDIUM: "Medium",
    DebugSeverity.LOW: "Low",
    DebugSeverity.NOTIFICATION: "Notification",
}


def format_gl_debug_message(source, message_type, message_id, severity, message) -> Optional[str]:
    """Describe a graphics debug message, or None for notifications and ignored ids."""
    if severity == DebugSeverity.NOTIFICATION:
        return None
    if message_id in IGNORED_DEBUG_MESSAGE_IDS:
        return None
    source_text = _SOURCE_NAMES.get(source, "Unknown")
    type_text = _TYPE_NAMES.get(message_type, "Unknown")
    severity_text = _SEVERITY_NAMES.get(severity, "Unknown")
    return (
        f"OpenGL Error ({severity_text} severity, id: {message_id}): "
        f"from {source_text}, {type_text}: {message}"
    )


def tile_quad_layout() -> BufferLayout:
    """Layout of the vertices of the shared tile quad."""
    return BufferLayout([BufferElement("a_Position", ShaderDataType.FLOAT3)])


class Renderer:
    """Owns the viewports and the quad batch, and renders them frame by frame.

    Usable as a context manager; leaving the block shuts the renderer down.
    """

    def __init__(
        self,
        specification: Optional[RendererSpecification] = None,
        max_texture_slots: int = 32,
        max_quads: int = 20000,
        submit: Optional[Callable[[object], object]] = None,
    ) -> None:
        self.specification = specification if specification is not None else RendererSpecification()
        self.shaders = ShaderLibrary()
        self.debug_ui_callbacks: list[Callable[[], object]] = []
        self._data: Optional[RendererData] = RendererData(max_texture_slots=max_texture_slots)
        self._quad_batch: Optional[QuadBatch] = QuadBatch(self._data, max_quads, submit)
        self._viewports: list[Viewport] = []
        self._current_viewport: Optional[Viewport] = None
        self._initialised = True
        logger.info("Initialised renderer")
        logger.info("   VSync: %s", "On" if self.specification.vsync else "Off")

    def __enter__(self) -> "Renderer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def _require_initialised(self) -> None:
        if not self._initialised:
            raise RuntimeError("renderer has been shut down")

    @property
    def initialised(self) -> bool:
        return self._initialised

    @property
    def data(self) -> RendererData:
        self._require_initialised()
        return self._data  # type: ignore[return-value]

    @property
    def stats(self) -> RenderStats:
        return self.data.stats

    @property
    def quad_batch(self) -> QuadBatch:
        self._require_initialised()
        return self._quad_batch  # type: ignore[return-value]

    @property
    def viewports(self) -> tuple[Viewport, ...]:
        return tuple(self._viewports)

    @property
    def current_viewport(self) -> Optional[Viewport]:
        """The viewport being rendered, or None outside of rendering."""
        return self._current_viewport

    def begin_frame(self) -> None:
        """Start a new frame: the statistics start from zero."""
        self.data.stats.reset()

    def render(self) -> None:
        """Render every viewport in order, flushing the batch after each, then the debug UI."""
        batch = self.quad_batch
        try:
            for viewport in self._viewports:
                self._current_viewport = viewport
                batch.viewport = viewport
                viewport.render()
                batch.flush()
        finally:
            self._current_viewport = None
            batch.viewport = None
        for callback in self.debug_ui_callbacks:
            callback()

    def create_viewport(self, size) -> Viewport:
        """Add a viewport of the given size and return it."""
        self._require_initialised()
        viewport = Viewport()
        viewport.set_size(size)
        self._viewports.append(viewport)
        return viewport

    def remove_viewport(self, viewport: Viewport) -> bool:
        """Remove a viewport; False (with a warning) if it was never added."""
        try:
            self._viewports.remove(viewport)
        except ValueError:
            logger.warning("Attempted to remove a viewport that has not been added!")
            return False
        return True

    def on_window_resize(self, size) -> None:
        """Fit the first viewport to the new window size."""
        if self._viewports:
            self._viewports[0].set_size(size)

    def set_vsync(self, enabled: bool) -> None:
        self.specification.vsync = bool(enabled)

    def shutdown(self) -> None:
        """Release shaders, batches and viewports; does nothing if already shut down."""
        if not self._initialised:
            return
        logger.debug("Shutting down renderer")
        self.shaders.clear()
        self._quad_batch = None
        self._viewports.clear()
        self._current_viewport = None
        self._data = None
        self._initialised = False