"""Batched quad drawing: vertex accumulation, texture slots and render statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

import numpy as np

from sibox.camera import Rect
from sibox.render_buffer import BufferElement, BufferLayout, ShaderDataType
from sibox.texture import Texture, TextureSpecification
from sibox.viewport import Viewport

logger = logging.getLogger(__name__)

MAX_SUPPORTED_TEXTURE_SLOTS = 32

_QUAD_CORNERS = (
    (-0.5, -0.5, 0.0),
    (0.5, -0.5, 0.0),
    (0.5, 0.5, 0.0),
    (-0.5, 0.5, 0.0),
)


def quad_indices(max_quads: int) -> np.ndarray:
    """Index buffer contents for ``max_quads`` quads, two triangles each."""
    if max_quads < 0:
        raise ValueError("quad count must not be negative")
    pattern = np.array([0, 1, 2, 2, 3, 0], dtype=np.uint32)
    bases = np.arange(max_quads, dtype=np.uint32) * 4
    return (bases[:, None] + pattern[None, :]).reshape(-1)


@dataclass
class RenderStats:
    """Counters gathered over one frame."""

    draw_calls: int = 0
    quad_count: int = 0
    tile_count: int = 0
    char_count: int = 0

    def reset(self) -> None:
        self.draw_calls = 0
        self.quad_count = 0
        self.tile_count = 0
        self.char_count = 0

    def total_quads(self) -> int:
        """Quads drawn of every kind: tiles, plain quads and characters."""
        return self.tile_count + self.quad_count + self.char_count


def _white_texture() -> Texture:
    texture = Texture(TextureSpecification(width=1, height=1, generate_mipmaps=False))
    texture.set_data(b"\xff" * 4)
    return texture


@dataclass
class RendererData:
    """State shared between the renderer and its batches.

    The number of texture slots is capped at 32, the most the shaders support.
    """

    white_texture: Texture = field(default_factory=_white_texture)
    max_texture_slots: int = MAX_SUPPORTED_TEXTURE_SLOTS
    stats: RenderStats = field(default_factory=RenderStats)

    def __post_init__(self) -> None:
        if self.max_texture_slots < 0:
            raise ValueError("texture slot count must not be negative")
        self.max_texture_slots = min(self.max_texture_slots, MAX_SUPPORTED_TEXTURE_SLOTS)


class TextureSet:
    """Textures bound to numbered slots for a single batch.

    When every slot is taken, ``on_flush`` is called so the batch can draw what
    it has and free the slots.
    """

    def __init__(self, max_slots: int = 0, on_flush: Optional[Callable[[], object]] = None) -> None:
        if max_slots < 0:
            raise ValueError("slot count must not be negative")
        self.max_slots = max_slots
        self.on_flush = on_flush
        self._slots: list[Texture] = []

    def has_texture(self, texture: Optional[Texture]) -> Optional[int]:
        """Slot index of a texture already bound, or None."""
        if texture is None:
            return None
        return next((i for i, bound in enumerate(self._slots) if bound is texture), None)

    def find_or_add_texture(self, texture: Optional[Texture]) -> int:
        """Slot of the texture, binding it to the next free slot if needed; -1 for no texture."""
        if texture is None:
            return -1
        index = self.has_texture(texture)
        if index is not None:
            return index
        if len(self._slots) >= self.max_slots and self.on_flush is not None:
            self.on_flush()
        if len(self._slots) >= self.max_slots:
            raise RuntimeError("no free texture slot")
        self._slots.append(texture)
        return len(self._slots) - 1

    def reset(self) -> None:
        self._slots.clear()

    def textures(self) -> tuple[Texture, ...]:
        """Bound textures in slot order."""
        return tuple(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Texture]:
        return iter(self._slots)


@dataclass(frozen=True)
class QuadVertex:
    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    tex_coord: tuple[float, float]
    tex_index: float


def _quad_vertex_layout() -> BufferLayout:
    return BufferLayout(
        [
            BufferElement("a_Position", ShaderDataType.FLOAT3),
            BufferElement("a_Color", ShaderDataType.FLOAT4),
            BufferElement("a_TexCoord", ShaderDataType.FLOAT2),
            BufferElement("a_TexIndex", ShaderDataType.FLOAT),
        ]
    )


@dataclass(frozen=True)
class _DrawSubmission:
    """One draw call's worth of quads, as handed to the submit callback."""

    vertices: tuple[QuadVertex, ...]
    index_count: int
    textures: tuple[Texture, ...]
    view_projection: np.ndarray


def _components(value: Sequence[float], count: int, name: str) -> tuple[float, ...]:
    values = tuple(float(v) for v in value)
    if len(values) != count:
        raise ValueError(f"{name} must have {count} components")
    return values


class QuadBatch:
    """Collects quads and draws them together in as few draw calls as possible.

    A batch is flushed when it is full, when it runs out of texture slots, or
    on request. Each flush passes the collected quads to ``submit``.
    """

    def __init__(
        self,
        data: RendererData,
        max_quads: int = 10000,
        submit: Optional[Callable[[_DrawSubmission], object]] = None,
    ) -> None:
        if max_quads <= 0:
            raise ValueError("a batch must hold at least one quad")
        self.data = data
        self.max_quads = max_quads
        self.max_vertices = max_quads * 4
        self.max_indices = max_quads * 6
        self.submit = submit
        self.viewport: Optional[Viewport] = None
        self.layout = _quad_vertex_layout()
        self.indices = quad_indices(max_quads)
        self._textures = TextureSet(data.max_texture_slots, self.flush)
        self._vertices: list[QuadVertex] = []
        self._index_count = 0

    @property
    def vertices(self) -> tuple[QuadVertex, ...]:
        return tuple(self._vertices)

    @property
    def index_count(self) -> int:
        return self._index_count

    @property
    def textures(self) -> tuple[Texture, ...]:
        return self._textures.textures()

    def _emit(self, positions, tint_color, texture, tex_coord_min, tex_coord_max) -> None:
        color = _components(tint_color, 4, "tint colour")
        min_u, min_v = _components(tex_coord_min, 2, "minimum texture coordinate")
        max_u, max_v = _components(tex_coord_max, 2, "maximum texture coordinate")

        if self._index_count >= self.max_indices:
            self.flush()
        texture_index = float(self._textures.find_or_add_texture(texture))

        for corner, position in enumerate(positions):
            u = min_u if corner in (0, 3) else max_u
            v = min_v if corner in (0, 1) else max_v
            self._vertices.append(QuadVertex(position, color, (u, v), texture_index))
        self._index_count += 6
        self.data.stats.quad_count += 1

    def draw_quad(
        self,
        position,
        size,
        tint_color,
        texture: Optional[Texture] = None,
        tex_coord_min=(0.0, 0.0),
        tex_coord_max=(1.0, 1.0),
    ) -> None:
        """Draw an axis-aligned quad centred on ``position``; no texture means plain colour."""
        cx, cy, cz = _components(position, 3, "position")
        sx, sy = _components(size, 2, "size")
        corners = [(cx + x * sx, cy + y * sy, cz + z) for x, y, z in _QUAD_CORNERS]
        self._emit(
            corners,
            tint_color,
            self.data.white_texture if texture is None else texture,
            tex_coord_min,
            tex_coord_max,
        )

    def draw_quad_transform(
        self,
        transform,
        tint_color,
        texture: Optional[Texture] = None,
        tex_coord_min=(0.0, 0.0),
        tex_coord_max=(1.0, 1.0),
    ) -> None:
        """Draw a unit quad transformed by a 4x4 matrix."""
        matrix = np.asarray(transform, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("transform must be a 4x4 matrix")
        corners = []
        for x, y, z in _QUAD_CORNERS:
            transformed = matrix @ np.array([x, y, z, 1.0])
            corners.append(tuple(float(v) for v in transformed[:3]))
        self._emit(
            corners,
            tint_color,
            self.data.white_texture if texture is None else texture,
            tex_coord_min,
            tex_coord_max,
        )

    def draw_rectangle(self, rect: Rect, colour) -> None:
        """Fill a rectangle given by its minimum corner and size."""
        self.draw_quad(
            (rect.x + rect.width / 2.0, rect.y + rect.height / 2.0, 0.0),
            (rect.width, rect.height),
            colour,
        )

    def draw_rectangle_lines(self, rect: Rect, colour, thickness: float) -> None:
        """Outline a rectangle with four quads: top, bottom, left, right."""
        mid_x = rect.x + rect.width / 2.0
        mid_y = rect.y + rect.height / 2.0
        self.draw_quad((mid_x, rect.y, 0.0), (rect.width, thickness), colour)
        self.draw_quad((mid_x, rect.y + rect.height, 0.0), (rect.width, thickness), colour)
        self.draw_quad((rect.x, mid_y, 0.0), (thickness, rect.height), colour)
        self.draw_quad((rect.x + rect.width, mid_y, 0.0), (thickness, rect.height), colour)

    def _view_projection(self) -> np.ndarray:
        if self.viewport is None:
            return np.eye(4)
        camera = self.viewport.camera
        if camera is None:
            raise ValueError("viewport has no camera")
        return camera.orthographic_view_proj_matrix()

    def flush(self) -> Optional[_DrawSubmission]:
        """Draw everything collected so far and start afresh; None if there was nothing."""
        if self._index_count == 0:
            return None
        submission = _DrawSubmission(
            vertices=tuple(self._vertices),
            index_count=self._index_count,
            textures=self._textures.textures(),
            view_projection=self._view_projection(),
        )
        if self.submit is not None:
            self.submit(submission)
        self.data.stats.draw_calls += 1
        self.reset()
        return submission

    def reset(self) -> None:
        """Discard collected quads and free all texture slots."""
        self._textures.reset()
        self._vertices.clear()
        self._index_count = 0