"""Vertex buffer layouts and the vertex attributes they describe."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator

GL_INT = 0x1404
GL_FLOAT = 0x1406
GL_BOOL = 0x8B56


class BufferUsageType(IntEnum):
    NONE = 0
    STREAM_DRAW = 1
    STREAM_READ = 2
    STREAM_COPY = 3
    STATIC_DRAW = 4
    STATIC_READ = 5
    STATIC_COPY = 6
    DYNAMIC_DRAW = 7
    DYNAMIC_READ = 8
    DYNAMIC_COPY = 9

    def __str__(self) -> str:
        return buffer_usage_type_to_string(self)


class ShaderDataType(IntEnum):
    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11

    def __str__(self) -> str:
        return shader_data_type_to_string(self)


_USAGE_NAMES = {
    BufferUsageType.NONE: "None",
    BufferUsageType.STREAM_DRAW: "Stream Draw",
    BufferUsageType.STREAM_READ: "Stream Read",
    BufferUsageType.STREAM_COPY: "Stream Copy",
    BufferUsageType.STATIC_DRAW: "Static Draw",
    BufferUsageType.STATIC_READ: "Static Read",
    BufferUsageType.STATIC_COPY: "Static Copy",
    BufferUsageType.DYNAMIC_DRAW: "Dynamic Draw",
    BufferUsageType.DYNAMIC_READ: "Dynamic Read",
    BufferUsageType.DYNAMIC_COPY: "Dynamic Copy",
}

_DATA_TYPE_NAMES = {
    ShaderDataType.NONE: "None",
    ShaderDataType.FLOAT: "Float",
    ShaderDataType.FLOAT2: "Float2",
    ShaderDataType.FLOAT3: "Float3",
    ShaderDataType.FLOAT4: "Float4",
    ShaderDataType.MAT3: "Mat3",
    ShaderDataType.MAT4: "Mat4",
    ShaderDataType.INT: "Int",
    ShaderDataType.INT2: "Int2",
    ShaderDataType.INT3: "Int3",
    ShaderDataType.INT4: "Int4",
    ShaderDataType.BOOL: "Bool",
}

_DATA_TYPE_SIZES = {
    ShaderDataType.FLOAT: 4 * 1,
    ShaderDataType.FLOAT2: 4 * 2,
    ShaderDataType.FLOAT3: 4 * 3,
    ShaderDataType.FLOAT4: 4 * 4,
    ShaderDataType.MAT3: 4 * 3 * 3,
    ShaderDataType.MAT4: 4 * 4 * 4,
    ShaderDataType.INT: 4 * 1,
    ShaderDataType.INT2: 4 * 2,
    ShaderDataType.INT3: 4 * 3,
    ShaderDataType.INT4: 4 * 4,
    ShaderDataType.BOOL: 1,
}

_COMPONENT_COUNTS = {
    ShaderDataType.FLOAT: 1,
    ShaderDataType.FLOAT2: 2,
    ShaderDataType.FLOAT3: 3,
    ShaderDataType.FLOAT4: 4,
    ShaderDataType.MAT3: 3,
    ShaderDataType.MAT4: 4,
    ShaderDataType.INT: 1,
    ShaderDataType.INT2: 2,
    ShaderDataType.INT3: 3,
    ShaderDataType.INT4: 4,
    ShaderDataType.BOOL: 1,
}

_FLOAT_TYPES = frozenset(
    {ShaderDataType.FLOAT, ShaderDataType.FLOAT2, ShaderDataType.FLOAT3, ShaderDataType.FLOAT4}
)
_MATRIX_TYPES = frozenset({ShaderDataType.MAT3, ShaderDataType.MAT4})
_INTEGER_TYPES = frozenset(
    {
        ShaderDataType.INT,
        ShaderDataType.INT2,
        ShaderDataType.INT3,
        ShaderDataType.INT4,
        ShaderDataType.BOOL,
    }
)


def buffer_usage_type_to_string(usage) -> str:
    """Human-readable name of a buffer usage type."""
    return _USAGE_NAMES.get(usage, "Unknown")


def shader_data_type_to_string(data_type) -> str:
    """Human-readable name of a shader data type."""
    return _DATA_TYPE_NAMES.get(data_type, "Unknown")


def shader_data_type_size(data_type) -> int:
    """Size in bytes of one value of the given shader data type."""
    try:
        return _DATA_TYPE_SIZES[data_type]
    except KeyError:
        raise ValueError(f"unknown shader data type: {data_type!r}") from None


def shader_data_type_component_count(data_type) -> int:
    """Number of components (or matrix columns) of the given shader data type."""
    try:
        return _COMPONENT_COUNTS[data_type]
    except KeyError:
        raise ValueError(f"unknown shader data type: {data_type!r}") from None


def _gl_base_type(data_type: ShaderDataType) -> int:
    if data_type in _FLOAT_TYPES or data_type in _MATRIX_TYPES:
        return GL_FLOAT
    if data_type == ShaderDataType.BOOL:
        return GL_BOOL
    if data_type in _INTEGER_TYPES:
        return GL_INT
    raise ValueError(f"unknown shader data type: {data_type!r}")


@dataclass
class BufferElement:
    """One named attribute within a vertex buffer layout."""

    name: str
    data_type: ShaderDataType
    offset: int = 0
    instancing_divisor: int = 0
    normalized: bool = False
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.size = shader_data_type_size(self.data_type)

    def component_count(self) -> int:
        return shader_data_type_component_count(self.data_type)


class BufferLayout:
    """An ordered set of buffer elements with packed offsets and a stride."""

    def __init__(self, elements: Iterable[BufferElement] = ()) -> None:
        self._elements: list[BufferElement] = [dataclasses.replace(e) for e in elements]
        self._stride = 0
        self._calculate_offsets_and_stride()

    def _calculate_offsets_and_stride(self) -> None:
        offset = 0
        for element in self._elements:
            element.offset = offset
            offset += element.size
        self._stride = offset

    def add_element(self, element: BufferElement) -> None:
        """Append an element and recompute offsets and stride."""
        self._elements.append(dataclasses.replace(element))
        self._calculate_offsets_and_stride()

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def elements(self) -> tuple[BufferElement, ...]:
        return tuple(self._elements)

    def has_elements(self) -> bool:
        return bool(self._elements)

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)


@dataclass(frozen=True)
class VertexAttribute:
    """A single vertex attribute pointer derived from a layout element."""

    index: int
    component_count: int
    gl_type: int
    normalized: bool
    stride: int
    offset: int
    divisor: int
    integer: bool


def vertex_attributes(layout: BufferLayout, first_index: int = 0) -> list[VertexAttribute]:
    """Describe the attribute pointers a layout occupies, starting at ``first_index``.

    Matrices take one attribute slot per column; integer and boolean types are
    flagged as integer attributes.
    """
    if not layout.has_elements():
        raise ValueError("vertex buffer must have a layout")

    attributes: list[VertexAttribute] = []
    index = first_index
    stride = layout.stride
    for element in layout:
        gl_type = _gl_base_type(element.data_type)
        count = element.component_count()
        if element.data_type in _MATRIX_TYPES:
            column_bytes = 4 * count
            for column in range(count):
                attributes.append(
                    VertexAttribute(
                        index=index,
                        component_count=count,
                        gl_type=gl_type,
                        normalized=element.normalized,
                        stride=stride,
                        offset=element.offset + column_bytes * column,
                        divisor=element.instancing_divisor,
                        integer=False,
                    )
                )
                index += 1
        else:
            integer = element.data_type in _INTEGER_TYPES
            attributes.append(
                VertexAttribute(
                    index=index,
                    component_count=count,
                    gl_type=gl_type,
                    normalized=element.normalized and not integer,
                    stride=stride,
                    offset=element.offset,
                    divisor=element.instancing_divisor,
                    integer=integer,
                )
            )
            index += 1
    return attributes