"""Textures held as pixel data, with the specification that describes them."""

from __future__ import annotations

import dataclasses
import itertools
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from typing import Union

from PIL import Image, UnidentifiedImageError


class WrapMode(IntEnum):
    REPEAT = 0x2901
    MIRRORED_REPEAT = 0x8370
    CLAMP_TO_EDGE = 0x812F
    CLAMP_TO_BORDER = 0x812D


class FilterMode(IntEnum):
    NEAREST = 0x2600
    LINEAR = 0x2601


class TextureFormat(IntEnum):
    RGBA8 = 0x8058
    RGB8 = 0x8051


class TextureError(Exception):
    """Raised when a texture cannot be loaded."""


_CHANNELS = {TextureFormat.RGBA8: 4, TextureFormat.RGB8: 3}
_GL_FORMATS = {TextureFormat.RGBA8: 0x1908, TextureFormat.RGB8: 0x1907}
_IMAGE_MODES = {TextureFormat.RGBA8: "RGBA", TextureFormat.RGB8: "RGB"}


def channels_from_format(texture_format) -> int:
    """Number of colour channels in a texture format."""
    try:
        return _CHANNELS[texture_format]
    except KeyError:
        raise ValueError(f"invalid texture format: {texture_format!r}") from None


def format_to_gl_format(texture_format) -> int:
    """Pixel-transfer format matching a texture's storage format."""
    try:
        return _GL_FORMATS[texture_format]
    except KeyError:
        raise ValueError(f"invalid texture format: {texture_format!r}") from None


@dataclass
class TextureSpecification:
    flip_vertically: bool = True
    generate_mipmaps: bool = True
    format: TextureFormat = TextureFormat.RGBA8
    wrap: WrapMode = WrapMode.REPEAT
    min_filter: FilterMode = FilterMode.LINEAR
    mag_filter: FilterMode = FilterMode.LINEAR
    width: int = 0
    height: int = 0


_texture_ids = itertools.count(1)


class Texture:
    """A 2D texture: a specification, its pixel bytes and a unique id."""

    def __init__(self, spec: TextureSpecification | None = None) -> None:
        self.spec = dataclasses.replace(spec) if spec is not None else TextureSpecification()
        if self.spec.width < 0 or self.spec.height < 0:
            raise ValueError("texture dimensions must not be negative")
        channels_from_format(self.spec.format)
        self.texture_id = next(_texture_ids)
        self.pixels = bytes(self.data_size())

    @classmethod
    def from_file(
        cls,
        filename: Union[str, PathLike],
        spec: TextureSpecification | None = None,
    ) -> "Texture":
        """Load an image file into a new texture, sized to the image."""
        spec = dataclasses.replace(spec) if spec is not None else TextureSpecification()
        mode = _IMAGE_MODES.get(spec.format)
        if mode is None:
            raise ValueError(f"invalid texture format: {spec.format!r}")
        try:
            with Image.open(filename) as image:
                converted = image.convert(mode)
        except (OSError, UnidentifiedImageError) as exc:
            raise TextureError(f"failed to load texture {str(filename)!r}: {exc}") from exc
        if spec.flip_vertically:
            converted = converted.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        spec.width, spec.height = converted.size
        texture = cls(spec)
        texture.set_data(converted.tobytes())
        return texture

    @property
    def width(self) -> int:
        return self.spec.width

    @property
    def height(self) -> int:
        return self.spec.height

    def channels(self) -> int:
        return channels_from_format(self.spec.format)

    def data_size(self) -> int:
        """Number of bytes of pixel data the texture holds."""
        return self.spec.width * self.spec.height * self.channels()

    def set_data(self, data) -> None:
        """Replace the pixel data; its size must match the texture exactly."""
        data = bytes(data)
        if len(data) != self.data_size():
            raise ValueError(
                f"buffer size {len(data)} doesn't match texture size {self.data_size()}"
            )
        self.pixels = data

    def is_valid(self) -> bool:
        return self.texture_id != 0

    def clean_up(self) -> None:
        """Release the texture; it is no longer valid afterwards."""
        self.texture_id = 0
        self.pixels = b""

    def __repr__(self) -> str:
        return (
            f"Texture(id={self.texture_id}, {self.spec.width}x{self.spec.height}, "
            f"{self.spec.format.name})"
        )