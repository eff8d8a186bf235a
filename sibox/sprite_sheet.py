"""Sprites cut out of a texture as texture-coordinate rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from sibox.texture import Texture
from sibox.vector import Vector2


@dataclass(frozen=True)
class SpriteSheetSprite:
    tex_coords_min: Vector2
    tex_coords_max: Vector2


class SpriteSheet:
    """A texture together with the sprites defined on it."""

    def __init__(self, texture: Texture | None) -> None:
        self.texture = texture
        self._sprites: list[SpriteSheetSprite] = []

    def _require_texture(self) -> Texture:
        if self.texture is None:
            raise ValueError("sprite sheet has no texture")
        if self.texture.width <= 0 or self.texture.height <= 0:
            raise ValueError("sprite sheet texture has no size")
        return self.texture

    def create_sprite(self, x: int, y: int, width: int, height: int) -> int:
        """Add a sprite from a pixel rectangle and return its id."""
        texture = self._require_texture()
        tex_width, tex_height = float(texture.width), float(texture.height)
        sprite = SpriteSheetSprite(
            Vector2(x / tex_width, y / tex_height),
            Vector2((x + width) / tex_width, (y + height) / tex_height),
        )
        self._sprites.append(sprite)
        return len(self._sprites) - 1

    def create_tiles_from_tile_size(self, tile_width: int, tile_height: int) -> int:
        """Cut the whole texture into tiles, row by row; return the sprite count."""
        texture = self._require_texture()
        if tile_width <= 0 or tile_height <= 0:
            raise ValueError("tile width and height must be positive")
        if texture.width % tile_width or texture.height % tile_height:
            raise ValueError(
                "texture width and height must be multiples of the tile width and height"
            )
        for row in range(texture.height // tile_height):
            for column in range(texture.width // tile_width):
                self.create_sprite(column * tile_width, row * tile_height, tile_width, tile_height)
        return len(self._sprites)

    def sprite(self, sprite_id: int) -> SpriteSheetSprite:
        if not 0 <= sprite_id < len(self._sprites):
            raise IndexError(f"no sprite with id {sprite_id}")
        return self._sprites[sprite_id]

    def __len__(self) -> int:
        return len(self._sprites)

    def __iter__(self) -> Iterator[SpriteSheetSprite]:
        return iter(self._sprites)