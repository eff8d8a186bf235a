"""A named collection of shaders."""

from __future__ import annotations

import logging
from typing import Iterator

from sibox.shader import Shader

logger = logging.getLogger(__name__)


class ShaderLibrary:
    """Shaders registered under unique names."""

    def __init__(self) -> None:
        self._shaders: dict[str, Shader] = {}

    def create_shader(self, name: str) -> Shader:
        """Create a new shader and register it under its name."""
        shader = Shader(name)
        self.add_shader(shader, name)
        return shader

    def get_shader(self, name: str) -> Shader | None:
        """The shader registered under a name, or None (with a warning)."""
        shader = self._shaders.get(name)
        if shader is None:
            logger.warning('Shader "%s" not found in library', name)
        return shader

    def add_shader(self, shader: Shader, name: str | None = None) -> None:
        """Register a shader, by default under its own name."""
        key = shader.name if name is None else name
        if key in self._shaders:
            raise ValueError(f'shader with name "{key}" already exists in library')
        self._shaders[key] = shader

    def remove_shader(self, name: str) -> bool:
        """Remove a shader; False (with a warning) if none has that name."""
        if self._shaders.pop(name, None) is None:
            logger.warning('Shader "%s" not found in library', name)
            return False
        return True

    def clear(self) -> None:
        self._shaders.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._shaders

    def __len__(self) -> int:
        return len(self._shaders)

    def __iter__(self) -> Iterator[str]:
        return iter(self._shaders)