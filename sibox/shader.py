"""Shader programs assembled from GLSL stage sources."""

from __future__ import annotations

import itertools
import logging
import re
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


class ShaderStage(IntEnum):
    VERTEX = 0x8B31
    FRAGMENT = 0x8B30
    GEOMETRY = 0x8DD9
    TESS_EVALUATION = 0x8E87
    TESS_CONTROL = 0x8E88
    COMPUTE = 0x91B9


class ShaderError(Exception):
    """Raised when a shader stage cannot be added or a program cannot be linked."""


_STAGE_NAMES = {
    ShaderStage.VERTEX: "Vertex Shader",
    ShaderStage.FRAGMENT: "Fragment Shader",
    ShaderStage.GEOMETRY: "Geometry Shader",
    ShaderStage.TESS_CONTROL: "Tessellation Control Shader",
    ShaderStage.TESS_EVALUATION: "Tessellation Evaluation Shader",
    ShaderStage.COMPUTE: "Compute Shader",
}

_COMMENT_PATTERN = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_UNIFORM_PATTERN = re.compile(
    r"\buniform\s+(?:(?:lowp|mediump|highp)\s+)?[A-Za-z_]\w*\s+([A-Za-z_]\w*)"
)

_program_ids = itertools.count(1)
_stage_ids = itertools.count(1)


def is_valid_shader_stage(value) -> bool:
    """True if the value names one of the supported shader stages."""
    try:
        ShaderStage(value)
    except (ValueError, TypeError):
        return False
    return True


def shader_type_string(stage) -> str:
    """Human-readable name of a shader stage."""
    return _STAGE_NAMES.get(stage, "Unknown Shader Type")


@dataclass(frozen=True)
class _CompiledStage:
    stage_id: int
    stage: ShaderStage
    source: str


def _declared_uniforms(source: str) -> list[str]:
    return _UNIFORM_PATTERN.findall(_COMMENT_PATTERN.sub("", source))


class Shader:
    """A shader program: stages are added, then linked, then uniforms are set."""

    def __init__(self, name: str = "Untitled Shader") -> None:
        self.name = name
        self.program_id = next(_program_ids)
        self.two_sided = False
        self._stages: list[_CompiledStage] = []
        self._uniform_locations: dict[str, int] = {}
        self._uniform_values: dict[str, Any] = {}
        self._attributes: dict[str, int] = {}
        self._used_vertex_attributes = 0
        self._is_complete = False
        self._has_error = False

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def used_vertex_attributes(self) -> int:
        return self._used_vertex_attributes

    @property
    def attribute_locations(self) -> dict[str, int]:
        return dict(self._attributes)

    @property
    def uniform_names(self) -> tuple[str, ...]:
        return tuple(self._uniform_locations)

    @property
    def stage_sources(self) -> tuple[tuple[ShaderStage, str], ...]:
        """Stages added but not yet linked, with their (trimmed) sources."""
        return tuple((s.stage, s.source) for s in self._stages)

    def add_stage_from_source(self, stage, source: str) -> int:
        """Add a stage from GLSL source and return its stage id.

        Anything before the first ``#`` (such as a byte-order mark) is dropped.
        """
        if self._is_complete:
            raise ShaderError(
                f'in shader "{self.name}", attempting to add a stage to a linked shader'
            )
        if not is_valid_shader_stage(stage):
            raise ShaderError(
                f'shader "{self.name}" given an invalid stage: {stage!r}; should be one of '
                + ", ".join(s.name for s in ShaderStage)
            )
        start = source.find("#")
        if start == -1:
            raise ShaderError(
                f'shader "{self.name}" given invalid source: it did not begin with a #version'
            )
        compiled = _CompiledStage(next(_stage_ids), ShaderStage(stage), source[start:])
        self._stages.append(compiled)
        return compiled.stage_id

    def add_stage_from_file(self, stage, path: Union[str, PathLike]) -> int:
        """Read a stage's source from a file and add it."""
        if self._is_complete:
            raise ShaderError(
                f'in shader "{self.name}", attempting to add a stage to a linked shader'
            )
        try:
            source = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ShaderError(f'failed to open shader source "{path}": {exc}') from exc
        return self.add_stage_from_source(stage, source)

    def bind_attribute(self, attribute: int, variable_name: str) -> None:
        """Bind a vertex attribute location to a named shader input."""
        if attribute < 0:
            raise ValueError("attribute location must not be negative")
        self._attributes[variable_name] = attribute
        self._used_vertex_attributes = max(self._used_vertex_attributes, attribute + 1)

    def _link_problem(self) -> str | None:
        if not self._stages:
            return "no shader stages attached"
        counts = Counter(s.stage for s in self._stages)
        duplicated = [shader_type_string(stage) for stage, n in counts.items() if n > 1]
        if duplicated:
            return "more than one " + ", ".join(duplicated)
        if ShaderStage.COMPUTE in counts and len(counts) > 1:
            return "a compute shader cannot be linked with other stages"
        return None

    def link_program(self) -> int:
        """Link the added stages into a program and return the program id."""
        if self._is_complete:
            raise ShaderError(f'shader "{self.name}" is already linked')

        problem = self._link_problem()
        if problem is not None:
            self._has_error = True
            self._stages.clear()
            raise ShaderError(f"failed to link shader {self.name}: {problem}")

        for compiled in self._stages:
            for uniform in _declared_uniforms(compiled.source):
                self._uniform_locations.setdefault(uniform, len(self._uniform_locations))
        self._stages.clear()
        self._is_complete = True
        logger.info("Created shader program %s!", self.name)
        return self.program_id

    def uniform_location(self, name: str) -> int:
        """Location of a uniform, or -1 (with a warning) if it is not declared."""
        location = self._uniform_locations.get(name, -1)
        if location == -1:
            logger.warning('Uniform "%s" not found in shader "%s"', name, self.name)
        return location

    def set_uniform(self, name: str, value) -> None:
        """Set a uniform's value; values for undeclared uniforms are ignored."""
        if self.uniform_location(name) == -1:
            return
        self._uniform_values[name] = value

    def uniform(self, name: str):
        """The value last set for a uniform."""
        try:
            return self._uniform_values[name]
        except KeyError:
            raise KeyError(f'uniform "{name}" has not been set in shader "{self.name}"') from None

    def clean_up(self) -> None:
        """Release the program; its id becomes 0."""
        self.program_id = 0

    def __repr__(self) -> str:
        return f"Shader(name={self.name!r}, id={self.program_id}, complete={self._is_complete})"