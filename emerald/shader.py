"""Shader sources, their parsing from combined files, and a named library of shaders."""

from __future__ import annotations

import copy
import os
import re
from enum import Enum
from typing import Any, Mapping


class ShaderError(Exception):
    """A shader source or library operation failed."""


class ShaderType(Enum):
    """Pipeline stage a shader source belongs to."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"


_TYPE_TOKEN = "#type"
_LINE_BREAK = re.compile(r"[\r\n]")
_NOT_LINE_BREAK = re.compile(r"[^\r\n]")
_TYPE_NAMES = {
    "vertex": ShaderType.VERTEX,
    "fragment": ShaderType.FRAGMENT,
    "pixel": ShaderType.FRAGMENT,
}


def _shader_type_from_string(name: str) -> ShaderType:
    try:
        return _TYPE_NAMES[name]
    except KeyError:
        raise ShaderError(f"Invalid shader type specified: {name!r}") from None


def preprocess_shader_source(source: str) -> dict[ShaderType, str]:
    """Split a combined file on ``#type <stage>`` lines into per-stage sources."""
    sources: dict[ShaderType, str] = {}
    pos = source.find(_TYPE_TOKEN)
    while pos != -1:
        eol_match = _LINE_BREAK.search(source, pos)
        if eol_match is None:
            raise ShaderError("Syntax error")
        eol = eol_match.start()
        begin = pos + len(_TYPE_TOKEN) + 1
        shader_type = _shader_type_from_string(source[begin:eol])

        next_match = _NOT_LINE_BREAK.search(source, eol)
        if next_match is None:
            raise ShaderError("Syntax error")
        next_line = next_match.start()
        pos = source.find(_TYPE_TOKEN, next_line)
        sources[shader_type] = source[next_line:] if pos == -1 else source[next_line:pos]
    return sources


def shader_name_from_path(filepath: str | os.PathLike[str]) -> str:
    """File name without directory and without its last extension."""
    path = os.fspath(filepath)
    start = max(path.rfind("/"), path.rfind("\\")) + 1
    dot = path.rfind(".")
    if dot == -1 or dot < start:
        return path[start:]
    return path[start:dot]


def read_shader_file(filepath: str | os.PathLike[str]) -> str:
    """Read a shader file verbatim, line endings included."""
    try:
        with open(filepath, "rb") as stream:
            data = stream.read()
    except OSError as exc:
        raise ShaderError(f"Could not open file '{os.fspath(filepath)}'") from exc
    return data.decode("utf-8")


class Shader:
    """Named per-stage sources together with the uniform values set on them."""

    def __init__(self, name: str, sources: Mapping[ShaderType, str]) -> None:
        self.name = name
        self.sources: dict[ShaderType, str] = dict(sources)
        self.uniforms: dict[str, Any] = {}

    @classmethod
    def from_file(cls, filepath: str | os.PathLike[str]) -> Shader:
        """Load a combined shader file; the name comes from the file name."""
        source = read_shader_file(filepath)
        return cls(shader_name_from_path(filepath), preprocess_shader_source(source))

    @classmethod
    def from_sources(cls, name: str, vertex_src: str, fragment_src: str) -> Shader:
        return cls(name, {ShaderType.VERTEX: vertex_src, ShaderType.FRAGMENT: fragment_src})

    def set_uniform(self, name: str, value: Any) -> None:
        """Record a uniform value; mutable values are copied."""
        self.uniforms[name] = copy.copy(value)

    def __repr__(self) -> str:
        stages = ", ".join(stage.value for stage in self.sources)
        return f"Shader({self.name!r}, stages=[{stages}])"


class ShaderLibrary:
    """Shaders stored under unique names."""

    def __init__(self) -> None:
        self._shaders: dict[str, Shader] = {}

    def add(self, shader: Shader, name: str | None = None) -> None:
        """Store ``shader`` under ``name`` or, by default, its own name."""
        key = shader.name if name is None else name
        if key in self._shaders:
            raise ShaderError(f"Shader already exists: {key!r}")
        self._shaders[key] = shader

    def load(self, filepath: str | os.PathLike[str], name: str | None = None) -> Shader:
        """Load a shader from a file and add it."""
        shader = Shader.from_file(filepath)
        self.add(shader, name)
        return shader

    def get(self, name: str) -> Shader:
        try:
            return self._shaders[name]
        except KeyError:
            raise KeyError(f"Shader not found: {name!r}") from None

    def exists(self, name: str) -> bool:
        return name in self._shaders

    def __contains__(self, name: object) -> bool:
        return name in self._shaders

    def __len__(self) -> int:
        return len(self._shaders)