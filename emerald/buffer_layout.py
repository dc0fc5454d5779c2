"""Vertex attribute types and the layout of interleaved vertex data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator

_FLOAT_SIZE = 4
_INT_SIZE = 4
_BOOL_SIZE = 1


class ShaderDataType(IntEnum):
    """Type of one vertex attribute."""

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


_SIZES = {
    ShaderDataType.FLOAT: _FLOAT_SIZE,
    ShaderDataType.FLOAT2: _FLOAT_SIZE * 2,
    ShaderDataType.FLOAT3: _FLOAT_SIZE * 3,
    ShaderDataType.FLOAT4: _FLOAT_SIZE * 4,
    ShaderDataType.MAT3: _FLOAT_SIZE * 3 * 3,
    ShaderDataType.MAT4: _FLOAT_SIZE * 4 * 4,
    ShaderDataType.INT: _INT_SIZE,
    ShaderDataType.INT2: _INT_SIZE * 2,
    ShaderDataType.INT3: _INT_SIZE * 3,
    ShaderDataType.INT4: _INT_SIZE * 4,
    ShaderDataType.BOOL: _BOOL_SIZE,
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


def _lookup(table: dict[ShaderDataType, int], data_type: ShaderDataType) -> int:
    if data_type == ShaderDataType.NONE:
        raise ValueError("ShaderDataType.NONE not allowed")
    try:
        return table[ShaderDataType(data_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown ShaderDataType {data_type!r}") from None


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of one attribute of the given type."""
    return _lookup(_SIZES, data_type)


@dataclass
class BufferElement:
    """One named attribute within a vertex."""

    data_type: ShaderDataType
    name: str
    normalized: bool = False
    size: int = field(init=False)
    offset: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.size = shader_data_type_size(self.data_type)

    def component_count(self) -> int:
        """Number of components; a matrix counts its columns."""
        return _lookup(_COMPONENT_COUNTS, self.data_type)


class BufferLayout:
    """Ordered attributes with byte offsets and the total vertex stride."""

    def __init__(self, elements: Iterable[BufferElement] = ()) -> None:
        self.elements: list[BufferElement] = list(elements)
        self.stride = 0
        for element in self.elements:
            element.offset = self.stride
            self.stride += element.size

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)