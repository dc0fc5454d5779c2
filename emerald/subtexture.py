"""Textures and rectangular regions within them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(eq=False)
class Texture2D:
    """A 2D texture; two textures are equal only if they are the same object."""

    width: int
    height: int
    channels: int = 4
    path: str | None = None
    data: bytes | None = field(default=None, repr=False)

    def set_data(self, data: bytes) -> None:
        """Replace the pixel data; it must cover the whole texture."""
        bytes_per_pixel = 4 if self.channels == 4 else 3
        if len(data) != self.width * self.height * bytes_per_pixel:
            raise ValueError("Data must be entire texture!")
        self.data = bytes(data)


class SubTexture2D:
    """A rectangle of a texture, given by its corner texture coordinates."""

    def __init__(
        self,
        texture: Texture2D,
        min_coords: Sequence[float],
        max_coords: Sequence[float],
    ) -> None:
        self.texture = texture
        (x0, y0), (x1, y1) = (float(v) for v in min_coords), (float(v) for v in max_coords)
        self.texture_coords: tuple[tuple[float, float], ...] = (
            (x0, y0),
            (x1, y0),
            (x1, y1),
            (x0, y1),
        )

    @classmethod
    def from_coords(
        cls,
        texture: Texture2D,
        coords: Sequence[float],
        cell_size: Sequence[float],
        sprite_size: Sequence[float] = (1.0, 1.0),
    ) -> SubTexture2D:
        """Region of a sprite sheet by cell position, cell size and size in cells."""
        x, y = coords
        cell_w, cell_h = cell_size
        span_w, span_h = sprite_size
        minimum = ((x * cell_w) / texture.width, (y * cell_h) / texture.height)
        maximum = (
            ((x + span_w) * cell_w) / texture.width,
            ((y + span_h) * cell_h) / texture.height,
        )
        return cls(texture, minimum, maximum)