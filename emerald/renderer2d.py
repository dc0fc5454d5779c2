"""Batched 2D quad rendering on top of a pluggable render backend."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

import numpy as np

from emerald.camera import Camera, OrthographicCamera
from emerald.shader import Shader
from emerald.subtexture import SubTexture2D, Texture2D

MAX_QUADS = 100_000
MAX_TEXTURE_SLOTS = 32

_QUAD_VERTEX_POSITIONS = np.array(
    [
        [-0.5, -0.5, 0.0, 1.0],
        [0.5, -0.5, 0.0, 1.0],
        [0.5, 0.5, 0.0, 1.0],
        [-0.5, 0.5, 0.0, 1.0],
    ]
)
_TEXTURE_COORDS: tuple[tuple[float, float], ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (1.0, 1.0),
    (0.0, 1.0),
)
_WHITE = (1.0, 1.0, 1.0, 1.0)


def quad_indices(quad_count: int) -> list[int]:
    """Index list drawing ``quad_count`` quads as two triangles each."""
    indices: list[int] = []
    for quad in range(quad_count):
        offset = quad * 4
        indices.extend(
            (offset, offset + 1, offset + 2, offset + 2, offset + 3, offset)
        )
    return indices


@dataclass(frozen=True)
class QuadVertex:
    """One vertex of a batched quad."""

    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    tex_coord: tuple[float, float]
    texture_index: float
    tiling_factor: float


@dataclass
class Statistics:
    """Counters gathered while drawing."""

    draw_calls: int = 0
    quad_count: int = 0

    def total_vertex_count(self) -> int:
        return self.quad_count * 4

    def total_index_count(self) -> int:
        return self.quad_count * 6


class RenderBackend:
    """Receives the renderer's GPU-bound commands and keeps a record of them.

    Subclasses forward the commands to a real graphics interface; this base
    keeps everything in memory, which also serves headless use.
    """

    def __init__(self) -> None:
        self.vertex_uploads: list[list[QuadVertex]] = []
        self.bound_textures: dict[int, Texture2D] = {}
        self.draw_calls: list[int] = []
        self.clear_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
        self.viewport: tuple[int, int, int, int] = (0, 0, 0, 0)
        self.clear_count = 0

    def set_vertex_data(self, vertices: Sequence[QuadVertex]) -> None:
        """Upload the vertices of the current batch."""
        self.vertex_uploads.append(list(vertices))

    def bind_texture(self, texture: Texture2D, slot: int) -> None:
        """Bind ``texture`` to texture unit ``slot``."""
        self.bound_textures[slot] = texture

    def draw_indexed(self, index_count: int) -> None:
        """Draw ``index_count`` indices of the quad index buffer."""
        self.draw_calls.append(index_count)

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.viewport = (x, y, width, height)

    def set_clear_color(self, color: Sequence[float]) -> None:
        r, g, b, a = (float(c) for c in color)
        self.clear_color = (r, g, b, a)

    def clear(self) -> None:
        self.clear_count += 1


def _translation(position: Sequence[float]) -> np.ndarray:
    matrix = np.eye(4)
    values = [float(v) for v in position]
    if len(values) == 2:
        values.append(0.0)
    matrix[:3, 3] = values
    return matrix


def _scale(size: Sequence[float]) -> np.ndarray:
    width, height = size
    return np.diag([float(width), float(height), 1.0, 1.0])


def _rotation_z(angle: float) -> np.ndarray:
    cos, sin = math.cos(angle), math.sin(angle)
    matrix = np.eye(4)
    matrix[0, 0] = cos
    matrix[0, 1] = -sin
    matrix[1, 0] = sin
    matrix[1, 1] = cos
    return matrix


@dataclass
class _Batch:
    vertices: list[QuadVertex] = field(default_factory=list)
    index_count: int = 0


class Renderer2D:
    """Collects quads into batches and hands each batch to the backend."""

    def __init__(
        self,
        backend: RenderBackend | None = None,
        shader: Shader | None = None,
        max_quads: int = MAX_QUADS,
        max_texture_slots: int = MAX_TEXTURE_SLOTS,
    ) -> None:
        if max_quads < 1:
            raise ValueError("max_quads must be at least 1")
        if max_texture_slots < 2:
            raise ValueError("max_texture_slots must be at least 2")
        self.backend = backend if backend is not None else RenderBackend()
        self.max_quads = max_quads
        self.max_indices = max_quads * 6
        self.max_texture_slots = max_texture_slots

        self.white_texture = Texture2D(1, 1)
        self.white_texture.set_data(b"\xff\xff\xff\xff")

        self.shader = shader if shader is not None else Shader("2DShader", {})
        self.shader.set_uniform("u_Textures", list(range(max_texture_slots)))

        self._texture_slots: list[Texture2D] = [self.white_texture]
        self._batch = _Batch()
        self._stats = Statistics()

    @property
    def stats(self) -> Statistics:
        """A snapshot of the counters."""
        return replace(self._stats)

    @property
    def texture_slots(self) -> list[Texture2D]:
        return list(self._texture_slots)

    @property
    def pending_vertices(self) -> list[QuadVertex]:
        return list(self._batch.vertices)

    @property
    def pending_index_count(self) -> int:
        return self._batch.index_count

    def begin_scene(
        self,
        camera: Camera | OrthographicCamera,
        transform: Any = None,
    ) -> None:
        """Start a batch viewed through ``camera``.

        A plain ``Camera`` needs its world ``transform``; an
        ``OrthographicCamera`` carries its own view.
        """
        if isinstance(camera, OrthographicCamera):
            view_projection = camera.view_projection_matrix
        else:
            if transform is None:
                raise ValueError("A Camera needs a transform")
            view_projection = camera.projection @ np.linalg.inv(
                np.asarray(transform, dtype=float)
            )
        self.shader.set_uniform("u_ViewProjection", view_projection)
        self._start_batch()

    def end_scene(self) -> None:
        """Upload the batch's vertices and draw it."""
        self.backend.set_vertex_data(self._batch.vertices)
        self.flush()

    def flush(self) -> None:
        """Bind the batch's textures and issue one draw call, if anything is queued."""
        if self._batch.index_count == 0:
            return
        for slot, texture in enumerate(self._texture_slots):
            self.backend.bind_texture(texture, slot)
        self.backend.draw_indexed(self._batch.index_count)
        self._stats.draw_calls += 1

    def draw_quad(
        self,
        transform: Any,
        color: Sequence[float] | None = None,
        texture: Texture2D | SubTexture2D | None = None,
        tiling_factor: float = 1.0,
    ) -> None:
        """Queue a unit quad transformed by ``transform``.

        Without a texture the quad is filled with ``color``; with one,
        ``color`` tints it. The colour defaults to white.
        """
        matrix = np.asarray(transform, dtype=float)
        tint = _WHITE if color is None else tuple(float(c) for c in color)
        if len(tint) != 4:
            raise ValueError("color must have four components")

        if self._batch.index_count >= self.max_indices:
            self._flush_and_reset()

        if texture is None:
            texture_index = 0.0
            coords = _TEXTURE_COORDS
            tiling = 1.0
        else:
            if isinstance(texture, SubTexture2D):
                coords = texture.texture_coords
                base = texture.texture
            else:
                coords = _TEXTURE_COORDS
                base = texture
            texture_index = float(self._texture_slot_for(base))
            tiling = float(tiling_factor)

        corners = matrix @ _QUAD_VERTEX_POSITIONS.T
        for corner, coord in zip(corners.T, coords):
            self._batch.vertices.append(
                QuadVertex(
                    position=(float(corner[0]), float(corner[1]), float(corner[2])),
                    color=tint,  # type: ignore[arg-type]
                    tex_coord=(float(coord[0]), float(coord[1])),
                    texture_index=texture_index,
                    tiling_factor=tiling,
                )
            )
        self._batch.index_count += 6
        self._stats.quad_count += 1

    def draw_quad_at(
        self,
        position: Sequence[float],
        size: Sequence[float],
        color: Sequence[float] | None = None,
        texture: Texture2D | SubTexture2D | None = None,
        tiling_factor: float = 1.0,
    ) -> None:
        """Queue an axis-aligned quad centred at ``position`` (2 or 3 values)."""
        transform = _translation(position) @ _scale(size)
        self.draw_quad(transform, color, texture, tiling_factor)

    def draw_rotated_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        rotation: float,
        color: Sequence[float] | None = None,
        texture: Texture2D | SubTexture2D | None = None,
        tiling_factor: float = 1.0,
    ) -> None:
        """Queue a quad turned by ``rotation`` radians about its centre."""
        transform = _translation(position) @ _rotation_z(float(rotation)) @ _scale(size)
        self.draw_quad(transform, color, texture, tiling_factor)

    def reset_stats(self) -> None:
        self._stats = Statistics()

    def _texture_slot_for(self, texture: Texture2D) -> int:
        for slot, candidate in enumerate(self._texture_slots[1:], 1):
            if candidate is texture:
                return slot
        if len(self._texture_slots) >= self.max_texture_slots:
            self._flush_and_reset()
        self._texture_slots.append(texture)
        return len(self._texture_slots) - 1

    def _start_batch(self) -> None:
        self._batch = _Batch()
        self._texture_slots = [self.white_texture]

    def _flush_and_reset(self) -> None:
        self.end_scene()
        self._start_batch()