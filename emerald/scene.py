"""Entities, their components, and the scene that holds and draws them."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Iterator, TypeVar

import numpy as np

from emerald.camera import Camera
from emerald.renderer2d import Renderer2D
from emerald.timestep import Timestep

C = TypeVar("C")


@dataclass
class TagComponent:
    """A human-readable name for an entity."""

    tag: str = ""


@dataclass
class TransformComponent:
    """World transform of an entity as a 4x4 matrix."""

    transform: np.ndarray = field(default_factory=lambda: np.eye(4))

    def __post_init__(self) -> None:
        self.transform = np.array(self.transform, dtype=float)

    def __array__(self, dtype: Any = None) -> np.ndarray:
        return np.asarray(self.transform, dtype=dtype)


@dataclass
class SpriteRendererComponent:
    """Fills the entity's quad with a flat colour."""

    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)


@dataclass
class CameraComponent:
    """A camera attached to an entity; the first primary one views the scene."""

    camera: Camera = field(default_factory=Camera)
    primary: bool = True

    @classmethod
    def from_projection(cls, projection: Any, primary: bool = True) -> CameraComponent:
        return cls(Camera(projection), primary)


@dataclass(frozen=True)
class Entity:
    """A handle to an entity within a scene; the default handle is null and false."""

    handle: int | None = None
    scene: Scene | None = field(default=None, repr=False, compare=True)

    def _components(self) -> dict[type, Any]:
        if self.handle is None or self.scene is None:
            raise ValueError("Entity is null")
        return self.scene._components_of(self.handle)

    def add_component(self, component: C) -> C:
        """Attach ``component``; an entity holds at most one of each type."""
        components = self._components()
        component_type = type(component)
        if component_type in components:
            raise ValueError(
                f"Entity already has component {component_type.__name__}!"
            )
        components[component_type] = component
        return component

    def get_component(self, component_type: type[C]) -> C:
        components = self._components()
        try:
            return components[component_type]
        except KeyError:
            raise KeyError(
                f"Entity does not have component {component_type.__name__}!"
            ) from None

    def has_component(self, component_type: type) -> bool:
        return component_type in self._components()

    def remove_component(self, component_type: type) -> None:
        components = self._components()
        if component_type not in components:
            raise KeyError(
                f"Entity does not have component {component_type.__name__}!"
            )
        del components[component_type]

    def __bool__(self) -> bool:
        return self.handle is not None


class Scene:
    """A collection of entities with components, drawn through a primary camera."""

    def __init__(self) -> None:
        self._registry: dict[int, dict[type, Any]] = {}
        self._ids = itertools.count()

    def create_entity(self, name: str = "Entity") -> Entity:
        """Make an entity with a tag and an identity transform."""
        handle = next(self._ids)
        self._registry[handle] = {}
        entity = Entity(handle, self)
        entity.add_component(TagComponent(name))
        entity.add_component(TransformComponent())
        return entity

    def view(self, *component_types: type) -> Iterator[tuple[Entity, tuple[Any, ...]]]:
        """Entities holding all the given component types, with those components."""
        for handle, components in list(self._registry.items()):
            if all(t in components for t in component_types):
                yield Entity(handle, self), tuple(components[t] for t in component_types)

    def on_update(self, timestep: Timestep | float, renderer: Renderer2D) -> None:
        """Draw every sprite through the first primary camera, if there is one."""
        main_camera: Camera | None = None
        camera_transform: np.ndarray | None = None
        for _, (transform, camera) in self.view(TransformComponent, CameraComponent):
            if camera.primary:
                main_camera = camera.camera
                camera_transform = transform.transform
                break

        if main_camera is None:
            return

        renderer.begin_scene(main_camera, camera_transform)
        for _, (transform, sprite) in self.view(
            TransformComponent, SpriteRendererComponent
        ):
            renderer.draw_quad(transform.transform, sprite.color)
        renderer.end_scene()

    def _components_of(self, handle: int) -> dict[type, Any]:
        try:
            return self._registry[handle]
        except KeyError:
            raise ValueError(f"Entity {handle} does not belong to this scene") from None

    def __len__(self) -> int:
        return len(self._registry)