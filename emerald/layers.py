"""Layers and the ordered stack that holds them."""

from __future__ import annotations

from typing import Iterator

from emerald.events import Event
from emerald.timestep import Timestep


class Layer:
    """A slice of the application that receives updates and events.

    Subclasses override the hooks they need. The default hooks only keep
    simple bookkeeping: whether the layer is attached, how much time it has
    been updated for, how many events reached it and how many frames it drew.
    """

    def __init__(self, name: str = "Layer") -> None:
        self.name = name
        self.attached = False
        self.elapsed = 0.0
        self.events_seen = 0
        self.frames_rendered = 0

    def on_attach(self) -> None:
        """Called when the layer is pushed onto an application."""
        self.attached = True

    def on_detach(self) -> None:
        """Called when the layer is removed."""
        self.attached = False

    def on_update(self, timestep: Timestep) -> None:
        """Called once per frame with the time since the last frame."""
        self.elapsed += float(timestep)

    def on_event(self, event: Event) -> None:
        """Called for every event that earlier layers did not handle."""
        self.events_seen += 1

    def on_imgui_render(self) -> None:
        """Called once per frame to draw user-interface widgets."""
        self.frames_rendered += 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class LayerStack:
    """Ordered layers with overlays always kept above ordinary layers.

    Iteration runs bottom to top (update order); ``reversed`` runs top to
    bottom (event order).
    """

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._insert_index = 0

    def push_layer(self, layer: Layer) -> None:
        """Insert a layer above the other layers but below every overlay."""
        self._layers.insert(self._insert_index, layer)
        self._insert_index += 1

    def push_overlay(self, overlay: Layer) -> None:
        """Put an overlay on top of the stack."""
        self._layers.append(overlay)

    def pop_layer(self, layer: Layer) -> None:
        """Detach and remove an ordinary layer; overlays and unknown layers are left alone."""
        position = self._find(layer, 0, self._insert_index)
        if position is None:
            return
        layer.on_detach()
        del self._layers[position]
        self._insert_index -= 1

    def pop_overlay(self, overlay: Layer) -> None:
        """Detach and remove an overlay; ordinary layers and unknown layers are left alone."""
        position = self._find(overlay, self._insert_index, len(self._layers))
        if position is None:
            return
        overlay.on_detach()
        del self._layers[position]

    def close(self) -> None:
        """Detach every layer and empty the stack."""
        layers, self._layers = self._layers, []
        self._insert_index = 0
        for layer in layers:
            layer.on_detach()

    def _find(self, layer: Layer, start: int, stop: int) -> int | None:
        return next(
            (
                position
                for position, candidate in enumerate(self._layers[start:stop], start)
                if candidate is layer
            ),
            None,
        )

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __reversed__(self) -> Iterator[Layer]:
        return reversed(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)