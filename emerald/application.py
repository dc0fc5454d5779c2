"""Windows, the application main loop, and the program entry point."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, ClassVar

from emerald.events import Event, EventDispatcher, WindowCloseEvent, WindowResizeEvent
from emerald.layers import Layer, LayerStack
from emerald.log import init_logging
from emerald.renderer2d import Renderer2D
from emerald.timestep import Timestep

EventCallback = Callable[[Event], None]


@dataclass
class WindowProps:
    """Title and size a window is created with."""

    title: str = "Emerald Application"
    width: int = 1280
    height: int = 720


class Window:
    """A window whose events are queued and delivered on each update.

    Platform windows override ``on_update`` to poll the system; this one is
    fed through ``post_event``, which suits headless use.
    """

    def __init__(self, props: WindowProps | None = None) -> None:
        props = props or WindowProps()
        self.title = props.title
        self.width = props.width
        self.height = props.height
        self.vsync = True
        self.frame_count = 0
        self._callback: EventCallback | None = None
        self._pending: deque[Event] = deque()

    def set_event_callback(self, callback: EventCallback) -> None:
        self._callback = callback

    def post_event(self, event: Event) -> None:
        """Queue an event for the next update."""
        self._pending.append(event)

    def on_update(self) -> None:
        """Deliver queued events and present the frame."""
        while self._pending:
            event = self._pending.popleft()
            if isinstance(event, WindowResizeEvent):
                self.width = event.width
                self.height = event.height
            if self._callback is not None:
                self._callback(event)
        self.frame_count += 1


class Application:
    """Owns the window, renderer and layers, and runs the frame loop.

    Only one application may exist at a time; ``shutdown`` releases it.
    """

    _instance: ClassVar[Application | None] = None

    def __init__(
        self,
        title: str = "Emerald Application",
        window: Window | None = None,
        renderer: Renderer2D | None = None,
    ) -> None:
        if Application._instance is not None:
            raise RuntimeError("Application already exists!")
        Application._instance = self
        self.window = window if window is not None else Window(WindowProps(title))
        self.window.set_event_callback(self.on_event)
        self.renderer = renderer if renderer is not None else Renderer2D()
        self.layer_stack = LayerStack()
        self.running = True
        self.minimized = False
        self._last_frame_time = 0.0
        self._created_at = time.perf_counter()

    @classmethod
    def instance(cls) -> Application:
        """The application currently alive."""
        if Application._instance is None:
            raise RuntimeError("No application exists")
        return Application._instance

    def on_event(self, event: Event) -> None:
        """Handle window events, then offer the event to layers from the top down."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowCloseEvent, self._on_window_close)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resize)
        for layer in reversed(self.layer_stack):
            if event.handled:
                break
            layer.on_event(event)

    def push_layer(self, layer: Layer) -> None:
        self.layer_stack.push_layer(layer)
        layer.on_attach()

    def push_overlay(self, overlay: Layer) -> None:
        self.layer_stack.push_overlay(overlay)
        overlay.on_attach()

    def pop_layer(self, layer: Layer) -> None:
        self.layer_stack.pop_layer(layer)

    def pop_overlay(self, overlay: Layer) -> None:
        self.layer_stack.pop_overlay(overlay)

    def close(self) -> None:
        """Stop the frame loop after the current frame."""
        self.running = False

    def run(self, clock: Callable[[], float] | None = None) -> None:
        """Run frames until closed; ``clock`` returns the current time in seconds."""
        now = clock if clock is not None else self._seconds_since_creation
        while self.running:
            current = float(now())
            timestep = Timestep(current - self._last_frame_time)
            self._last_frame_time = current

            if not self.minimized:
                for layer in self.layer_stack:
                    layer.on_update(timestep)
                for layer in self.layer_stack:
                    layer.on_imgui_render()
            self.window.on_update()

    def shutdown(self) -> None:
        """Detach all layers and release the single-application slot."""
        self.layer_stack.close()
        if Application._instance is self:
            Application._instance = None

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()

    def _seconds_since_creation(self) -> float:
        return time.perf_counter() - self._created_at

    def _on_window_close(self, event: WindowCloseEvent) -> bool:
        self.running = False
        return True

    def _on_window_resize(self, event: WindowResizeEvent) -> bool:
        if event.width == 0 or event.height == 0:
            self.minimized = True
            return True
        self.minimized = False
        self.renderer.backend.set_viewport(0, 0, event.width, event.height)
        return False


def run_application(factory: Callable[[], Application]) -> Application:
    """Set up logging, create an application, run it, and shut it down."""
    init_logging()
    app = factory()
    try:
        app.run()
    finally:
        app.shutdown()
    return app