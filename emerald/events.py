"""Window, keyboard and mouse events and their dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag, auto
from typing import Any, Callable, ClassVar, TypeVar


class EventType(IntEnum):
    """Kind of an event."""

    NONE = 0
    WINDOW_CLOSE = auto()
    WINDOW_RESIZE = auto()
    WINDOW_FOCUS = auto()
    WINDOW_LOST_FOCUS = auto()
    WINDOW_MOVED = auto()
    APP_TICK = auto()
    APP_UPDATE = auto()
    APP_RENDER = auto()
    KEY_PRESSED = auto()
    KEY_RELEASED = auto()
    KEY_TYPED = auto()
    MOUSE_BUTTON_PRESSED = auto()
    MOUSE_BUTTON_RELEASED = auto()
    MOUSE_MOVED = auto()
    MOUSE_SCROLLED = auto()


class EventCategory(IntFlag):
    """Bit flags grouping event kinds."""

    NONE = 0
    APPLICATION = 1 << 0
    INPUT = 1 << 1
    KEYBOARD = 1 << 2
    MOUSE = 1 << 3
    MOUSE_BUTTON = 1 << 4


def _camel_name(event_type: EventType) -> str:
    return "".join(part.capitalize() for part in event_type.name.split("_"))


class Event:
    """Base of all events.

    Concrete subclasses declare their kind and categories as class keywords;
    classes without a kind are abstract and cannot be instantiated.
    """

    event_type: ClassVar[EventType] = EventType.NONE
    category_flags: ClassVar[EventCategory] = EventCategory.NONE
    handled: bool = False

    def __init_subclass__(
        cls,
        event_type: EventType | None = None,
        category: EventCategory | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if event_type is not None:
            cls.event_type = event_type
        if category is not None:
            cls.category_flags = category

    def __new__(cls, *args: Any, **kwargs: Any) -> Event:
        if cls.event_type is EventType.NONE:
            raise TypeError(f"{cls.__name__} is abstract and cannot be instantiated")
        return super().__new__(cls)

    @property
    def name(self) -> str:
        return _camel_name(self.event_type)

    def is_in_category(self, category: EventCategory) -> bool:
        return bool(self.category_flags & category)

    def __str__(self) -> str:
        return self.name


E = TypeVar("E", bound=Event)


class EventDispatcher:
    """Routes an event to a handler when the event is of a given class."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: type[E], handler: Callable[[E], bool]) -> bool:
        """Call ``handler`` if the event matches; its result marks the event handled."""
        if self.event.event_type == event_class.event_type:
            self.event.handled = bool(handler(self.event))  # type: ignore[arg-type]
            return True
        return False


# Application events


@dataclass(eq=True)
class WindowResizeEvent(
    Event, event_type=EventType.WINDOW_RESIZE, category=EventCategory.APPLICATION
):
    width: int
    height: int

    def __str__(self) -> str:
        return f"WindowResizeEvent: {self.width}, {self.height}"


@dataclass
class WindowCloseEvent(
    Event, event_type=EventType.WINDOW_CLOSE, category=EventCategory.APPLICATION
):
    pass


@dataclass
class AppTickEvent(
    Event, event_type=EventType.APP_TICK, category=EventCategory.APPLICATION
):
    pass


@dataclass
class AppUpdateEvent(
    Event, event_type=EventType.APP_UPDATE, category=EventCategory.APPLICATION
):
    pass


@dataclass
class AppRenderEvent(
    Event, event_type=EventType.APP_RENDER, category=EventCategory.APPLICATION
):
    pass


# Keyboard events


@dataclass
class KeyEvent(Event, category=EventCategory.KEYBOARD | EventCategory.INPUT):
    """Base of keyboard events; carries the key code as an integer."""

    key_code: int


@dataclass
class KeyPressedEvent(KeyEvent, event_type=EventType.KEY_PRESSED):
    repeat_count: int

    def __str__(self) -> str:
        return f"KeyPressedEvent: {int(self.key_code)} ({self.repeat_count} repeats)"


@dataclass
class KeyReleasedEvent(KeyEvent, event_type=EventType.KEY_RELEASED):
    def __str__(self) -> str:
        return f"KeyReleasedEvent: {int(self.key_code)}"


@dataclass
class KeyTypedEvent(KeyEvent, event_type=EventType.KEY_TYPED):
    def __str__(self) -> str:
        return f"KeyTypedEvent: {int(self.key_code)}"


# Mouse events


@dataclass
class MouseMovedEvent(
    Event,
    event_type=EventType.MOUSE_MOVED,
    category=EventCategory.MOUSE | EventCategory.INPUT,
):
    x: float
    y: float

    def __str__(self) -> str:
        return f"MouseMovedEvent: {self.x:g}, {self.y:g}"


@dataclass
class MouseScrolledEvent(
    Event,
    event_type=EventType.MOUSE_SCROLLED,
    category=EventCategory.MOUSE | EventCategory.INPUT,
):
    x_offset: float
    y_offset: float

    def __str__(self) -> str:
        return f"MouseScrolledEvent: {self.x_offset:g}, {self.y_offset:g}"


@dataclass
class MouseButtonEvent(Event, category=EventCategory.MOUSE | EventCategory.INPUT):
    """Base of mouse button events; carries the button as an integer."""

    button: int


@dataclass
class MouseButtonPressedEvent(MouseButtonEvent, event_type=EventType.MOUSE_BUTTON_PRESSED):
    def __str__(self) -> str:
        return f"MouseButtonPressedEvent: {int(self.button)}"


@dataclass
class MouseButtonReleasedEvent(
    MouseButtonEvent, event_type=EventType.MOUSE_BUTTON_RELEASED
):
    def __str__(self) -> str:
        return f"MouseButtonReleasedEvent: {int(self.button)}"