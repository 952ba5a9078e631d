"""Event system for decoupled game event handling.

This module provides a publish/subscribe event system that allows different parts
of the game to communicate without tight coupling. Systems publish events when
something happens (a block was placed, the inventory ledger changed, a remote write
failed) and other systems subscribe to react.

The event system consists of:
- Event: Base class for all game events
- EventBus: Central hub for subscribing to and publishing events

Concrete events live next to the system that publishes them
(e.g. ``blockbuild.systems.sync.events``).

Example usage:
    event_bus = EventBus()

    def handle_inventory(event: InventoryChangedEvent):
        print(f"{len(event.items)} item types in inventory")

    event_bus.subscribe(InventoryChangedEvent, handle_inventory)
    event_bus.publish(InventoryChangedEvent(items=[]))
    event_bus.clear()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class Event:
    """Base event class."""


class EventBus:
    """Central event bus for publish/subscribe event handling.

    Publishers emit events without knowing who (if anyone) will handle them, and
    subscribers listen for events without knowing who publishes them.

    Thread safety: This implementation is NOT thread-safe. All subscribe, publish, and
    unsubscribe calls should happen on the main game thread, which is also where
    document store notifications are dispatched.
    """

    def __init__(self) -> None:
        """Initialize the event bus with no registered listeners."""
        self.listeners: dict[type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Subscribe a handler to an event type.

        Multiple handlers can be subscribed to the same event type, and they will be
        called in the order they were registered.

        Args:
            event_type: The type of event to listen for (e.g., InventoryChangedEvent).
            handler: Callback function that takes the event as parameter.
        """
        if event_type not in self.listeners:
            self.listeners[event_type] = []
        self.listeners[event_type].append(handler)

    def unsubscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Unsubscribe a handler from an event type.

        If the handler was registered multiple times, this removes ALL instances of it.
        Unknown handlers are ignored.

        Args:
            event_type: The type of event to stop listening for.
            handler: The handler function to remove.
        """
        if event_type in self.listeners:
            self.listeners[event_type] = [h for h in self.listeners[event_type] if h != handler]

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribed handlers.

        Handlers are called synchronously in the order they were registered. If no
        handlers are subscribed to this event type, the event is silently ignored.

        Args:
            event: The event instance to publish.
        """
        event_type = type(event)
        if event_type in self.listeners:
            for handler in list(self.listeners[event_type]):
                handler(event)

    def clear(self) -> None:
        """Clear all event listeners."""
        self.listeners.clear()

    def unregister_all(self, subscriber: object) -> None:
        """Unregister all handlers bound to a specific subscriber.

        Args:
            subscriber: The instance (e.g., a system) whose bound-method handlers should be removed.
        """
        for event_type in self.listeners:
            self.listeners[event_type] = [
                h for h in self.listeners[event_type] if not (hasattr(h, "__self__") and h.__self__ == subscriber)
            ]
