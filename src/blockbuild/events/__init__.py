"""Module for events."""

from blockbuild.events.base import Event, EventBus

__all__ = [
    "Event",
    "EventBus",
]
