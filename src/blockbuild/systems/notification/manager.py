"""Notification system for non-blocking status messages.

This module provides the NotificationManager class, which shows short messages
(toasts) in the bottom-right corner for a few seconds. Failed remote operations
are surfaced this way: the sync system publishes a SyncFailedEvent and this
system turns it into a toast, so the game keeps running while the player learns
that the remote document may be stale.

Example usage:
    notifications = context.notification_manager
    notifications.notify("Saved")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import arcade

from blockbuild.conf import settings
from blockbuild.systems.base import BaseSystem
from blockbuild.systems.registry import SystemRegistry
from blockbuild.systems.sync.events import SyncFailedEvent
from blockbuild.systems.sync.results import SyncErrorKind

if TYPE_CHECKING:
    from blockbuild.systems.game_context import GameContext

logger = logging.getLogger(__name__)

MESSAGES = {
    SyncErrorKind.WRITE_FAILURE: "Could not save your changes",
    SyncErrorKind.MIGRATION_FAILURE: "Could not update your saved data",
    SyncErrorKind.FETCH_FAILURE: "Could not load your saved data",
}

# Most toasts shown at once; older ones are dropped first
MAX_VISIBLE = 4


@dataclass
class Notification:
    """A message and the seconds it stays on screen."""

    message: str
    remaining: float


@SystemRegistry.register
class NotificationManager(BaseSystem):
    """Shows timed toasts, including one for every failed remote operation.

    Attributes:
        notifications: Messages currently shown, oldest first.
        duration: Seconds each message stays on screen.
    """

    name: ClassVar[str] = "notification"
    role: ClassVar[str | None] = "notification_manager"
    dependencies: ClassVar[list[str]] = []

    def __init__(self) -> None:
        """Initialize with no messages."""
        self.context: GameContext | None = None
        self.notifications: list[Notification] = []
        self.duration = 0.0
        self.texts: list[arcade.Text] = []

    def setup(self, context: GameContext) -> None:
        """Subscribe to sync failures."""
        self.context = context
        self.duration = settings.NOTIFICATION_DURATION
        context.event_bus.subscribe(SyncFailedEvent, self._on_sync_failed)
        logger.debug("NotificationManager setup complete")

    def cleanup(self) -> None:
        """Unsubscribe and drop all messages."""
        if self.context:
            self.context.event_bus.unsubscribe(SyncFailedEvent, self._on_sync_failed)
        self.notifications.clear()
        self.texts.clear()
        logger.debug("NotificationManager cleanup complete")

    def notify(self, message: str, duration: float | None = None) -> None:
        """Show ``message`` for ``duration`` seconds (default: NOTIFICATION_DURATION)."""
        self.notifications.append(Notification(message, self.duration if duration is None else duration))
        del self.notifications[:-MAX_VISIBLE]

    def _on_sync_failed(self, event: SyncFailedEvent) -> None:
        kind = event.result.error_kind
        message = MESSAGES.get(kind, "Sync failed") if kind else "Sync failed"
        self.notify(message)

    def update(self, delta_time: float) -> None:
        """Count down and expire messages."""
        for notification in self.notifications:
            notification.remaining -= delta_time
        self.notifications = [n for n in self.notifications if n.remaining > 0]

    def on_draw_ui(self) -> None:
        """Draw current messages stacked upward from the bottom-right corner."""
        window = self.context.window if self.context else None
        if window is None:
            return

        while len(self.texts) < len(self.notifications):
            self.texts.append(
                arcade.Text("", 0, 0, arcade.color.WHITE, font_size=12, anchor_x="right", anchor_y="bottom")
            )

        y = 130
        for notification, text in zip(reversed(self.notifications), self.texts, strict=False):
            text.text = notification.message
            text.x = window.width - 20
            text.y = y
            arcade.draw_lrbt_rectangle_filled(
                text.x - text.content_width - 10, text.x + 10, y - 6, y + text.content_height + 6, (150, 30, 30, 220)
            )
            text.draw()
            y += text.content_height + 20
