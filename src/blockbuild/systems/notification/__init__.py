"""Notification system for non-blocking status messages."""

from blockbuild.systems.notification.manager import Notification, NotificationManager

__all__ = ["Notification", "NotificationManager"]
