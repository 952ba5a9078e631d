"""Push-update reconciliation of the user document.

Which fields a push update may touch is spelled out per field in FIELD_POLICIES.
Only the inventory is live-synced: another device buying an item shows up here
right away. Money and maps are session-authoritative; the running session owns
them and push updates never overwrite them.

Whether several devices editing maps or spending money at the same time should be
supported is still open. If so, the session-authoritative fields need their own
reconciliation; changing a policy here alone is not enough, since the build area
and HUD would also have to react.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from blockbuild.systems.sync.documents import (
    FIELD_CURRENT_MAP,
    FIELD_INVENTORY,
    FIELD_MAPS,
    FIELD_MONEY,
    parse_inventory,
)
from blockbuild.systems.sync.events import InventoryChangedEvent

if TYPE_CHECKING:
    from collections.abc import Callable

    from blockbuild.events import EventBus
    from blockbuild.stores import BaseDocumentStore, Document
    from blockbuild.systems.sync.session import SessionState

logger = logging.getLogger(__name__)


class SyncPolicy(Enum):
    """How a document field is treated on push updates."""

    LIVE = "live"  # Copied from every push update
    SESSION_AUTHORITATIVE = "session"  # Owned by the running session, never overwritten


FIELD_POLICIES: dict[str, SyncPolicy] = {
    FIELD_INVENTORY: SyncPolicy.LIVE,
    FIELD_MONEY: SyncPolicy.SESSION_AUTHORITATIVE,
    FIELD_MAPS: SyncPolicy.SESSION_AUTHORITATIVE,
    FIELD_CURRENT_MAP: SyncPolicy.SESSION_AUTHORITATIVE,
}


def live_fields() -> list[str]:
    """Fields copied from push updates."""
    return [name for name, policy in FIELD_POLICIES.items() if policy is SyncPolicy.LIVE]


class RealtimeReconciler:
    """Applies push updates of the user document to the session.

    Attributes:
        event_bus: Bus on which InventoryChangedEvent is published.
        session: Session receiving live fields (None until attached).
        reload: Called instead of applying live fields when the session could not
            read the user document at start; it loads the session again.
    """

    def __init__(self, event_bus: EventBus, reload: Callable[[], object] | None = None) -> None:
        """Initialize a detached reconciler."""
        self.event_bus = event_bus
        self.reload = reload
        self.session: SessionState | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def active(self) -> bool:
        """True while subscribed to a store."""
        return self._unsubscribe is not None

    def attach(self, session: SessionState) -> None:
        """Set the session that push updates are applied to."""
        self.session = session

    def start(self, store: BaseDocumentStore, user_id: str) -> None:
        """Subscribe to the user's document; stops any previous subscription first."""
        self.stop()
        self._unsubscribe = store.subscribe(user_id, self.on_remote_change)
        logger.debug("Subscribed to push updates for user: %s", user_id)

    def stop(self) -> None:
        """Unsubscribe; safe to call when not subscribed."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.debug("Unsubscribed from push updates")

    def on_remote_change(self, document: Document | None) -> bool:
        """Apply one push update.

        An absent document is treated as transient and ignored; local state is
        never reset. A session that started without the document is reloaded
        instead. Otherwise only live fields are copied into the session and the
        inventory display is refreshed.

        Args:
            document: Current remote document, or None if it no longer exists.

        Returns:
            True if the session was changed.
        """
        if document is None:
            logger.info("User document absent in push update, keeping local state")
            return False
        if self.session is None:
            logger.debug("Push update before session load, ignoring")
            return False
        if not self.session.remote_known:
            if self.reload is None:
                return False
            logger.info("User document is readable again, reloading the session")
            self.reload()
            return True

        # Inventory is the only live field in FIELD_POLICIES
        self.session.inventory = parse_inventory(document.get(FIELD_INVENTORY))
        self.event_bus.publish(InventoryChangedEvent(items=list(self.session.inventory), remote=True))
        return True
