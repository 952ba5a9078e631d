"""Events published by the sync system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from blockbuild.events import Event

if TYPE_CHECKING:
    from blockbuild.systems.sync.documents import InventoryItem
    from blockbuild.systems.sync.results import WriteResult


@dataclass
class InventoryChangedEvent(Event):
    """Fired when the local inventory ledger changes.

    Published after local actions (build, purchase) and after a push update
    replaced the ledger. The item system listens to refresh its tokens.

    Attributes:
        items: The full ledger after the change.
        remote: True if the change came from a push notification.
    """

    items: list[InventoryItem]
    remote: bool = False


@dataclass
class SyncFailedEvent(Event):
    """Fired when a remote operation failed; local state was kept.

    Covers failed writes (local mutations are not rolled back) and a failed fetch
    at session start (the session runs on local defaults).

    Attributes:
        result: The failed write.
    """

    result: WriteResult
