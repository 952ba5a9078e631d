"""Sync system: session state and the remote user document.

This package provides:
- SyncManager: session load (with repair and legacy migration) and optimistic,
  field-scoped writes for every action
- RealtimeReconciler: applies push updates, live-syncing only the inventory
- UserDocument, InventoryItem: typed views of the stored document
- SessionState: the session's inventory, money and maps
- WriteResult, LoadOutcome, SyncErrorKind: results of remote operations
- InventoryChangedEvent, SyncFailedEvent: events published by this system
"""

from blockbuild.systems.sync.documents import (
    DocumentShape,
    InventoryItem,
    MapData,
    UserDocument,
    detect_shape,
    migrate_legacy_document,
    parse_inventory,
)
from blockbuild.systems.sync.events import InventoryChangedEvent, SyncFailedEvent
from blockbuild.systems.sync.manager import SyncManager, clean_map_name, map_field
from blockbuild.systems.sync.reconciler import FIELD_POLICIES, RealtimeReconciler, SyncPolicy
from blockbuild.systems.sync.results import LoadOutcome, SyncErrorKind, WriteResult
from blockbuild.systems.sync.session import SessionState

__all__ = [
    "FIELD_POLICIES",
    "DocumentShape",
    "InventoryChangedEvent",
    "InventoryItem",
    "LoadOutcome",
    "MapData",
    "RealtimeReconciler",
    "SessionState",
    "SyncErrorKind",
    "SyncFailedEvent",
    "SyncManager",
    "SyncPolicy",
    "UserDocument",
    "WriteResult",
    "clean_map_name",
    "detect_shape",
    "map_field",
    "migrate_legacy_document",
    "parse_inventory",
]
