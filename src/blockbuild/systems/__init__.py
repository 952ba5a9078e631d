"""Game systems for the item slots, the build area and persistence."""

from blockbuild.systems.base import BaseSystem
from blockbuild.systems.build import BuildManager, BuildTool, CellClickedEvent
from blockbuild.systems.game_context import GameContext
from blockbuild.systems.items import ItemManager, SelectionTracker, SlotAssignmentEngine, VisibilityPolicy
from blockbuild.systems.loader import CircularDependencyError, MissingDependencyError, SystemLoader
from blockbuild.systems.notification import NotificationManager
from blockbuild.systems.registry import SystemRegistry
from blockbuild.systems.sync import RealtimeReconciler, SessionState, SyncManager, WriteResult

__all__ = [
    "BaseSystem",
    "BuildManager",
    "BuildTool",
    "CellClickedEvent",
    "CircularDependencyError",
    "GameContext",
    "ItemManager",
    "MissingDependencyError",
    "NotificationManager",
    "RealtimeReconciler",
    "SelectionTracker",
    "SessionState",
    "SlotAssignmentEngine",
    "SyncManager",
    "SystemLoader",
    "SystemRegistry",
    "VisibilityPolicy",
    "WriteResult",
]
