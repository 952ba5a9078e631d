"""Item system: hotbar and inventory grid tokens.

This package provides:
- Container, ItemToken and placements: the slot model
- HotbarLayout, GridLayout: screen geometry of both containers
- SlotAssignmentEngine: single-location placement with displacement
- SelectionTracker: wrap-around cursors and indicator positions
- VisibilityPolicy: derived token visibility
- ItemManager: the system wiring all of the above to input and drawing
"""

from blockbuild.systems.items.engine import SlotAssignmentEngine
from blockbuild.systems.items.layout import GridLayout, HotbarLayout
from blockbuild.systems.items.manager import ItemManager
from blockbuild.systems.items.model import Container, ContainerKind, GridPlacement, HotbarPlacement, ItemToken, Placement
from blockbuild.systems.items.selection import SelectionTracker, WrappingCursor, wrap_index
from blockbuild.systems.items.visibility import VisibilityPolicy

__all__ = [
    "Container",
    "ContainerKind",
    "GridLayout",
    "GridPlacement",
    "HotbarLayout",
    "HotbarPlacement",
    "ItemManager",
    "ItemToken",
    "Placement",
    "SelectionTracker",
    "SlotAssignmentEngine",
    "VisibilityPolicy",
    "WrappingCursor",
    "wrap_index",
]
