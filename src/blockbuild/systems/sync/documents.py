"""User document model, shape detection and legacy migration.

The remote user document currently looks like::

    {
        "inventory": [{"type": "dirt", "count": 3, "price": 5}],
        "money": 10,
        "maps": {"default": {"0,0": "grass"}},
        "currentMap": "default"
    }

Older documents hold a single ``map`` field instead of ``maps``/``currentMap``.
Migration is additive: the legacy ``map`` field is left in place and the same
content is copied into ``maps["default"]``, so an older client reading the
document still finds its map.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

logger = logging.getLogger(__name__)

FIELD_INVENTORY = "inventory"
FIELD_MONEY = "money"
FIELD_MAPS = "maps"
FIELD_CURRENT_MAP = "currentMap"
FIELD_LEGACY_MAP = "map"

MapData = dict[str, str]


class DocumentShape(Enum):
    """Structure of a fetched user document."""

    ABSENT = auto()  # No document for this user
    CURRENT = auto()  # maps + currentMap pointing at an existing entry
    DANGLING_CURRENT = auto()  # maps present, currentMap missing or unknown
    LEGACY = auto()  # single map field, no maps
    CORRUPT = auto()  # neither maps nor map
    UNAVAILABLE = auto()  # fetch failed, shape unknown


@dataclass
class InventoryItem:
    """Quantity ledger entry for one item type.

    Attributes:
        type: Item/block type (e.g. "dirt").
        count: Units owned, never negative.
        price: Purchase price per unit, never negative.
    """

    type: str
    count: int = 0
    price: float = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the remote document."""
        return {"type": self.type, "count": self.count, "price": self.price}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryItem:
        """Create from a document entry, clamping negative numbers to zero."""
        count = int(data.get("count", 0))
        price = data.get("price", 0)
        if count < 0 or price < 0:
            logger.warning("Clamping negative count/price for item: %s", data.get("type"))
        return cls(type=str(data["type"]), count=max(0, count), price=max(0, price))


def parse_inventory(raw: Any) -> list[InventoryItem]:  # noqa: ANN401
    """Parse the ``inventory`` field, skipping malformed entries.

    Args:
        raw: Value of the document's inventory field (expected to be a list).

    Returns:
        Ledger entries in document order.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Inventory field is not a list, ignoring it")
        return []

    items = []
    for entry in raw:
        if not isinstance(entry, dict) or "type" not in entry:
            logger.warning("Skipping malformed inventory entry: %r", entry)
            continue
        try:
            items.append(InventoryItem.from_dict(entry))
        except (TypeError, ValueError):
            logger.warning("Skipping inventory entry with bad numbers: %r", entry)
    return items


def dump_inventory(items: list[InventoryItem]) -> list[dict[str, Any]]:
    """Serialize ledger entries for the remote document."""
    return [item.to_dict() for item in items]


def detect_shape(document: dict[str, Any] | None) -> DocumentShape:
    """Classify a fetched document.

    A ``maps`` field that is empty or not a mapping does not count as maps;
    such a document falls through to the legacy or corrupt shape. A
    ``currentMap`` that is not a string never names a map.
    """
    if document is None:
        return DocumentShape.ABSENT

    maps = document.get(FIELD_MAPS)
    if isinstance(maps, dict) and maps:
        current = document.get(FIELD_CURRENT_MAP)
        if isinstance(current, str) and current in maps:
            return DocumentShape.CURRENT
        return DocumentShape.DANGLING_CURRENT

    if isinstance(document.get(FIELD_LEGACY_MAP), dict):
        return DocumentShape.LEGACY

    return DocumentShape.CORRUPT


def migrate_legacy_document(document: dict[str, Any], map_name: str = "default") -> dict[str, Any]:
    """Return the current-shape equivalent of a legacy document.

    The legacy map becomes ``maps[map_name]`` and ``currentMap`` is set to
    ``map_name``; every other field, including ``map``, is carried over
    unchanged. Documents that are not legacy are returned as an unchanged copy,
    so running the migration again on its own output is a no-op.

    Args:
        document: Fetched document.
        map_name: Name of the map entry created for the legacy map.

    Returns:
        A new document; the input is not modified.
    """
    migrated = copy.deepcopy(document)
    if detect_shape(document) is not DocumentShape.LEGACY:
        return migrated

    migrated[FIELD_MAPS] = {map_name: copy.deepcopy(document[FIELD_LEGACY_MAP])}
    migrated[FIELD_CURRENT_MAP] = map_name
    return migrated


@dataclass
class UserDocument:
    """Typed view of a current-shape user document."""

    inventory: list[InventoryItem] = field(default_factory=list)
    money: float = 0
    maps: dict[str, MapData] = field(default_factory=dict)
    current_map: str = "default"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the remote document layout."""
        return {
            FIELD_INVENTORY: dump_inventory(self.inventory),
            FIELD_MONEY: self.money,
            FIELD_MAPS: copy.deepcopy(self.maps),
            FIELD_CURRENT_MAP: self.current_map,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserDocument:
        """Create from a fetched document; missing fields take defaults."""
        money = data.get(FIELD_MONEY, 0)
        if not isinstance(money, (int, float)) or money < 0:
            logger.warning("Invalid money value %r, using 0", money)
            money = 0

        raw_maps = data.get(FIELD_MAPS)
        maps: dict[str, MapData] = {}
        if isinstance(raw_maps, dict):
            maps = {name: dict(content) if isinstance(content, dict) else {} for name, content in raw_maps.items()}

        return cls(
            inventory=parse_inventory(data.get(FIELD_INVENTORY)),
            money=money,
            maps=maps,
            current_map=str(data.get(FIELD_CURRENT_MAP, "default")),
        )

    @classmethod
    def default(cls, map_data: MapData, map_name: str = "default") -> UserDocument:
        """Fresh document: empty inventory, no money, one map."""
        return cls(inventory=[], money=0, maps={map_name: dict(map_data)}, current_map=map_name)
