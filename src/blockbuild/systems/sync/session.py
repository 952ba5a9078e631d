"""Local session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockbuild.systems.sync.documents import InventoryItem, MapData, UserDocument


@dataclass
class SessionState:
    """Everything the build session owns about the signed-in user.

    Created when the session loads the user document and discarded when the view
    is torn down. It may be ahead of the remote document (after an optimistic
    write) or behind it (before the next push update arrives).

    Attributes:
        user_id: Document id of the user.
        inventory: Quantity ledger.
        money: Current balance.
        current_map_name: Name of the map shown in the build area.
        maps: Local copy of every map, keyed by name.
        remote_known: False when the user document could not be read; the
            session then runs on local defaults and must not write.
    """

    user_id: str
    inventory: list[InventoryItem] = field(default_factory=list)
    money: float = 0
    current_map_name: str = "default"
    maps: dict[str, MapData] = field(default_factory=dict)
    remote_known: bool = True

    @classmethod
    def from_document(cls, user_id: str, document: UserDocument) -> SessionState:
        """Adopt a loaded user document."""
        return cls(
            user_id=user_id,
            inventory=list(document.inventory),
            money=document.money,
            current_map_name=document.current_map,
            maps={name: dict(content) for name, content in document.maps.items()},
        )

    def find_item(self, item_type: str) -> InventoryItem | None:
        """Ledger entry for ``item_type``, or None."""
        for item in self.inventory:
            if item.type == item_type:
                return item
        return None

    @property
    def current_map(self) -> MapData:
        """Local copy of the current map (empty if unknown)."""
        return self.maps.get(self.current_map_name, {})
