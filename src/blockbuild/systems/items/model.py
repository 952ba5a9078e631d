"""Containers, placements and item tokens.

An ItemToken is the on-screen unit for one inventory ledger entry. It always owns
a permanent home cell in the inventory grid and, at any moment, exactly one
active placement: either that home cell or one hotbar slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ContainerKind(Enum):
    """The two containers an item token can be placed in."""

    HOTBAR = "hotbar"
    GRID = "grid"


@dataclass(frozen=True)
class HotbarPlacement:
    """Token is shown in a hotbar slot."""

    index: int

    @property
    def kind(self) -> ContainerKind:
        """Container this placement belongs to."""
        return ContainerKind.HOTBAR


@dataclass(frozen=True)
class GridPlacement:
    """Token is shown at a grid cell."""

    row: int
    col: int

    @property
    def kind(self) -> ContainerKind:
        """Container this placement belongs to."""
        return ContainerKind.GRID


Placement = HotbarPlacement | GridPlacement


class ItemToken:
    """A placed visual unit for one inventory item type.

    Attributes:
        item_type: Ledger type this token represents (e.g. "dirt").
        placement: The single active placement.
        visible: Whether the token is currently drawn.
        position: Screen-space center, derived from the active placement's slot.
    """

    def __init__(self, item_type: str, home: GridPlacement) -> None:
        """Create a token resting at its home cell."""
        self.item_type = item_type
        self._home = home
        self.placement: Placement = home
        self.visible = False
        self.position: tuple[float, float] = (0.0, 0.0)

    def __repr__(self) -> str:
        return f"ItemToken({self.item_type!r}, home={self._home}, placement={self.placement})"

    @property
    def home(self) -> GridPlacement:
        """Permanent grid cell, kept while the token sits in the hotbar."""
        return self._home

    @property
    def location(self) -> ContainerKind:
        """Container of the active placement."""
        return self.placement.kind

    @property
    def hotbar_index(self) -> int | None:
        """Hotbar slot index, or None when resting in the grid."""
        if isinstance(self.placement, HotbarPlacement):
            return self.placement.index
        return None

    @property
    def grid_row(self) -> int:
        """Row of the home cell."""
        return self._home.row

    @property
    def grid_col(self) -> int:
        """Column of the home cell."""
        return self._home.col

    @property
    def in_hotbar(self) -> bool:
        """True if the active placement is a hotbar slot."""
        return self.location is ContainerKind.HOTBAR


class Container:
    """Fixed-capacity set of slots holding at most one token each.

    The hotbar is a single row addressed by int index; the grid is addressed by
    ``(row, col)``. Capacity is fixed at construction.

    Attributes:
        kind: Which container this is.
        rows: Number of rows (1 for the hotbar).
        cols: Number of columns.
    """

    def __init__(self, kind: ContainerKind, rows: int, cols: int) -> None:
        """Create an empty container.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if rows <= 0 or cols <= 0:
            msg = f"Container dimensions must be positive, got {rows}x{cols}"
            raise ValueError(msg)
        self.kind = kind
        self.rows = rows
        self.cols = cols
        self._slots: list[ItemToken | None] = [None] * (rows * cols)

    @classmethod
    def hotbar(cls, size: int) -> Container:
        """Create a linear hotbar with ``size`` slots."""
        return cls(ContainerKind.HOTBAR, 1, size)

    @classmethod
    def grid(cls, rows: int, cols: int) -> Container:
        """Create a rows x cols inventory grid."""
        return cls(ContainerKind.GRID, rows, cols)

    @property
    def capacity(self) -> int:
        """Total number of slots."""
        return len(self._slots)

    def _offset(self, address: int | tuple[int, int]) -> int:
        if isinstance(address, tuple):
            row, col = address
            if not (0 <= row < self.rows and 0 <= col < self.cols):
                msg = f"{self.kind.value} cell {address} out of range"
                raise IndexError(msg)
            return row * self.cols + col
        if not 0 <= address < self.capacity:
            msg = f"{self.kind.value} slot {address} out of range"
            raise IndexError(msg)
        return address

    def __getitem__(self, address: int | tuple[int, int]) -> ItemToken | None:
        return self._slots[self._offset(address)]

    def __setitem__(self, address: int | tuple[int, int], token: ItemToken | None) -> None:
        self._slots[self._offset(address)] = token

    def __iter__(self) -> Iterator[ItemToken | None]:
        return iter(self._slots)

    def occupants(self) -> list[ItemToken]:
        """Tokens currently held, in slot order."""
        return [token for token in self._slots if token is not None]

    def find(self, token: ItemToken) -> int | None:
        """Linear slot offset holding ``token``, or None."""
        for offset, occupant in enumerate(self._slots):
            if occupant is token:
                return offset
        return None

    def first_free_cell(self) -> tuple[int, int] | None:
        """First empty ``(row, col)`` in row-major order, or None when full."""
        for offset, occupant in enumerate(self._slots):
            if occupant is None:
                return divmod(offset, self.cols)
        return None
