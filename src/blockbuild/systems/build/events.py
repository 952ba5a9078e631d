"""Events published by the build system."""

from dataclasses import dataclass

from blockbuild.events import Event


@dataclass
class CellClickedEvent(Event):
    """Fired when the player clicks a cell of the build area.

    The build system only reports the click; the sync system decides whether it
    builds or removes (depending on the current tool) and persists the result.

    Attributes:
        x: Column of the clicked cell.
        y: Row of the clicked cell (0 is the top row).
        existing_type: Block type already in the cell, or None if it is empty.
    """

    x: int
    y: int
    existing_type: str | None = None
