"""Selection cursors for the hotbar and the inventory grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockbuild.systems.items.layout import GridLayout, HotbarLayout


def wrap_index(requested: int, size: int) -> int:
    """Wrap any integer into ``range(size)``.

    Python's ``%`` already yields a non-negative result for a positive ``size``,
    so overshoot in either direction lands on a valid index.
    """
    return requested % size


class WrappingCursor:
    """An index into ``range(size)`` that wraps around on every move.

    Attributes:
        size: Number of positions.
        index: Current position.
    """

    def __init__(self, size: int) -> None:
        """Create a cursor at position 0.

        Raises:
            ValueError: If size is not positive.
        """
        if size <= 0:
            msg = f"Cursor size must be positive, got {size}"
            raise ValueError(msg)
        self.size = size
        self.index = 0

    def select(self, requested: int) -> int:
        """Jump to ``requested`` (wrapped) and return the new index."""
        self.index = wrap_index(requested, self.size)
        return self.index

    def move(self, delta: int) -> int:
        """Move by ``delta`` positions (wrapped) and return the new index."""
        return self.select(self.index + delta)


class SelectionTracker:
    """Independent cursors for the hotbar and the grid, plus their indicators.

    Moving a cursor repositions its selection indicator to the selected slot's
    screen position. Selection never touches token state.

    Attributes:
        hotbar_indicator: Screen position of the hotbar selection outline.
        grid_indicator: Screen position of the grid selection outline.
        grid_indicator_visible: Whether the grid outline is drawn.
    """

    def __init__(self, hotbar_layout: HotbarLayout, grid_layout: GridLayout) -> None:
        """Create both cursors at their first slot."""
        self.hotbar_layout = hotbar_layout
        self.grid_layout = grid_layout
        self._hotbar = WrappingCursor(hotbar_layout.num_slots)
        self._row = WrappingCursor(grid_layout.rows)
        self._col = WrappingCursor(grid_layout.cols)
        self.hotbar_indicator = hotbar_layout.slot_position(0)
        self.grid_indicator = grid_layout.cell_position(0, 0)
        self.grid_indicator_visible = False

    @property
    def selected_slot(self) -> int:
        """Selected hotbar slot."""
        return self._hotbar.index

    @property
    def selected_cell(self) -> tuple[int, int]:
        """Selected grid ``(row, col)``."""
        return (self._row.index, self._col.index)

    def select_slot(self, index: int) -> int:
        """Select a hotbar slot; any integer wraps to a valid slot."""
        selected = self._hotbar.select(index)
        self.hotbar_indicator = self.hotbar_layout.slot_position(selected)
        return selected

    def move_slot(self, delta: int) -> int:
        """Move the hotbar cursor by ``delta`` slots."""
        return self.select_slot(self._hotbar.index + delta)

    def select_cell(self, row: int, col: int) -> tuple[int, int]:
        """Select a grid cell; each axis wraps independently."""
        selected = (self._row.select(row), self._col.select(col))
        self.grid_indicator = self.grid_layout.cell_position(*selected)
        return selected

    def show_grid_indicator(self, visible: bool) -> None:
        """Show or hide the grid outline, restoring it to the last cell when shown."""
        self.grid_indicator_visible = visible
        if visible:
            self.select_cell(*self.selected_cell)
