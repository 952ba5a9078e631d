"""Slot assignment between the hotbar and the inventory grid.

The engine owns the mapping from item token to slot and keeps every token in
exactly one place. Moving a token into an occupied hotbar slot sends the previous
occupant back to its home cell in the grid; there is no drag state, a click on a
grid token simply moves it into the selected hotbar slot.

Example:
    engine = SlotAssignmentEngine(Container.hotbar(14), Container.grid(3, 14), policy, hotbar, grid)
    dirt = engine.add_token("dirt")
    engine.place_in_hotbar(dirt, 0)
    engine.return_to_grid(0)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blockbuild.systems.items.model import GridPlacement, HotbarPlacement, ItemToken

if TYPE_CHECKING:
    from blockbuild.systems.items.layout import GridLayout, HotbarLayout
    from blockbuild.systems.items.model import Container
    from blockbuild.systems.items.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)


class SlotAssignmentEngine:
    """Places tokens in hotbar slots and returns them to their grid homes.

    Attributes:
        hotbar: Linear container of hotbar slots.
        grid: Grid container; each cell holds the token whose home it is.
        visibility: Policy used to re-derive visibility after every move.
    """

    def __init__(
        self,
        hotbar: Container,
        grid: Container,
        visibility: VisibilityPolicy,
        hotbar_layout: HotbarLayout,
        grid_layout: GridLayout,
    ) -> None:
        """Initialize the engine with empty containers."""
        self.hotbar = hotbar
        self.grid = grid
        self.visibility = visibility
        self.hotbar_layout = hotbar_layout
        self.grid_layout = grid_layout

    @property
    def tokens(self) -> list[ItemToken]:
        """Every token, in home-cell order."""
        return self.grid.occupants()

    def hotbar_token(self, index: int) -> ItemToken | None:
        """Token in hotbar slot ``index``, or None."""
        return self.hotbar[index]

    def token_for(self, item_type: str) -> ItemToken | None:
        """Token representing ``item_type``, or None."""
        for token in self.tokens:
            if token.item_type == item_type:
                return token
        return None

    def token_at_home(self, row: int, col: int) -> ItemToken | None:
        """Token whose home cell is ``(row, col)``, or None."""
        return self.grid[row, col]

    def add_token(self, item_type: str) -> ItemToken | None:
        """Create a token at the first free grid cell.

        Returns:
            The new token, or None when the grid is full.
        """
        cell = self.grid.first_free_cell()
        if cell is None:
            logger.warning("Inventory grid full, no slot for item: %s", item_type)
            return None

        token = ItemToken(item_type, GridPlacement(*cell))
        self.grid[cell] = token
        self._rest_at_home(token)
        logger.debug("Added token %s at %s", item_type, cell)
        return token

    def remove_token(self, token: ItemToken) -> None:
        """Drop a token from both containers."""
        index = token.hotbar_index
        if index is not None and self.hotbar[index] is token:
            self.hotbar[index] = None
        if self.grid[token.home.row, token.home.col] is token:
            self.grid[token.home.row, token.home.col] = None
        token.visible = False
        logger.debug("Removed token %s", token.item_type)

    def place_in_hotbar(self, token: ItemToken, index: int) -> ItemToken | None:
        """Move ``token`` into hotbar slot ``index``.

        A different token already in the slot is sent back to its home cell. A
        token already in another hotbar slot vacates that slot. Placing a token in
        the slot it already occupies does nothing.

        Args:
            token: Token to place.
            index: Target hotbar slot.

        Returns:
            The displaced token, or None if the slot was free or unchanged.

        Raises:
            IndexError: If ``index`` is outside the hotbar.
        """
        occupant = self.hotbar[index]
        if occupant is token:
            return None

        previous = token.hotbar_index
        if previous is not None and self.hotbar[previous] is token:
            self.hotbar[previous] = None

        if occupant is not None:
            self._rest_at_home(occupant)

        token.placement = HotbarPlacement(index)
        token.position = self.hotbar_layout.slot_position(index)
        self.visibility.apply(token)
        self.hotbar[index] = token
        logger.debug("Placed %s in hotbar slot %d", token.item_type, index)
        return occupant

    def return_to_grid(self, index: int) -> ItemToken | None:
        """Send the token in hotbar slot ``index`` back to its home cell.

        Returns:
            The returned token, or None if the slot was empty.

        Raises:
            IndexError: If ``index`` is outside the hotbar.
        """
        token = self.hotbar[index]
        if token is None:
            return None
        self._rest_at_home(token)
        logger.debug("Returned %s from hotbar slot %d", token.item_type, index)
        return token

    def _rest_at_home(self, token: ItemToken) -> None:
        index = token.hotbar_index
        if index is not None and self.hotbar[index] is token:
            self.hotbar[index] = None
        token.placement = token.home
        token.position = self.grid_layout.cell_position(token.home.row, token.home.col)
        self.visibility.apply(token)
