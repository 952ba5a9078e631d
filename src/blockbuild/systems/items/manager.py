"""Item system binding the inventory ledger to hotbar and grid tokens.

This module provides the ItemManager class, the system that puts the slot engine,
the selection cursors and the visibility policy on screen. It keeps one token per
inventory entry, routes clicks, scroll and keys to the engine and cursors, and
draws the hotbar, the grid panel and both selection outlines.

Input handled:
- Hotbar click: select the slot, then (only while the grid is open) send its token
  back to the grid
- Grid click on a token: select that cell, then place the token into the selected
  hotbar slot (displacing whatever was there)
- Mouse wheel: move the hotbar cursor, wrapping at both ends
- Inventory button (right of the hotbar), E or I: open/close the grid panel
- 1-9, 0: select hotbar slots 0-9

The ledger itself (counts, prices) is owned by the sync system; this system only
mirrors it. Whenever an InventoryChangedEvent arrives, tokens are created for new
item types and removed for types that left the ledger.

Example usage:
    items = context.item_manager
    items.set_grid_open(True)
    items.click_grid_token(items.engine.token_for("dirt"))
    items.selected_item_type()  # "dirt"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

import arcade

from blockbuild.sprites import draw_block
from blockbuild.systems.base import BaseSystem
from blockbuild.systems.build.toolbar import ToolbarButton, ToolbarLayout, button_label, draw_button
from blockbuild.systems.items.engine import SlotAssignmentEngine
from blockbuild.systems.items.layout import GridLayout, HotbarLayout
from blockbuild.systems.items.model import Container
from blockbuild.systems.items.selection import SelectionTracker
from blockbuild.systems.items.visibility import VisibilityPolicy
from blockbuild.systems.registry import SystemRegistry
from blockbuild.systems.sync.events import InventoryChangedEvent

if TYPE_CHECKING:
    from blockbuild.systems.game_context import GameContext
    from blockbuild.systems.items.model import ItemToken
    from blockbuild.systems.sync.documents import InventoryItem

logger = logging.getLogger(__name__)

SLOT_KEYS = [
    arcade.key.KEY_1,
    arcade.key.KEY_2,
    arcade.key.KEY_3,
    arcade.key.KEY_4,
    arcade.key.KEY_5,
    arcade.key.KEY_6,
    arcade.key.KEY_7,
    arcade.key.KEY_8,
    arcade.key.KEY_9,
    arcade.key.KEY_0,
]

# Fraction of a slot covered by the item icon
ICON_FILL = 0.6


@SystemRegistry.register
class ItemManager(BaseSystem):
    """Manages item tokens, hotbar/grid selection and the grid panel.

    Attributes:
        hotbar_layout: Geometry of the hotbar.
        grid_layout: Geometry of the inventory grid panel.
        toolbar: Geometry of the toolbar; only its inventory button is handled here.
        visibility: Visibility policy shared with the engine.
        engine: Slot assignment engine owning token placement.
        selection: Hotbar and grid cursors with their indicator positions.
        items: Mirror of the inventory ledger, keyed by item type.
    """

    name: ClassVar[str] = "items"
    role: ClassVar[str | None] = "item_manager"
    dependencies: ClassVar[list[str]] = []

    def __init__(self) -> None:
        """Initialize the item manager; layouts and engine are created in setup()."""
        self.context: GameContext | None = None
        self.items: dict[str, InventoryItem] = {}
        self.count_texts: dict[str, arcade.Text] = {}
        self.inventory_label: arcade.Text | None = None

    def setup(self, context: GameContext) -> None:
        """Build layouts, containers and cursors from settings.

        Args:
            context: Game context providing the event bus.
        """
        self.context = context

        self.hotbar_layout = HotbarLayout.from_settings()
        self.grid_layout = GridLayout.from_settings(self.hotbar_layout)
        self.toolbar = ToolbarLayout.from_settings()
        self.visibility = VisibilityPolicy(grid_open=False)
        self.engine = SlotAssignmentEngine(
            Container.hotbar(self.hotbar_layout.num_slots),
            Container.grid(self.grid_layout.rows, self.grid_layout.cols),
            self.visibility,
            self.hotbar_layout,
            self.grid_layout,
        )
        self.selection = SelectionTracker(self.hotbar_layout, self.grid_layout)

        context.event_bus.subscribe(InventoryChangedEvent, self._on_inventory_changed)
        logger.debug("ItemManager setup complete")

    def cleanup(self) -> None:
        """Unsubscribe from inventory changes and drop all tokens."""
        if self.context:
            self.context.event_bus.unsubscribe(InventoryChangedEvent, self._on_inventory_changed)
        self.items.clear()
        self.count_texts.clear()
        logger.debug("ItemManager cleanup complete")

    @property
    def grid_open(self) -> bool:
        """Whether the inventory grid panel is open."""
        return self.visibility.grid_open

    def _on_inventory_changed(self, event: InventoryChangedEvent) -> None:
        self.set_items(event.items)

    def set_items(self, items: list[InventoryItem]) -> None:
        """Mirror a new ledger: keep existing tokens, add new types, drop missing ones.

        Tokens of types still present keep their placement, so a remote inventory
        update never reshuffles the hotbar.

        Args:
            items: Full inventory ledger.
        """
        self.items = {item.type: item for item in items}

        for token in list(self.engine.tokens):
            if token.item_type not in self.items:
                self.engine.remove_token(token)
                self.count_texts.pop(token.item_type, None)

        for item in items:
            if self.engine.token_for(item.type) is None:
                self.engine.add_token(item.type)

        logger.debug("Item tokens refreshed: %d types", len(self.items))

    def count_of(self, item_type: str) -> int:
        """Units of ``item_type`` in the mirrored ledger."""
        item = self.items.get(item_type)
        return item.count if item else 0

    def selected_item_type(self) -> str | None:
        """Item type in the selected hotbar slot, or None if the slot is empty."""
        token = self.engine.hotbar_token(self.selection.selected_slot)
        return token.item_type if token else None

    def set_grid_open(self, is_open: bool) -> None:
        """Open or close the grid panel.

        Re-derives visibility of every grid-resident token and restores the grid
        selection outline to the last selected cell when reopened.
        """
        self.visibility.set_grid_open(is_open, self.engine.tokens)
        self.selection.show_grid_indicator(is_open)
        logger.debug("Inventory grid %s", "opened" if is_open else "closed")

    def toggle_grid(self) -> None:
        """Flip the grid panel's open state."""
        self.set_grid_open(not self.grid_open)

    def click_hotbar_slot(self, index: int) -> ItemToken | None:
        """Select a hotbar slot; with the grid open, also return its token to the grid.

        Returns:
            The token sent back to the grid, or None.
        """
        index = self.selection.select_slot(index)
        if not self.grid_open:
            return None
        return self.engine.return_to_grid(index)

    def click_grid_token(self, token: ItemToken) -> ItemToken | None:
        """Select the token's home cell and place it into the selected hotbar slot.

        Returns:
            The token displaced from the hotbar slot, or None.
        """
        self.selection.select_cell(token.home.row, token.home.col)
        return self.engine.place_in_hotbar(token, self.selection.selected_slot)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> bool:
        """Route clicks on the hotbar, the inventory button and the open grid panel."""
        if self.toolbar.button_at(x, y) is ToolbarButton.INVENTORY:
            self.toggle_grid()
            return True

        slot = self.hotbar_layout.slot_at(x, y)
        if slot is not None:
            self.click_hotbar_slot(slot)
            return True

        if not self.grid_open or not self.grid_layout.contains(x, y):
            return False

        cell = self.grid_layout.cell_at(x, y)
        if cell is not None:
            token = self.engine.token_at_home(*cell)
            if token is not None and not token.in_hotbar:
                self.click_grid_token(token)
            else:
                self.selection.select_cell(*cell)
        # Clicks on the open panel never reach the build area
        return True

    def on_mouse_scroll(self, x: float, y: float, scroll_x: float, scroll_y: float) -> bool:
        """Move the hotbar cursor; wheel down moves right, wheel up moves left."""
        if scroll_y < 0:
            self.selection.move_slot(1)
        elif scroll_y > 0:
            self.selection.move_slot(-1)
        else:
            return False
        return True

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Toggle the grid with E/I and select hotbar slots with the digit keys."""
        if symbol in (arcade.key.E, arcade.key.I):
            self.toggle_grid()
            return True

        if symbol in SLOT_KEYS:
            self.selection.select_slot(SLOT_KEYS.index(symbol))
            return True

        return False

    def on_draw_ui(self) -> None:
        """Draw the hotbar, the inventory button, the grid panel (when open) and the selection outlines."""
        self._draw_hotbar()
        if self.inventory_label is None:
            self.inventory_label = button_label(ToolbarButton.INVENTORY)
        draw_button(self.toolbar, ToolbarButton.INVENTORY, self.inventory_label, active=self.grid_open)
        if self.grid_open:
            self._draw_grid()

        for token in self.engine.tokens:
            if token.visible:
                self._draw_token(token)

        hotbar = self.hotbar_layout
        self._draw_outline(self.selection.hotbar_indicator, hotbar.slot_width, hotbar.slot_height)
        if self.selection.grid_indicator_visible:
            self._draw_outline(self.selection.grid_indicator, self.grid_layout.cell_width, self.grid_layout.row_step)

    def _draw_hotbar(self) -> None:
        """Draw the hotbar background and slot frames."""
        layout = self.hotbar_layout
        arcade.draw_lrbt_rectangle_filled(
            layout.left, layout.left + layout.width, layout.bottom, layout.bottom + layout.height, (30, 30, 35, 200)
        )
        for index in range(layout.num_slots):
            x, y = layout.slot_position(index)
            arcade.draw_lrbt_rectangle_outline(
                x - layout.slot_width / 2,
                x + layout.slot_width / 2,
                y - layout.slot_height / 2,
                y + layout.slot_height / 2,
                arcade.color.DIM_GRAY,
                2,
            )

    def _draw_grid(self) -> None:
        """Draw the grid panel background and cell frames."""
        layout = self.grid_layout
        arcade.draw_lrbt_rectangle_filled(
            layout.center_x - layout.width / 2,
            layout.center_x + layout.width / 2,
            layout.center_y - layout.height / 2,
            layout.center_y + layout.height / 2,
            (30, 30, 35, 220),
        )
        for row in range(layout.rows):
            for col in range(layout.cols):
                x, y = layout.cell_position(row, col)
                arcade.draw_lrbt_rectangle_outline(
                    x - layout.cell_width / 2,
                    x + layout.cell_width / 2,
                    y - layout.row_step / 2,
                    y + layout.row_step / 2,
                    arcade.color.DIM_GRAY,
                    1,
                )

    def _draw_token(self, token: ItemToken) -> None:
        """Draw a token's icon and its count."""
        x, y = token.position
        size = min(self.hotbar_layout.slot_width, self.hotbar_layout.slot_height) * ICON_FILL
        draw_block(token.item_type, x, y, size)

        text = self.count_texts.get(token.item_type)
        label = str(self.count_of(token.item_type))
        if text is None:
            text = arcade.Text(label, 0, 0, arcade.color.WHITE, font_size=10, anchor_x="right", bold=True)
            self.count_texts[token.item_type] = text
        text.text = label
        text.x = x + size / 2 + 4
        text.y = y - size / 2 - 4
        text.draw()

    def _draw_outline(self, position: tuple[float, float], width: float, height: float) -> None:
        x, y = position
        arcade.draw_lrbt_rectangle_outline(
            x - width / 2, x + width / 2, y - height / 2, y + height / 2, arcade.color.YELLOW, 3
        )
