"""Tests for ItemManager."""

from __future__ import annotations

from typing import TYPE_CHECKING

import arcade
import pytest

from blockbuild.systems.build import ToolbarButton
from blockbuild.systems.items.model import ContainerKind, GridPlacement
from blockbuild.systems.sync.documents import InventoryItem
from blockbuild.systems.sync.events import InventoryChangedEvent

if TYPE_CHECKING:
    from blockbuild.systems.game_context import GameContext
    from blockbuild.systems.items import ItemManager


@pytest.fixture
def items(game_context: GameContext) -> ItemManager:
    """Item manager mirroring a three-item ledger."""
    manager = game_context.item_manager
    game_context.event_bus.publish(
        InventoryChangedEvent(
            items=[InventoryItem("dirt", 3, 5), InventoryItem("grass", 1, 5), InventoryItem("stone", 0, 10)]
        )
    )
    return manager


class TestLedgerMirror:
    """Tokens follow the inventory ledger."""

    def test_tokens_created_per_item_type(self, items: ItemManager) -> None:
        """Test that each ledger entry gets a grid token at the next free cell."""
        assert [t.item_type for t in items.engine.tokens] == ["dirt", "grass", "stone"]
        assert items.engine.token_for("grass").home == GridPlacement(0, 1)
        assert items.count_of("dirt") == 3
        assert items.count_of("wood") == 0

    def test_update_keeps_placement_and_drops_missing_types(self, items: ItemManager) -> None:
        """Test that a new ledger keeps existing tokens where they are."""
        dirt = items.engine.token_for("dirt")
        items.click_grid_token(dirt)

        items.set_items([InventoryItem("dirt", 9, 5), InventoryItem("wood", 2, 3)])

        assert items.engine.token_for("dirt") is dirt
        assert dirt.hotbar_index == 0
        assert items.engine.token_for("grass") is None
        assert items.engine.token_for("wood").home == GridPlacement(0, 1)
        assert items.count_of("dirt") == 9


class TestSelection:
    """Hotbar and grid clicks, wheel and keys."""

    def test_grid_click_places_token_in_selected_slot(self, items: ItemManager) -> None:
        """Test placing a grid token into the selected hotbar slot."""
        items.selection.select_slot(4)
        grass = items.engine.token_for("grass")

        displaced = items.click_grid_token(grass)

        assert displaced is None
        assert grass.hotbar_index == 4
        assert items.selection.selected_cell == (0, 1)
        assert items.selected_item_type() == "grass"

    def test_grid_click_displaces_previous_occupant(self, items: ItemManager) -> None:
        """Test that the slot's previous token goes back to its home cell."""
        dirt = items.engine.token_for("dirt")
        items.click_grid_token(dirt)

        displaced = items.click_grid_token(items.engine.token_for("stone"))

        assert displaced is dirt
        assert dirt.location is ContainerKind.GRID
        assert dirt.visible is False
        assert items.selected_item_type() == "stone"

    def test_hotbar_click_returns_token_only_while_grid_open(self, items: ItemManager) -> None:
        """Test that hotbar clicks select, and also return the token when the grid is open."""
        dirt = items.engine.token_for("dirt")
        items.click_grid_token(dirt)

        assert items.click_hotbar_slot(0) is None
        assert dirt.in_hotbar

        items.set_grid_open(True)
        assert items.click_hotbar_slot(0) is dirt
        assert dirt.location is ContainerKind.GRID
        assert dirt.visible is True
        assert items.selected_item_type() is None

    def test_mouse_press_on_hotbar_and_grid(self, items: ItemManager) -> None:
        """Test routing screen clicks to slots and cells."""
        slot_x, slot_y = items.hotbar_layout.slot_position(3)
        assert items.on_mouse_press(slot_x, slot_y, arcade.MOUSE_BUTTON_LEFT, 0) is True
        assert items.selection.selected_slot == 3

        cell_x, cell_y = items.grid_layout.cell_position(0, 0)
        assert items.on_mouse_press(cell_x, cell_y, arcade.MOUSE_BUTTON_LEFT, 0) is False

        items.set_grid_open(True)
        assert items.on_mouse_press(cell_x, cell_y, arcade.MOUSE_BUTTON_LEFT, 0) is True
        assert items.engine.token_for("dirt").hotbar_index == 3

    def test_mouse_press_on_empty_grid_cell_only_selects(self, items: ItemManager) -> None:
        """Test that clicking an empty cell moves the grid cursor and nothing else."""
        items.set_grid_open(True)
        before = [t.placement for t in items.engine.tokens]

        cell_x, cell_y = items.grid_layout.cell_position(2, 5)
        assert items.on_mouse_press(cell_x, cell_y, arcade.MOUSE_BUTTON_LEFT, 0) is True

        assert items.selection.selected_cell == (2, 5)
        assert [t.placement for t in items.engine.tokens] == before

    def test_inventory_button_toggles_grid(self, items: ItemManager) -> None:
        """Test that the inventory button opens and closes the grid panel."""
        x, y = items.toolbar.button_position(ToolbarButton.INVENTORY)

        assert items.on_mouse_press(x, y, arcade.MOUSE_BUTTON_LEFT, 0) is True
        assert items.grid_open is True
        assert items.engine.token_for("dirt").visible is True

        assert items.on_mouse_press(x, y, arcade.MOUSE_BUTTON_LEFT, 0) is True
        assert items.grid_open is False
        assert items.engine.token_for("dirt").visible is False

    def test_tool_buttons_fall_through(self, items: ItemManager) -> None:
        """Test that the build and remove buttons are left to the build system."""
        for button in (ToolbarButton.BUILD, ToolbarButton.REMOVE):
            x, y = items.toolbar.button_position(button)
            assert items.on_mouse_press(x, y, arcade.MOUSE_BUTTON_LEFT, 0) is False
        assert items.grid_open is False

    def test_mouse_press_elsewhere_not_handled(self, items: ItemManager) -> None:
        """Test that clicks off the hotbar with the grid closed fall through."""
        assert items.on_mouse_press(900, 500, arcade.MOUSE_BUTTON_LEFT, 0) is False

    @pytest.mark.parametrize(
        ("start", "scroll_y", "expected"),
        [(0, -1, 1), (13, -1, 0), (0, 1, 13), (5, 1, 4)],
    )
    def test_wheel_wraps(self, items: ItemManager, start: int, scroll_y: float, expected: int) -> None:
        """Test that the wheel moves the hotbar cursor with wrap-around."""
        items.selection.select_slot(start)

        assert items.on_mouse_scroll(0, 0, 0, scroll_y) is True
        assert items.selection.selected_slot == expected
        assert items.selection.hotbar_indicator == items.hotbar_layout.slot_position(expected)

    def test_wheel_without_vertical_movement(self, items: ItemManager) -> None:
        """Test that horizontal-only scrolling is not handled."""
        assert items.on_mouse_scroll(0, 0, 1, 0) is False

    def test_digit_keys_select_slots(self, items: ItemManager) -> None:
        """Test that 1-9 select slots 0-8 and 0 selects slot 9."""
        items.on_key_press(arcade.key.KEY_3, 0)
        assert items.selection.selected_slot == 2

        items.on_key_press(arcade.key.KEY_0, 0)
        assert items.selection.selected_slot == 9

    def test_unhandled_key(self, items: ItemManager) -> None:
        """Test that other keys fall through."""
        assert items.on_key_press(arcade.key.Z, 0) is False


class TestGridPanel:
    """Opening and closing the grid panel."""

    def test_toggle_with_keys(self, items: ItemManager) -> None:
        """Test that E and I both toggle the panel."""
        assert items.on_key_press(arcade.key.E, 0) is True
        assert items.grid_open

        items.on_key_press(arcade.key.I, 0)
        assert not items.grid_open

    def test_grid_tokens_follow_panel_state(self, items: ItemManager) -> None:
        """Test that grid tokens show and hide with the panel while hotbar tokens stay visible."""
        dirt = items.engine.token_for("dirt")
        grass = items.engine.token_for("grass")
        items.click_grid_token(dirt)

        items.set_grid_open(True)
        assert grass.visible is True
        assert dirt.visible is True

        items.set_grid_open(False)
        assert grass.visible is False
        assert dirt.visible is True

    def test_reopen_restores_grid_indicator(self, items: ItemManager) -> None:
        """Test that the grid outline comes back at the last selected cell."""
        items.set_grid_open(True)
        items.selection.select_cell(1, 6)
        items.set_grid_open(False)
        assert items.selection.grid_indicator_visible is False

        items.toggle_grid()

        assert items.selection.grid_indicator_visible is True
        assert items.selection.grid_indicator == items.grid_layout.cell_position(1, 6)

    def test_cleanup_stops_mirroring(self, game_context: GameContext, items: ItemManager) -> None:
        """Test that inventory events are ignored after cleanup."""
        items.cleanup()

        game_context.event_bus.publish(InventoryChangedEvent(items=[InventoryItem("wood", 1, 1)]))

        assert items.items == {}
        assert items.engine.token_for("wood") is None
