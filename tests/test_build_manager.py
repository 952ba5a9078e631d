"""Tests for BuildManager."""

from __future__ import annotations

from typing import TYPE_CHECKING

import arcade
import pytest

from blockbuild.systems.build import BuildTool, CellClickedEvent, ToolbarButton, cell_key, parse_cell_key

if TYPE_CHECKING:
    from blockbuild.systems.build import BuildManager
    from blockbuild.systems.game_context import GameContext


@pytest.fixture
def build(game_context: GameContext) -> BuildManager:
    """Build manager of the shared context (10x8 cells of 32px at (0, 144))."""
    return game_context.build_manager


def test_cell_keys() -> None:
    """Test MapData key formatting and parsing."""
    assert cell_key(3, 7) == "3,7"
    assert parse_cell_key("3,7") == (3, 7)
    with pytest.raises(ValueError, match="invalid literal"):
        parse_cell_key("a,b")
    with pytest.raises(ValueError, match="not enough values"):
        parse_cell_key("12")


class TestMapData:
    """Map content and conversion to and from MapData."""

    def test_setup_shows_default_ground(self, build: BuildManager) -> None:
        """Test that the default map is a grass row above a dirt row at the bottom."""
        data = build.get_map_data()

        assert len(data) == 20
        assert data["0,6"] == "grass"
        assert data["9,7"] == "dirt"
        assert build.block_at(4, 5) is None

    def test_place_and_remove(self, build: BuildManager) -> None:
        """Test placing a block, replacing it and removing it."""
        assert build.place_block(2, 2, "stone") is True
        assert build.get_map_data()["2,2"] == "stone"

        assert build.remove_block(2, 2) == "stone"
        assert build.remove_block(2, 2) is None
        assert "2,2" not in build.get_map_data()

    def test_place_outside_area_rejected(self, build: BuildManager) -> None:
        """Test that cells outside the build area are refused."""
        assert build.place_block(10, 0, "stone") is False
        assert build.place_block(0, -1, "stone") is False
        assert build.in_bounds(9, 7)
        assert not build.in_bounds(9, 8)

    def test_load_replaces_map(self, build: BuildManager) -> None:
        """Test that loading map data clears the previous map."""
        build.load_map_data({"1,1": "sand", "4,2": "wood"})

        assert build.get_map_data() == {"1,1": "sand", "4,2": "wood"}
        assert build.block_at(0, 7) is None

    def test_load_skips_bad_entries(self, build: BuildManager) -> None:
        """Test that invalid keys and out-of-area cells are skipped."""
        build.load_map_data({"1,1": "sand", "x,y": "wood", "50,1": "stone", "3": "dirt"})

        assert build.get_map_data() == {"1,1": "sand"}

    def test_reset_to_default(self, build: BuildManager) -> None:
        """Test that reset shows and returns the default map."""
        build.load_map_data({})

        data = build.reset_to_default()

        assert data == build.default_map_data()
        assert build.get_map_data() == data


class TestInput:
    """Screen geometry, clicks and tool keys."""

    def test_cell_at_counts_rows_from_top(self, build: BuildManager) -> None:
        """Test mapping screen points to cells."""
        assert build.cell_at(16, 160) == (0, 7)
        assert build.cell_at(16, 144 + 8 * 32 - 1) == (0, 0)
        assert build.cell_at(319, 150) == (9, 7)
        assert build.cell_at(320, 150) is None
        assert build.cell_at(16, 100) is None

    def test_cell_center_round_trips(self, build: BuildManager) -> None:
        """Test that a cell's center maps back to the same cell."""
        assert build.cell_at(*build.cell_center(6, 3)) == (6, 3)

    def test_left_click_publishes_cell_click(self, game_context: GameContext, build: BuildManager) -> None:
        """Test that a click reports the cell and its current block."""
        clicks: list[CellClickedEvent] = []
        game_context.event_bus.subscribe(CellClickedEvent, clicks.append)

        assert build.on_mouse_press(16, 160, arcade.MOUSE_BUTTON_LEFT, 0) is True
        assert build.on_mouse_press(16, 144 + 8 * 32 - 1, arcade.MOUSE_BUTTON_LEFT, 0) is True

        assert clicks == [CellClickedEvent(0, 7, "dirt"), CellClickedEvent(0, 0, None)]

    def test_other_clicks_ignored(self, game_context: GameContext, build: BuildManager) -> None:
        """Test that right clicks and clicks outside the area publish nothing."""
        clicks: list[CellClickedEvent] = []
        game_context.event_bus.subscribe(CellClickedEvent, clicks.append)

        assert build.on_mouse_press(16, 160, arcade.MOUSE_BUTTON_RIGHT, 0) is False
        assert build.on_mouse_press(16, 20, arcade.MOUSE_BUTTON_LEFT, 0) is False
        assert clicks == []

    def test_tool_keys(self, build: BuildManager) -> None:
        """Test switching tools with R and B."""
        assert build.tool is BuildTool.BUILD

        assert build.on_key_press(arcade.key.R, 0) is True
        assert build.tool is BuildTool.REMOVE

        build.on_key_press(arcade.key.B, 0)
        assert build.tool is BuildTool.BUILD
        assert build.on_key_press(arcade.key.Q, 0) is False


class TestToolbar:
    """Build, remove and inventory buttons next to the hotbar."""

    def test_buttons_sit_right_of_hotbar(self, build: BuildManager) -> None:
        """Test the button row geometry against the window's right edge."""
        toolbar = build.toolbar
        build_x, build_y = toolbar.button_position(ToolbarButton.BUILD)
        inventory_x, inventory_y = toolbar.button_position(ToolbarButton.INVENTORY)

        assert toolbar.button_size == pytest.approx(636 * 0.16)
        assert inventory_x + toolbar.button_size / 2 == pytest.approx(1280 - 20)
        assert inventory_x - build_x == pytest.approx(2 * (toolbar.button_size + 35))
        assert build_y == inventory_y == pytest.approx(10 + 636 * 0.16 / 2)

    def test_button_at(self, build: BuildManager) -> None:
        """Test hit-testing each button, the gaps between them and points off the row."""
        toolbar = build.toolbar
        for button in ToolbarButton:
            assert toolbar.button_at(*toolbar.button_position(button)) is button

        build_x, build_y = toolbar.button_position(ToolbarButton.BUILD)
        gap_x = build_x + toolbar.button_size / 2 + 35 / 2
        assert toolbar.button_at(gap_x, build_y) is None
        assert toolbar.button_at(build_x, build_y + toolbar.button_size) is None

    @pytest.mark.parametrize(
        ("button", "start", "expected"),
        [
            (ToolbarButton.REMOVE, BuildTool.BUILD, BuildTool.REMOVE),
            (ToolbarButton.BUILD, BuildTool.REMOVE, BuildTool.BUILD),
        ],
    )
    def test_tool_buttons_switch_tool(
        self,
        game_context: GameContext,
        build: BuildManager,
        button: ToolbarButton,
        start: BuildTool,
        expected: BuildTool,
    ) -> None:
        """Test that clicking a tool button switches tools without clicking a cell."""
        clicks: list[CellClickedEvent] = []
        game_context.event_bus.subscribe(CellClickedEvent, clicks.append)
        build.set_tool(start)

        assert build.on_mouse_press(*build.toolbar.button_position(button), arcade.MOUSE_BUTTON_LEFT, 0) is True

        assert build.tool is expected
        assert clicks == []

    def test_inventory_button_left_to_items(self, build: BuildManager) -> None:
        """Test that the build system does not handle the inventory button."""
        x, y = build.toolbar.button_position(ToolbarButton.INVENTORY)

        assert build.on_mouse_press(x, y, arcade.MOUSE_BUTTON_LEFT, 0) is False
        assert build.tool is BuildTool.BUILD
