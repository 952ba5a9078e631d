"""Build system for the block map.

This module provides the BuildManager class, which owns the block map shown in
the build area. The map is sparse: only occupied cells are stored, keyed by
``(x, y)`` with ``x`` the column and ``y`` the row counted from the top.

In documents the map is stored as ``MapData``, a mapping of ``"x,y"`` strings to
block types, so it can be written as one JSON-safe field. get_map_data() and
load_map_data() convert between the two.

The build and remove buttons of the toolbar (see toolbar.py) switch the tool, as
do the B and R keys.

The build manager does not decide what a click means. Clicking a cell publishes a
CellClickedEvent; the sync system reads the current tool and calls place_block()
or remove_block() before persisting the change.

Example usage:
    build = context.build_manager
    default_map = build.reset_to_default()
    build.place_block(3, 10, "stone")
    build.get_map_data()["3,10"]  # "stone"
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import arcade

from blockbuild.conf import settings
from blockbuild.sprites import draw_block
from blockbuild.systems.base import BaseSystem
from blockbuild.systems.build.events import CellClickedEvent
from blockbuild.systems.build.toolbar import ToolbarButton, ToolbarLayout, button_label, draw_button
from blockbuild.systems.registry import SystemRegistry

if TYPE_CHECKING:
    from blockbuild.systems.game_context import GameContext
    from blockbuild.systems.sync.documents import MapData

logger = logging.getLogger(__name__)


class BuildTool(Enum):
    """What a click in the build area does."""

    BUILD = "build"
    REMOVE = "remove"


def cell_key(x: int, y: int) -> str:
    """MapData key of a cell."""
    return f"{x},{y}"


def parse_cell_key(key: str) -> tuple[int, int]:
    """Parse a MapData key into ``(x, y)``.

    Raises:
        ValueError: If the key is not two comma separated integers.
    """
    x, y = key.split(",")
    return int(x), int(y)


@SystemRegistry.register
class BuildManager(BaseSystem):
    """Owns the block map and the current build tool.

    Attributes:
        blocks: Occupied cells, mapping ``(x, y)`` to block type.
        tool: Current tool; decides whether a cell click builds or removes.
        columns: Width of the build area in cells.
        rows: Height of the build area in cells.
        cell_size: Size of one cell in pixels.
        origin: Screen position of the build area's bottom-left corner.
        toolbar: Geometry of the toolbar buttons next to the hotbar.
    """

    name: ClassVar[str] = "build"
    role: ClassVar[str | None] = "build_manager"
    dependencies: ClassVar[list[str]] = []

    def __init__(self) -> None:
        """Initialize an empty build area; dimensions are read in setup()."""
        self.context: GameContext | None = None
        self.blocks: dict[tuple[int, int], str] = {}
        self.tool = BuildTool.BUILD
        self.tool_text: arcade.Text | None = None
        self.button_labels: dict[ToolbarButton, arcade.Text] = {}

    def setup(self, context: GameContext) -> None:
        """Read the build area dimensions and show the default map.

        Args:
            context: Game context providing the event bus.
        """
        self.context = context
        self.columns = settings.BUILD_COLUMNS
        self.rows = settings.BUILD_ROWS
        self.cell_size = settings.BUILD_CELL_SIZE
        self.origin = (settings.BUILD_ORIGIN_X, settings.BUILD_ORIGIN_Y)
        self.toolbar = ToolbarLayout.from_settings()
        self.reset_to_default()
        logger.debug("BuildManager setup complete (%dx%d)", self.columns, self.rows)

    def cleanup(self) -> None:
        """Clear the block map."""
        self.blocks.clear()
        logger.debug("BuildManager cleanup complete")

    def in_bounds(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` is a cell of the build area."""
        return 0 <= x < self.columns and 0 <= y < self.rows

    def block_at(self, x: int, y: int) -> str | None:
        """Block type in a cell, or None if it is empty."""
        return self.blocks.get((x, y))

    def place_block(self, x: int, y: int, block_type: str) -> bool:
        """Put a block into a cell, replacing any block already there.

        Returns:
            True if placed, False if the cell is outside the build area.
        """
        if not self.in_bounds(x, y):
            logger.warning("Cannot place block outside build area: (%d, %d)", x, y)
            return False
        self.blocks[(x, y)] = block_type
        logger.debug("Placed %s at (%d, %d)", block_type, x, y)
        return True

    def remove_block(self, x: int, y: int) -> str | None:
        """Empty a cell.

        Returns:
            The removed block type, or None if the cell was already empty.
        """
        removed = self.blocks.pop((x, y), None)
        if removed:
            logger.debug("Removed %s from (%d, %d)", removed, x, y)
        return removed

    def get_map_data(self) -> MapData:
        """Current map as a document-safe mapping of ``"x,y"`` to block type."""
        return {cell_key(x, y): block_type for (x, y), block_type in sorted(self.blocks.items())}

    def load_map_data(self, map_data: MapData) -> None:
        """Replace the shown map with ``map_data``.

        Entries with unparseable keys or cells outside the build area are skipped.
        """
        self.blocks.clear()
        for key, block_type in map_data.items():
            try:
                x, y = parse_cell_key(key)
            except ValueError:
                logger.warning("Skipping map entry with invalid cell key: %r", key)
                continue
            if not self.in_bounds(x, y):
                logger.warning("Skipping map entry outside build area: %r", key)
                continue
            self.blocks[(x, y)] = block_type
        logger.debug("Loaded map with %d blocks", len(self.blocks))

    def default_map_data(self) -> MapData:
        """The default map: a ground strip along the bottom of the build area.

        Rows come from settings.DEFAULT_GROUND, top row first.
        """
        ground = settings.DEFAULT_GROUND
        first_row = self.rows - len(ground)
        return {
            cell_key(x, first_row + offset): block_type
            for offset, block_type in enumerate(ground)
            for x in range(self.columns)
        }

    def reset_to_default(self) -> MapData:
        """Show the default map and return its data."""
        map_data = self.default_map_data()
        self.load_map_data(map_data)
        return map_data

    def set_tool(self, tool: BuildTool) -> None:
        """Switch between building and removing."""
        self.tool = tool
        logger.debug("Build tool: %s", tool.value)

    def cell_at(self, screen_x: float, screen_y: float) -> tuple[int, int] | None:
        """Cell under a screen point, or None outside the build area."""
        left, bottom = self.origin
        if screen_x < left or screen_y < bottom:
            return None
        x = int((screen_x - left) // self.cell_size)
        y = self.rows - 1 - int((screen_y - bottom) // self.cell_size)
        if not self.in_bounds(x, y):
            return None
        return (x, y)

    def cell_center(self, x: int, y: int) -> tuple[float, float]:
        """Screen position of a cell's center."""
        left, bottom = self.origin
        return (
            left + (x + 0.5) * self.cell_size,
            bottom + (self.rows - 1 - y + 0.5) * self.cell_size,
        )

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> bool:
        """Switch tools from the toolbar, or publish a CellClickedEvent for left clicks inside the build area."""
        if button != arcade.MOUSE_BUTTON_LEFT:
            return False
        toolbar_button = self.toolbar.button_at(x, y)
        if toolbar_button is ToolbarButton.BUILD:
            self.set_tool(BuildTool.BUILD)
            return True
        if toolbar_button is ToolbarButton.REMOVE:
            self.set_tool(BuildTool.REMOVE)
            return True
        cell = self.cell_at(x, y)
        if cell is None or self.context is None:
            return False
        self.context.event_bus.publish(CellClickedEvent(x=cell[0], y=cell[1], existing_type=self.block_at(*cell)))
        return True

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Select the build tool with B and the remove tool with R."""
        if symbol == arcade.key.B:
            self.set_tool(BuildTool.BUILD)
            return True
        if symbol == arcade.key.R:
            self.set_tool(BuildTool.REMOVE)
            return True
        return False

    def on_draw(self) -> None:
        """Draw every block of the map."""
        for (x, y), block_type in self.blocks.items():
            center_x, center_y = self.cell_center(x, y)
            draw_block(block_type, center_x, center_y, self.cell_size)

    def on_draw_ui(self) -> None:
        """Draw the build and remove buttons and the current tool name in the top-left corner."""
        window = self.context.window if self.context else None
        if window is None:
            return

        for toolbar_button, tool in ((ToolbarButton.BUILD, BuildTool.BUILD), (ToolbarButton.REMOVE, BuildTool.REMOVE)):
            if toolbar_button not in self.button_labels:
                self.button_labels[toolbar_button] = button_label(toolbar_button)
            draw_button(self.toolbar, toolbar_button, self.button_labels[toolbar_button], active=self.tool is tool)

        label = f"Tool: {self.tool.value} (B/R)"
        if self.tool_text is None:
            self.tool_text = arcade.Text(
                label, 10, window.height - 10, arcade.color.BLACK, font_size=12, anchor_y="top"
            )
        else:
            self.tool_text.text = label
            self.tool_text.y = window.height - 10
        self.tool_text.draw()
