"""Build system for the block map.

This package provides:
- BuildManager: sparse block map, default map, tools and cell hit-testing
- BuildTool: build/remove tool selection
- CellClickedEvent: published when a build-area cell is clicked
- ToolbarLayout, ToolbarButton: the build, remove and inventory buttons next to the hotbar
"""

from blockbuild.systems.build.events import CellClickedEvent
from blockbuild.systems.build.manager import BuildManager, BuildTool, cell_key, parse_cell_key
from blockbuild.systems.build.toolbar import ToolbarButton, ToolbarLayout

__all__ = [
    "BuildManager",
    "BuildTool",
    "CellClickedEvent",
    "ToolbarButton",
    "ToolbarLayout",
    "cell_key",
    "parse_cell_key",
]
