"""Screen geometry of the hotbar and the inventory grid.

Slot positions are pure functions of slot address and layout parameters. The
artwork is authored at a large size and drawn scaled by ``UI_SCALE``; slot sizes
are derived from the scaled artwork the same way for every slot. Coordinates are
arcade screen coordinates (origin bottom-left, y up).
"""

from __future__ import annotations

from dataclasses import dataclass

from blockbuild.conf import settings

# Pixels trimmed from each scaled slot so neighbouring outlines don't touch
HOTBAR_SLOT_TRIM = 3.1
GRID_CELL_TRIM = 3.3

# Grid rows are packed tighter than the cell height
GRID_ROW_COMPRESSION = 1.2


@dataclass(frozen=True)
class HotbarLayout:
    """Geometry of the linear hotbar."""

    num_slots: int
    left: float
    bottom: float
    image_width: float
    image_height: float
    scale: float
    slot_inset: float

    @classmethod
    def from_settings(cls) -> HotbarLayout:
        """Build the layout from the global settings."""
        return cls(
            num_slots=settings.HOTBAR_SLOTS,
            left=settings.HOTBAR_LEFT,
            bottom=settings.HOTBAR_BOTTOM,
            image_width=settings.HOTBAR_IMAGE_WIDTH,
            image_height=settings.HOTBAR_IMAGE_HEIGHT,
            scale=settings.UI_SCALE,
            slot_inset=settings.HOTBAR_SLOT_INSET,
        )

    @property
    def width(self) -> float:
        return self.image_width * self.scale

    @property
    def height(self) -> float:
        return self.image_height * self.scale

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.bottom + self.height / 2

    @property
    def slot_width(self) -> float:
        return (self.image_width / self.num_slots) * self.scale - HOTBAR_SLOT_TRIM

    @property
    def slot_height(self) -> float:
        return self.height

    def slot_position(self, index: int) -> tuple[float, float]:
        """Center of hotbar slot ``index``."""
        first_x = self.left + self.slot_width / 2 + self.slot_inset
        return (first_x + index * self.slot_width, self.center_y)

    def slot_at(self, x: float, y: float) -> int | None:
        """Index of the slot under a screen point, or None."""
        if abs(y - self.center_y) > self.slot_height / 2:
            return None
        for index in range(self.num_slots):
            slot_x, _ = self.slot_position(index)
            if abs(x - slot_x) <= self.slot_width / 2:
                return index
        return None


@dataclass(frozen=True)
class GridLayout:
    """Geometry of the inventory grid panel, stacked above the hotbar."""

    rows: int
    cols: int
    hotbar: HotbarLayout
    image_height: float
    gap: float
    inset_x: float
    inset_y: float

    @classmethod
    def from_settings(cls, hotbar: HotbarLayout) -> GridLayout:
        """Build the layout from the global settings."""
        return cls(
            rows=settings.INVENTORY_GRID_ROWS,
            cols=settings.INVENTORY_GRID_COLS,
            hotbar=hotbar,
            image_height=settings.INVENTORY_IMAGE_HEIGHT,
            gap=settings.INVENTORY_GAP,
            inset_x=settings.INVENTORY_INSET_X,
            inset_y=settings.INVENTORY_INSET_Y,
        )

    @property
    def width(self) -> float:
        return self.hotbar.width

    @property
    def height(self) -> float:
        return self.image_height * self.hotbar.scale

    @property
    def center_x(self) -> float:
        return self.hotbar.center_x

    @property
    def center_y(self) -> float:
        return self.hotbar.center_y + self.hotbar.height / 2 + self.gap + self.height / 2

    @property
    def cell_width(self) -> float:
        return (self.hotbar.image_width / self.cols) * self.hotbar.scale - GRID_CELL_TRIM

    @property
    def cell_height(self) -> float:
        return (self.image_height / self.rows) * self.hotbar.scale - GRID_CELL_TRIM

    @property
    def row_step(self) -> float:
        return self.cell_height / GRID_ROW_COMPRESSION

    def cell_position(self, row: int, col: int) -> tuple[float, float]:
        """Center of grid cell ``(row, col)``; row 0 is the top row."""
        left = self.center_x - self.width / 2 + self.inset_x
        top = self.center_y + self.height / 2 - self.inset_y
        return (left + self.cell_width / 2 + col * self.cell_width, top - self.cell_height / 2 - row * self.row_step)

    def cell_at(self, x: float, y: float) -> tuple[int, int] | None:
        """``(row, col)`` of the cell under a screen point, or None."""
        for row in range(self.rows):
            for col in range(self.cols):
                cell_x, cell_y = self.cell_position(row, col)
                if abs(x - cell_x) <= self.cell_width / 2 and abs(y - cell_y) <= self.row_step / 2:
                    return (row, col)
        return None

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies on the panel."""
        return abs(x - self.center_x) <= self.width / 2 and abs(y - self.center_y) <= self.height / 2
