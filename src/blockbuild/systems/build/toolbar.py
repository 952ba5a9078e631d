"""Build, remove and inventory buttons to the right of the hotbar.

The three buttons share one row, vertically centered on the hotbar and packed
against the right edge of the window. The build and remove buttons belong to the
build system; the inventory button is handled by the item system, which reads the
same layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import arcade

from blockbuild.conf import settings

# Colors of an idle and an active (current tool) button
BUTTON_COLOR = (60, 60, 70, 220)
ACTIVE_BUTTON_COLOR = (110, 140, 60, 240)


class ToolbarButton(Enum):
    """Toolbar buttons, left to right."""

    BUILD = "build"
    REMOVE = "remove"
    INVENTORY = "inventory"


@dataclass(frozen=True)
class ToolbarLayout:
    """Geometry of the toolbar button row."""

    screen_width: float
    center_y: float
    image_size: float
    scale: float
    gap: float
    right_margin: float

    @classmethod
    def from_settings(cls) -> ToolbarLayout:
        """Build the layout from the global settings, level with the hotbar."""
        return cls(
            screen_width=settings.SCREEN_WIDTH,
            center_y=settings.HOTBAR_BOTTOM + settings.HOTBAR_IMAGE_HEIGHT * settings.UI_SCALE / 2,
            image_size=settings.TOOLBAR_BUTTON_IMAGE_SIZE,
            scale=settings.UI_SCALE,
            gap=settings.TOOLBAR_GAP,
            right_margin=settings.TOOLBAR_RIGHT_MARGIN,
        )

    @property
    def button_size(self) -> float:
        return self.image_size * self.scale

    @property
    def width(self) -> float:
        buttons = len(ToolbarButton)
        return self.button_size * buttons + self.gap * (buttons - 1)

    def button_position(self, button: ToolbarButton) -> tuple[float, float]:
        """Center of ``button``."""
        first_x = self.screen_width - self.right_margin - self.width + self.button_size / 2
        index = list(ToolbarButton).index(button)
        return (first_x + index * (self.button_size + self.gap), self.center_y)

    def button_at(self, x: float, y: float) -> ToolbarButton | None:
        """Button under a screen point, or None (including the gaps between buttons)."""
        half = self.button_size / 2
        for button in ToolbarButton:
            button_x, button_y = self.button_position(button)
            if abs(x - button_x) <= half and abs(y - button_y) <= half:
                return button
        return None


def draw_button(layout: ToolbarLayout, button: ToolbarButton, label: arcade.Text, *, active: bool = False) -> None:
    """Draw one button as a filled square with its label centered on it."""
    x, y = layout.button_position(button)
    half = layout.button_size / 2
    color = ACTIVE_BUTTON_COLOR if active else BUTTON_COLOR
    arcade.draw_lrbt_rectangle_filled(x - half, x + half, y - half, y + half, color)
    arcade.draw_lrbt_rectangle_outline(x - half, x + half, y - half, y + half, arcade.color.DIM_GRAY, 2)
    label.x = x
    label.y = y
    label.draw()


def button_label(button: ToolbarButton) -> arcade.Text:
    """Text object for a button's caption."""
    return arcade.Text(
        button.value.title(), 0, 0, arcade.color.WHITE, font_size=11, anchor_x="center", anchor_y="center", bold=True
    )
