"""Visibility of item tokens.

Visibility is derived, never stored independently: a hotbar token is always shown,
a grid token is shown only while the grid panel is open.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockbuild.systems.items.model import ContainerKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from blockbuild.systems.items.model import ItemToken


class VisibilityPolicy:
    """Derives token visibility from the grid's open state and token location.

    Attributes:
        grid_open: Whether the inventory grid panel is currently open.
    """

    def __init__(self, grid_open: bool = False) -> None:
        """Initialize with the grid closed by default."""
        self.grid_open = grid_open

    def is_visible(self, token: ItemToken) -> bool:
        """Visibility the token should have right now."""
        if token.location is ContainerKind.HOTBAR:
            return True
        return self.grid_open

    def apply(self, token: ItemToken) -> None:
        """Set ``token.visible`` from the policy."""
        token.visible = self.is_visible(token)

    def set_grid_open(self, is_open: bool, tokens: Iterable[ItemToken]) -> None:
        """Open or close the grid and re-derive every grid-resident token.

        Hotbar-resident tokens are left untouched.
        """
        self.grid_open = is_open
        for token in tokens:
            if token.location is ContainerKind.GRID:
                self.apply(token)
