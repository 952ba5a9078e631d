"""Base class for pluggable systems.

This module provides the abstract base class that all pluggable systems must inherit from.
Systems are the building blocks of the game, each handling a specific aspect
(building, item slots, persistence, notifications).

Example:
    Creating a custom system::

        from blockbuild.systems.base import BaseSystem
        from blockbuild.systems.registry import SystemRegistry

        @SystemRegistry.register
        class WeatherManager(BaseSystem):
            name = "weather"
            dependencies = ["build"]

            def setup(self, context):
                self.current_weather = "clear"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from blockbuild.systems.game_context import GameContext


class BaseSystem(ABC):
    """Base class for all pluggable systems.

    To create a custom system, subclass BaseSystem and implement setup(). Use the
    @SystemRegistry.register decorator to make the system available for loading.

    Attributes:
        name: Unique identifier for the system. Must be defined as a class variable.
        role: Optional attribute name under which GameContext exposes the system
            (e.g. "sync_manager").
        dependencies: List of system names this system depends on. Systems are
            set up in dependency order, ensuring dependencies are available
            when setup() is called.
    """

    name: ClassVar[str]
    role: ClassVar[str | None] = None
    dependencies: ClassVar[list[str]] = []

    @abstractmethod
    def setup(self, context: GameContext) -> None:
        """Initialize the system when the build view is shown.

        Args:
            context: Game context providing access to other systems via get_system().
        """

    def update(self, delta_time: float) -> None:  # noqa: B027
        """Called every frame during the game loop.

        Args:
            delta_time: Time elapsed since the last frame, in seconds.
        """

    def on_draw(self) -> None:  # noqa: B027
        """Draw world-space elements (the build area)."""

    def on_draw_ui(self) -> None:  # noqa: B027
        """Draw screen-space elements (hotbar, inventory panel, toasts)."""

    def cleanup(self) -> None:  # noqa: B027
        """Called when the view is torn down.

        Override this method to release resources and unsubscribe from events.
        """

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Handle key press events.

        Args:
            symbol: Arcade key constant for the pressed key.
            modifiers: Bitfield of modifier keys held.

        Returns:
            True if the event was handled and should stop propagating, False otherwise.
        """
        return False

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> bool:
        """Handle a pointer-down event in screen coordinates.

        Returns:
            True if the event was handled and should stop propagating, False otherwise.
        """
        return False

    def on_mouse_scroll(self, x: float, y: float, scroll_x: float, scroll_y: float) -> bool:
        """Handle a scroll-wheel event.

        Returns:
            True if the event was handled and should stop propagating, False otherwise.
        """
        return False
