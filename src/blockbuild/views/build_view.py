"""Main view of the game.

This module provides the BuildView class, the arcade view that hosts every
installed system. It creates the systems through the SystemLoader, builds the
GameContext they share, and forwards arcade's lifecycle callbacks to them.

Input is offered to systems in reverse load order until one handles it, so the
item panel sees a click before the build area underneath it does.

Example usage:
    view = BuildView(store=load_store(), user_id="alice", prompt=ConsolePrompt())
    window.show_view(view)
    arcade.run()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import arcade

from blockbuild.conf import settings
from blockbuild.events import EventBus
from blockbuild.systems import GameContext, SystemLoader

if TYPE_CHECKING:
    from blockbuild.prompts import TextPrompt
    from blockbuild.stores import BaseDocumentStore

logger = logging.getLogger(__name__)


class BuildView(arcade.View):
    """Gameplay view coordinating all systems.

    Systems are created and set up on first show, not in __init__, and torn down by
    cleanup() (also called when the view is hidden).

    Attributes:
        store: Document store for the user document.
        user_id: Id of the signed-in user.
        prompt: Free-text prompt for map names.
        event_bus: Event bus shared by all systems.
        system_loader: Loader owning the system instances (None until set up).
        game_context: Context passed to systems (None until set up).
        initialized: Whether setup() has run.
    """

    def __init__(self, store: BaseDocumentStore, user_id: str, prompt: TextPrompt | None = None) -> None:
        """Initialize the view; systems are created on first show.

        Args:
            store: Document store holding the user document.
            user_id: Id of the user document to load.
            prompt: Free-text prompt for naming and loading maps.
        """
        super().__init__()
        self.store = store
        self.user_id = user_id
        self.prompt = prompt

        self.event_bus = EventBus()
        self.system_loader: SystemLoader | None = None
        self.game_context: GameContext | None = None
        self.initialized = False

    def setup(self) -> None:
        """Create, register and set up all installed systems."""
        self.system_loader = SystemLoader(settings.INSTALLED_SYSTEMS)
        self.system_loader.instantiate_all()

        self.game_context = GameContext(
            event_bus=self.event_bus,
            store=self.store,
            user_id=self.user_id,
            prompt=self.prompt,
            window=self.window,
        )
        self.system_loader.setup_all(self.game_context)
        logger.info("Build view ready for user: %s", self.user_id)

    def on_show_view(self) -> None:
        """Set the background and set up systems on first show."""
        self.window.background_color = settings.BACKGROUND_COLOR
        if not self.initialized:
            self.setup()
            self.initialized = True

    def on_hide_view(self) -> None:
        """Tear systems down when another view takes over."""
        self.cleanup()

    def on_update(self, delta_time: float) -> None:
        """Update all systems each frame."""
        if self.system_loader:
            self.system_loader.update_all(delta_time)

    def on_draw(self) -> None:
        """Draw the build area, then the UI on top."""
        self.clear()
        if self.system_loader:
            self.system_loader.draw_all()
            self.system_loader.draw_ui_all()

    def on_key_press(self, symbol: int, modifiers: int) -> bool | None:
        """Delegate key presses to systems."""
        if self.system_loader and self.system_loader.on_key_press_all(symbol, modifiers):
            return True
        return None

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> bool | None:
        """Delegate clicks to systems."""
        if self.system_loader and self.system_loader.on_mouse_press_all(x, y, button, modifiers):
            return True
        return None

    def on_mouse_scroll(self, x: int, y: int, scroll_x: float, scroll_y: float) -> bool | None:
        """Delegate wheel movement to systems."""
        if self.system_loader and self.system_loader.on_mouse_scroll_all(x, y, scroll_x, scroll_y):
            return True
        return None

    def cleanup(self) -> None:
        """Clean up all systems and forget them; the next show sets up again."""
        if self.system_loader:
            self.system_loader.cleanup_all()
        self.event_bus.clear()
        self.system_loader = None
        self.game_context = None
        self.initialized = False
