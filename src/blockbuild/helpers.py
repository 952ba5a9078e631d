"""Helper functions for creating and running the game.

Users can choose between the simple run_game() function or create_game() for
more control over the game initialization.
"""

import logging
from pathlib import Path

import arcade
from rich.logging import RichHandler

from blockbuild.conf import settings
from blockbuild.prompts import ConsolePrompt, TextPrompt
from blockbuild.stores import BaseDocumentStore, load_store
from blockbuild.views import BuildView


def setup_logging(log_level: str = "DEBUG") -> None:
    """Configure logging for the game.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def setup_resources(assets_handle: str) -> None:
    """Configure Arcade resource handles for game assets.

    Registers a resource handle pointing to the assets directory in the current
    working directory. Block images are optional; missing ones are drawn as
    solid colors.

    Args:
        assets_handle: Name of the resource handle to register.
    """
    assets_dir = Path.cwd() / "assets"
    arcade.resources.add_resource_handle(assets_handle, assets_dir.resolve())


def create_game(
    user_id: str | None = None,
    store: BaseDocumentStore | None = None,
    prompt: TextPrompt | None = None,
    log_level: str = "DEBUG",
) -> arcade.Window:
    """Create the game window showing the build view.

    Args:
        user_id: Id of the user document. If None, uses settings.USER_ID.
        store: Document store. If None, the one named by settings.DOCUMENT_STORE.
        prompt: Text prompt for map names. If None, a ConsolePrompt.
        log_level: Logging level passed to setup_logging().

    Returns:
        The arcade window, with the build view shown.

    Example:
        >>> from blockbuild import create_game
        >>> window = create_game("alice")
        >>> arcade.run()
    """
    setup_logging(log_level)
    setup_resources(settings.ASSETS_HANDLE)

    window = arcade.Window(
        settings.SCREEN_WIDTH,
        settings.SCREEN_HEIGHT,
        settings.WINDOW_TITLE,
    )
    view = BuildView(
        store=store or load_store(),
        user_id=user_id or settings.USER_ID,
        prompt=prompt or ConsolePrompt(),
    )
    window.show_view(view)
    return window


def run_game(user_id: str | None = None, log_level: str = "DEBUG") -> None:
    """Create the game and run it until the window closes.

    Example:
        >>> from blockbuild import run_game
        >>> if __name__ == "__main__":
        ...     run_game()
    """
    create_game(user_id, log_level=log_level)
    arcade.run()
