"""blockbuild - a block-building game with hotbar/inventory slots and per-user saves.

This package provides:
- Hotbar and inventory grid slots with click-to-move placement
- A block build area with build/remove tools and multiple named maps
- Per-user documents in a pluggable document store, with legacy migration
- Live inventory sync from push updates

Quick start:
    # Optionally create a settings.py file in your project root:
    # USER_ID = "alice"
    # DOCUMENT_STORE_ROOT = "saves"

    from blockbuild import run_game

    if __name__ == "__main__":
        run_game()

Alternative usage:
    from blockbuild.conf import settings

    settings.configure(
        DOCUMENT_STORE="blockbuild.stores.memory.MemoryDocumentStore",
        HOTBAR_SLOTS=9,
    )
"""

__version__ = "0.1.0"

from blockbuild.conf import settings
from blockbuild.events import Event, EventBus
from blockbuild.helpers import create_game, run_game
from blockbuild.prompts import ConsolePrompt, TextPrompt
from blockbuild.stores import BaseDocumentStore, JsonFileDocumentStore, MemoryDocumentStore, load_store
from blockbuild.systems import (
    BuildManager,
    GameContext,
    ItemManager,
    NotificationManager,
    SyncManager,
)
from blockbuild.views import BuildView

__all__ = [
    "BaseDocumentStore",
    "BuildManager",
    "BuildView",
    "ConsolePrompt",
    "Event",
    "EventBus",
    "GameContext",
    "ItemManager",
    "JsonFileDocumentStore",
    "MemoryDocumentStore",
    "NotificationManager",
    "SyncManager",
    "TextPrompt",
    "__version__",
    "create_game",
    "load_store",
    "run_game",
    "settings",
]
