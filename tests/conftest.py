"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import arcade
import pytest

from blockbuild.conf import settings
from blockbuild.events import EventBus
from blockbuild.stores import MemoryDocumentStore
from blockbuild.systems.build import BuildManager
from blockbuild.systems.game_context import GameContext
from blockbuild.systems.items import ItemManager

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(scope="session", autouse=True)
def _setup_arcade_resources() -> Generator[None]:
    """Register the game_assets resource handle for the test session.

    The handle points at an empty temporary directory, so block textures fall back
    to their solid colors.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        arcade.resources.add_resource_handle("game_assets", Path(temp_dir).resolve())
        yield


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test and reset them afterwards.

    Yields:
        None
    """
    settings.configure(
        ASSETS_HANDLE="game_assets",
        HOTBAR_SLOTS=14,
        INVENTORY_GRID_ROWS=3,
        INVENTORY_GRID_COLS=14,
        BUILD_COLUMNS=10,
        BUILD_ROWS=8,
        BUILD_CELL_SIZE=32,
        BUILD_ORIGIN_X=0,
        BUILD_ORIGIN_Y=144,
        DEFAULT_GROUND=["grass", "dirt"],
        ITEM_CATALOG={"dirt": 5, "grass": 5, "stone": 10},
        DEFAULT_MAP_NAME="default",
        DOCUMENT_STORE="blockbuild.stores.memory.MemoryDocumentStore",
        DOCUMENT_COLLECTION="users",
        NOTIFICATION_DURATION=4.0,
    )
    yield
    settings._wrapped = None


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Empty in-memory document store."""
    return MemoryDocumentStore()


@pytest.fixture
def game_context(store: MemoryDocumentStore) -> GameContext:
    """Context with a real event bus and store, and set-up build and item systems.

    The sync system is left out so each test can choose the stored document
    before the session loads.
    """
    context = GameContext(event_bus=EventBus(), store=store, user_id="alice")
    for system in (BuildManager(), ItemManager()):
        context.register_system(system.name, system)
        system.setup(context)
    return context
