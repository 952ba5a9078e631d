"""Game context shared by all systems.

The GameContext is a system registry and state container. It holds references to
every installed system plus the collaborators the core needs (event bus, document
store, user id, text prompt). Systems receive it in setup() and look each other up
by name or role.

Example usage:
    context = GameContext(
        event_bus=EventBus(),
        store=MemoryDocumentStore(),
        user_id="alice",
    )
    context.register_system("build", build_manager)

    build = context.build_manager
    build.place_block(3, 4, "dirt")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import arcade

    from blockbuild.events import EventBus
    from blockbuild.prompts import TextPrompt
    from blockbuild.stores import BaseDocumentStore
    from blockbuild.systems.base import BaseSystem
    from blockbuild.systems.build.manager import BuildManager
    from blockbuild.systems.items.manager import ItemManager
    from blockbuild.systems.notification.manager import NotificationManager
    from blockbuild.systems.sync.manager import SyncManager


class GameContext:
    """Central context object providing access to all game systems.

    Systems are accessed by name using get_system(), which returns the system or
    None if not registered. Systems that declare a ``role`` are also exposed as an
    attribute of that name (e.g. ``context.sync_manager``).

    Attributes:
        event_bus: Publish/subscribe event system for decoupled communication.
        store: Document store holding the per-user document.
        user_id: Id of the signed-in player's document.
        prompt: Free-text prompt used for naming and loading maps (None disables it).
        window: Reference to the arcade Window instance, if any.
    """

    build_manager: BuildManager
    item_manager: ItemManager
    sync_manager: SyncManager
    notification_manager: NotificationManager

    def __init__(
        self,
        event_bus: EventBus,
        store: BaseDocumentStore,
        user_id: str,
        prompt: TextPrompt | None = None,
        window: arcade.Window | None = None,
    ) -> None:
        """Initialize game context.

        Args:
            event_bus: Central event system for publishing and subscribing to game events.
            store: Document store used by the sync system.
            user_id: Id of the user document to load and subscribe to.
            prompt: Text prompt for map names.
            window: Arcade window, used by systems that draw.
        """
        self.event_bus = event_bus
        self.store = store
        self.user_id = user_id
        self.prompt = prompt
        self.window = window

        self._systems: dict[str, BaseSystem] = {}

    def register_system(self, name: str, system: BaseSystem) -> None:
        """Register a pluggable system with the context.

        Args:
            name: Unique identifier for the system (e.g., "build", "sync").
            system: The system instance to register.
        """
        self._systems[name] = system

        if system.role:
            setattr(self, system.role, system)

    def get_system(self, name: str) -> BaseSystem | None:
        """Get a registered system by name, or None."""
        return self._systems.get(name)

    def get_systems(self) -> dict[str, BaseSystem]:
        """Get all registered systems."""
        return self._systems
