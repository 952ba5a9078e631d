"""Sync system keeping the session and the remote user document in step.

This module provides the SyncManager class. It owns the SessionState (inventory,
money, current map and the local copy of every map) and is the only system that
reads or writes the user document.

Session start:
    The user document is fetched once and handled by shape:

    - absent: a default document is created from the build area's default map
    - current: adopted as is
    - dangling current map: the first map becomes current and the corrected
      ``currentMap`` is written back
    - legacy (single ``map`` field): migrated to ``maps``/``currentMap``; the old
      ``map`` field is kept
    - corrupt (no maps at all): a default map is stored under the default name

    Loading never fails the session. When the fetch itself fails, the session
    runs on local defaults and nothing is written, not even by later actions,
    until a push update delivers the document and the session is loaded again.

Actions:
    Every action mutates the session and the build area first, refreshes the UI,
    and only then issues a write scoped to the fields it changed. A failed write
    is logged and published as a SyncFailedEvent; the local change stays. Actions
    that change nothing return None and write nothing.

Push updates:
    A RealtimeReconciler is subscribed for the session's lifetime. Pending store
    notifications are delivered from update(), once per frame.

Example usage:
    sync = context.sync_manager
    outcome = sync.load_session()
    result = sync.purchase("dirt")
    if result is not None and not result.ok:
        print(result.message)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

import arcade

from blockbuild.conf import settings
from blockbuild.stores import DocumentStoreError
from blockbuild.systems.base import BaseSystem
from blockbuild.systems.build.events import CellClickedEvent
from blockbuild.systems.build.manager import BuildTool
from blockbuild.systems.registry import SystemRegistry
from blockbuild.systems.sync.documents import (
    FIELD_CURRENT_MAP,
    FIELD_INVENTORY,
    FIELD_MAPS,
    FIELD_MONEY,
    DocumentShape,
    InventoryItem,
    UserDocument,
    detect_shape,
    dump_inventory,
    migrate_legacy_document,
)
from blockbuild.systems.sync.events import InventoryChangedEvent, SyncFailedEvent
from blockbuild.systems.sync.reconciler import RealtimeReconciler
from blockbuild.systems.sync.results import LoadOutcome, SyncErrorKind, WriteResult
from blockbuild.systems.sync.session import SessionState

if TYPE_CHECKING:
    from blockbuild.stores import BaseDocumentStore
    from blockbuild.systems.game_context import GameContext

logger = logging.getLogger(__name__)


def map_field(map_name: str) -> str:
    """Dotted field path of one map entry (e.g. "maps.default")."""
    return f"{FIELD_MAPS}.{map_name}"


def clean_map_name(name: str | None) -> str | None:
    """Normalize a map name typed by the player.

    Surrounding whitespace is stripped. Empty names and names containing a dot
    (which would split the dotted field path) are rejected.

    Returns:
        The cleaned name, or None if it cannot be used.
    """
    if name is None:
        return None
    name = name.strip()
    if not name or "." in name:
        return None
    return name


@SystemRegistry.register
class SyncManager(BaseSystem):
    """Loads, mutates and persists the player's session.

    Attributes:
        store: Document store holding the user document.
        user_id: Id of the user document.
        session: Current session state (None before load_session()).
        reconciler: Applies push updates to the session.
        last_load: Outcome of the most recent load_session() call.
    """

    name: ClassVar[str] = "sync"
    role: ClassVar[str | None] = "sync_manager"
    dependencies: ClassVar[list[str]] = ["build", "items"]

    def __init__(self) -> None:
        """Initialize the sync manager; the session is loaded in setup()."""
        self.context: GameContext | None = None
        self.store: BaseDocumentStore | None = None
        self.user_id = ""
        self.session: SessionState | None = None
        self.reconciler: RealtimeReconciler | None = None
        self.last_load: LoadOutcome | None = None
        self.hud_text: arcade.Text | None = None

    def setup(self, context: GameContext) -> None:
        """Load the session, start push updates and listen for cell clicks.

        Args:
            context: Game context providing the store, user id, event bus and the
                build and item systems.
        """
        self.context = context
        self.store = context.store
        self.user_id = context.user_id
        self.reconciler = RealtimeReconciler(context.event_bus, reload=self.load_session)

        self.load_session()
        self.reconciler.start(self.store, self.user_id)
        context.event_bus.subscribe(CellClickedEvent, self._on_cell_clicked)
        logger.debug("SyncManager setup complete for user: %s", self.user_id)

    def cleanup(self) -> None:
        """Stop push updates and drop the session; in-flight writes are not undone."""
        if self.reconciler:
            self.reconciler.stop()
        if self.context:
            self.context.event_bus.unsubscribe(CellClickedEvent, self._on_cell_clicked)
        self.session = None
        logger.debug("SyncManager cleanup complete")

    def update(self, delta_time: float) -> None:
        """Deliver pending push updates from the store."""
        if self.store is None:
            return
        try:
            self.store.dispatch_pending()
        except DocumentStoreError:
            logger.exception("Failed to deliver push updates")

    # Session start

    def load_session(self) -> LoadOutcome:
        """Fetch the user document and adopt it, repairing or migrating as needed.

        Returns:
            The detected shape and the create/repair/migration write, if any.
        """
        build = self._context.build_manager
        default_name = settings.DEFAULT_MAP_NAME
        write: WriteResult | None = None

        try:
            raw = self._store.get(self.user_id)
        except DocumentStoreError as e:
            logger.exception("Failed to fetch user document: %s", self.user_id)
            write = self._fail((), SyncErrorKind.FETCH_FAILURE, str(e))
            document = UserDocument.default(build.reset_to_default(), default_name)
            return self._adopt(document, LoadOutcome(DocumentShape.UNAVAILABLE, write), remote_known=False)

        shape = detect_shape(raw)
        logger.info("User document %s has shape %s", self.user_id, shape.name)

        if shape is DocumentShape.ABSENT or raw is None:
            document = UserDocument.default(build.reset_to_default(), default_name)
            write = self._write(document.to_dict(), create=True)

        elif shape is DocumentShape.CURRENT:
            document = UserDocument.from_dict(raw)

        elif shape is DocumentShape.DANGLING_CURRENT:
            document = UserDocument.from_dict(raw)
            missing = document.current_map
            document.current_map = next(iter(document.maps))
            logger.warning("Current map %r not found, falling back to %r", missing, document.current_map)
            write = self._write({FIELD_CURRENT_MAP: document.current_map})

        elif shape is DocumentShape.LEGACY:
            migrated = migrate_legacy_document(raw, default_name)
            document = UserDocument.from_dict(migrated)
            write = self._write(
                {FIELD_MAPS: migrated[FIELD_MAPS], FIELD_CURRENT_MAP: default_name},
                SyncErrorKind.MIGRATION_FAILURE,
            )

        else:
            logger.warning("User document %s has no maps, storing a default map", self.user_id)
            map_data = build.default_map_data()
            document = UserDocument.from_dict(raw)
            document.maps = {default_name: map_data}
            document.current_map = default_name
            write = self._write(
                {map_field(default_name): map_data, FIELD_CURRENT_MAP: default_name},
                SyncErrorKind.MIGRATION_FAILURE,
            )

        return self._adopt(document, LoadOutcome(shape, write))

    def _adopt(self, document: UserDocument, outcome: LoadOutcome, *, remote_known: bool = True) -> LoadOutcome:
        """Make ``document`` the session and show its current map."""
        self.session = SessionState.from_document(self.user_id, document)
        self.session.remote_known = remote_known
        self._context.build_manager.load_map_data(self.session.current_map)
        if self.reconciler:
            self.reconciler.attach(self.session)
        self._publish_inventory()
        self.last_load = outcome
        return outcome

    # Actions

    def build_at(self, x: int, y: int) -> WriteResult | None:
        """Place one unit of the selected hotbar item into an empty cell.

        Returns:
            The write result, or None if nothing was built (occupied or invalid
            cell, empty hotbar slot, or no units left).
        """
        session = self._session
        build = self._context.build_manager
        if not build.in_bounds(x, y) or build.block_at(x, y) is not None:
            return None

        item_type = self._context.item_manager.selected_item_type()
        if item_type is None:
            logger.debug("No item selected, nothing to build")
            return None
        item = session.find_item(item_type)
        if item is None or item.count <= 0:
            logger.info("No %s left to build with", item_type)
            return None

        item.count -= 1
        build.place_block(x, y, item_type)
        session.maps[session.current_map_name] = build.get_map_data()
        self._publish_inventory()

        return self._save(
            {
                FIELD_INVENTORY: dump_inventory(session.inventory),
                map_field(session.current_map_name): session.current_map,
            }
        )

    def remove_at(self, x: int, y: int) -> WriteResult | None:
        """Remove the block in a cell. Removed blocks are not refunded.

        Returns:
            The write result, or None if the cell was empty.
        """
        session = self._session
        build = self._context.build_manager
        if build.remove_block(x, y) is None:
            return None

        session.maps[session.current_map_name] = build.get_map_data()
        return self._save({map_field(session.current_map_name): session.current_map})

    def purchase(self, item_type: str) -> WriteResult | None:
        """Buy one unit of ``item_type``.

        Items missing from the inventory are added from settings.ITEM_CATALOG.

        Returns:
            The write result, or None if the item is unknown or unaffordable.
        """
        session = self._session
        item = session.find_item(item_type)
        if item is None:
            price = settings.ITEM_CATALOG.get(item_type)
            if price is None:
                logger.warning("Unknown item type: %s", item_type)
                return None
        else:
            price = item.price

        if session.money < price:
            logger.info("Cannot afford %s: price %s, money %s", item_type, price, session.money)
            return None

        session.money -= price
        if item is None:
            item = InventoryItem(type=item_type, count=0, price=price)
            session.inventory.append(item)
        item.count += 1
        self._publish_inventory()

        return self._save({FIELD_MONEY: session.money, FIELD_INVENTORY: dump_inventory(session.inventory)})

    def create_map(self, name: str | None) -> WriteResult | None:
        """Create a map with the default content and make it current.

        Returns:
            The write result, or None if the name was rejected or already taken.
        """
        session = self._session
        name = clean_map_name(name)
        if name is None:
            return None
        if name in session.maps:
            logger.warning("Map already exists: %s", name)
            return None

        map_data = self._context.build_manager.reset_to_default()
        session.maps[name] = map_data
        session.current_map_name = name
        logger.info("Created map: %s", name)

        return self._save({map_field(name): map_data, FIELD_CURRENT_MAP: name})

    def switch_map(self, name: str | None) -> WriteResult | None:
        """Show another stored map.

        Returns:
            The write result, or None if the map is unknown or already shown.
        """
        session = self._session
        name = clean_map_name(name)
        if name is None:
            return None
        if name not in session.maps:
            logger.warning("Map not found: %s", name)
            return None
        if name == session.current_map_name:
            return None

        session.current_map_name = name
        self._context.build_manager.load_map_data(session.current_map)
        logger.info("Switched to map: %s", name)

        return self._save({FIELD_CURRENT_MAP: name})

    def prompt_create_map(self) -> WriteResult | None:
        """Ask for a map name and create it; cancelling writes nothing."""
        return self.create_map(self._ask("New map name"))

    def prompt_switch_map(self) -> WriteResult | None:
        """Ask which map to load and switch to it; cancelling writes nothing."""
        names = ", ".join(self._session.maps)
        return self.switch_map(self._ask(f"Load map ({names})"))

    def prompt_purchase(self) -> WriteResult | None:
        """Ask which item type to buy."""
        item_type = self._ask(f"Buy which item ({', '.join(settings.ITEM_CATALOG)})")
        if item_type is None:
            return None
        return self.purchase(item_type)

    # Input and drawing

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Map keys: N new map, L load map, P buy selected item, Shift+P buy by name."""
        if self.session is None:
            return False

        if symbol == arcade.key.N:
            self.prompt_create_map()
            return True
        if symbol == arcade.key.L:
            self.prompt_switch_map()
            return True
        if symbol == arcade.key.P:
            if modifiers & arcade.key.MOD_SHIFT:
                self.prompt_purchase()
                return True
            item_type = self._context.item_manager.selected_item_type()
            if item_type is None:
                self.prompt_purchase()
            else:
                self.purchase(item_type)
            return True

        return False

    def on_draw_ui(self) -> None:
        """Draw money and the current map name in the top-right corner."""
        window = self.context.window if self.context else None
        if window is None or self.session is None:
            return

        label = f"Map: {self.session.current_map_name}    Money: {self.session.money:g}"
        if self.hud_text is None:
            self.hud_text = arcade.Text(
                label,
                window.width - 10,
                window.height - 10,
                arcade.color.BLACK,
                font_size=12,
                anchor_x="right",
                anchor_y="top",
                bold=True,
            )
        else:
            self.hud_text.text = label
            self.hud_text.x = window.width - 10
            self.hud_text.y = window.height - 10
        self.hud_text.draw()

    # Internals

    @property
    def _context(self) -> GameContext:
        if self.context is None:
            msg = "SyncManager used before setup()"
            raise RuntimeError(msg)
        return self.context

    @property
    def _store(self) -> BaseDocumentStore:
        if self.store is None:
            msg = "SyncManager used before setup()"
            raise RuntimeError(msg)
        return self.store

    @property
    def _session(self) -> SessionState:
        if self.session is None:
            msg = "No session loaded"
            raise RuntimeError(msg)
        return self.session

    def _on_cell_clicked(self, event: CellClickedEvent) -> None:
        if self.session is None:
            return
        tool = self._context.build_manager.tool
        if tool is BuildTool.BUILD and event.existing_type is None:
            self.build_at(event.x, event.y)
        elif tool is BuildTool.REMOVE and event.existing_type is not None:
            self.remove_at(event.x, event.y)

    def _ask(self, message: str) -> str | None:
        prompt = self._context.prompt
        if prompt is None:
            logger.debug("No prompt configured, skipping: %s", message)
            return None
        return prompt.ask(message)

    def _publish_inventory(self) -> None:
        self._context.event_bus.publish(InventoryChangedEvent(items=list(self._session.inventory)))

    def _save(self, fields: dict[str, Any]) -> WriteResult:
        """Write the fields an action changed, unless the remote document is unknown.

        While the session runs on local defaults the write is skipped and reported
        as a WRITE_FAILURE.
        """
        if not self._session.remote_known:
            paths = tuple(fields)
            logger.warning("User document %s was not loaded, keeping %s local", self.user_id, ", ".join(paths))
            return self._fail(paths, SyncErrorKind.WRITE_FAILURE, "User document was not loaded")
        return self._write(fields)

    def _write(
        self,
        fields: dict[str, Any],
        error_kind: SyncErrorKind = SyncErrorKind.WRITE_FAILURE,
        *,
        create: bool = False,
    ) -> WriteResult:
        """Issue one scoped write.

        Args:
            fields: Field paths and values; the whole document when ``create`` is set.
            error_kind: Kind reported if the write fails.
            create: Create/overwrite the document instead of merging fields.

        Returns:
            The write result. Failures are logged and published, never raised.
        """
        paths = tuple(fields)
        try:
            if create:
                self._store.set(self.user_id, fields)
            else:
                self._store.update(self.user_id, fields)
        except DocumentStoreError as e:
            logger.exception("Failed to write %s for user %s", ", ".join(paths), self.user_id)
            return self._fail(paths, error_kind, str(e))

        logger.debug("Wrote %s for user %s", ", ".join(paths), self.user_id)
        return WriteResult(fields=paths)

    def _fail(self, paths: tuple[str, ...], error_kind: SyncErrorKind, message: str) -> WriteResult:
        result = WriteResult(fields=paths, error_kind=error_kind, message=message)
        self._context.event_bus.publish(SyncFailedEvent(result=result))
        return result
