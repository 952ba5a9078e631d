"""Unit tests for RealtimeReconciler."""

import unittest
from unittest.mock import MagicMock

from blockbuild.stores import MemoryDocumentStore
from blockbuild.systems.sync.documents import InventoryItem
from blockbuild.systems.sync.events import InventoryChangedEvent
from blockbuild.systems.sync.reconciler import FIELD_POLICIES, RealtimeReconciler, SyncPolicy, live_fields
from blockbuild.systems.sync.session import SessionState


class TestRealtimeReconciler(unittest.TestCase):
    """Unit test class for RealtimeReconciler."""

    def setUp(self) -> None:
        """Create a reconciler attached to a session with one item."""
        self.event_bus = MagicMock()
        self.session = SessionState(
            user_id="alice",
            inventory=[InventoryItem("dirt", 3, 5)],
            money=10,
            current_map_name="default",
            maps={"default": {"0,0": "dirt"}},
        )
        self.reconciler = RealtimeReconciler(self.event_bus)
        self.reconciler.attach(self.session)

    def test_inventory_replaced_from_push(self) -> None:
        """Test that a pushed inventory replaces the ledger and refreshes the display."""
        changed = self.reconciler.on_remote_change(
            {"inventory": [{"type": "dirt", "count": 4, "price": 5}, {"type": "stone", "count": 1, "price": 10}]}
        )

        assert changed is True
        assert self.session.inventory == [InventoryItem("dirt", 4, 5), InventoryItem("stone", 1, 10)]
        event = self.event_bus.publish.call_args[0][0]
        assert isinstance(event, InventoryChangedEvent)
        assert event.remote is True
        assert event.items == self.session.inventory

    def test_money_and_maps_untouched(self) -> None:
        """Test that pushed money, maps and currentMap are ignored."""
        self.reconciler.on_remote_change(
            {
                "inventory": [{"type": "dirt", "count": 3, "price": 5}],
                "money": 500,
                "maps": {"default": {}, "other": {"1,1": "stone"}},
                "currentMap": "other",
            }
        )

        assert self.session.money == 10
        assert self.session.maps == {"default": {"0,0": "dirt"}}
        assert self.session.current_map_name == "default"

    def test_absent_document_ignored(self) -> None:
        """Test that a push with no document leaves local state alone."""
        assert self.reconciler.on_remote_change(None) is False
        assert self.session.inventory == [InventoryItem("dirt", 3, 5)]
        self.event_bus.publish.assert_not_called()

    def test_push_before_session_ignored(self) -> None:
        """Test that a detached reconciler drops pushes."""
        reconciler = RealtimeReconciler(self.event_bus)

        assert reconciler.on_remote_change({"inventory": []}) is False
        self.event_bus.publish.assert_not_called()

    def test_unread_session_is_reloaded(self) -> None:
        """Test that a session running on local defaults is reloaded, not patched."""
        reload = MagicMock()
        reconciler = RealtimeReconciler(self.event_bus, reload=reload)
        self.session.remote_known = False
        reconciler.attach(self.session)

        assert reconciler.on_remote_change({"inventory": []}) is True
        reload.assert_called_once_with()
        assert self.session.inventory == [InventoryItem("dirt", 3, 5)]
        self.event_bus.publish.assert_not_called()

    def test_unread_session_without_reload_ignored(self) -> None:
        """Test that pushes are dropped when there is no way to reload."""
        self.session.remote_known = False

        assert self.reconciler.on_remote_change({"inventory": []}) is False
        assert self.session.inventory == [InventoryItem("dirt", 3, 5)]

    def test_start_and_stop_subscription(self) -> None:
        """Test subscribing to a store and unsubscribing again."""
        store = MemoryDocumentStore()
        store.set("alice", {"inventory": [{"type": "grass", "count": 2, "price": 5}]})

        self.reconciler.start(store, "alice")
        assert self.reconciler.active
        store.dispatch_pending()
        assert self.session.inventory == [InventoryItem("grass", 2, 5)]

        self.reconciler.stop()
        assert not self.reconciler.active
        assert not store.has_subscribers("alice")
        self.reconciler.stop()

    def test_restart_replaces_subscription(self) -> None:
        """Test that starting twice leaves a single listener."""
        store = MemoryDocumentStore()
        self.reconciler.start(store, "alice")
        self.reconciler.start(store, "alice")

        store.set("alice", {"inventory": []})

        assert store.dispatch_pending() == 1


def test_only_inventory_is_live() -> None:
    """Test the per-field sync policy table."""
    assert live_fields() == ["inventory"]
    assert FIELD_POLICIES["money"] is SyncPolicy.SESSION_AUTHORITATIVE
    assert FIELD_POLICIES["maps"] is SyncPolicy.SESSION_AUTHORITATIVE
    assert FIELD_POLICIES["currentMap"] is SyncPolicy.SESSION_AUTHORITATIVE
