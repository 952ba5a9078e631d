"""Tests for the document stores."""

import json
import unittest
from pathlib import Path

import pytest

from blockbuild.conf import settings
from blockbuild.stores import (
    DocumentNotFoundError,
    DocumentStoreError,
    JsonFileDocumentStore,
    MemoryDocumentStore,
    apply_field_paths,
    load_store,
)


class TestApplyFieldPaths(unittest.TestCase):
    """Unit test class for dotted-path merging."""

    def test_top_level_field_replaced(self) -> None:
        """Test that a plain path replaces only that field."""
        merged = apply_field_paths({"money": 1, "inventory": []}, {"money": 7})

        assert merged == {"money": 7, "inventory": []}

    def test_dotted_path_keeps_siblings(self) -> None:
        """Test that writing maps.b leaves maps.a untouched."""
        merged = apply_field_paths({"maps": {"a": {"0,0": "dirt"}}}, {"maps.b": {"1,1": "stone"}})

        assert merged == {"maps": {"a": {"0,0": "dirt"}, "b": {"1,1": "stone"}}}

    def test_intermediate_mappings_created(self) -> None:
        """Test that missing or non-mapping parents are replaced by mappings."""
        assert apply_field_paths({}, {"maps.default": {}}) == {"maps": {"default": {}}}
        assert apply_field_paths({"maps": "junk"}, {"maps.x": 1}) == {"maps": {"x": 1}}

    def test_input_not_modified(self) -> None:
        """Test that the source document is copied."""
        source = {"maps": {"a": {}}}
        apply_field_paths(source, {"maps.a": {"0,0": "dirt"}})

        assert source == {"maps": {"a": {}}}


class TestMemoryDocumentStore(unittest.TestCase):
    """Unit test class for MemoryDocumentStore."""

    def setUp(self) -> None:
        """Create an empty store."""
        self.store = MemoryDocumentStore()

    def test_get_missing_returns_none(self) -> None:
        """Test that absent documents read as None."""
        assert self.store.get("nobody") is None

    def test_get_returns_copy(self) -> None:
        """Test that callers cannot mutate stored documents through snapshots."""
        self.store.set("alice", {"money": 1})
        snapshot = self.store.get("alice")
        assert snapshot is not None
        snapshot["money"] = 99

        assert self.store.get("alice") == {"money": 1}

    def test_update_missing_raises(self) -> None:
        """Test that update() needs an existing document."""
        with pytest.raises(DocumentNotFoundError) as exc_info:
            self.store.update("ghost", {"money": 1})

        assert exc_info.value.doc_id == "ghost"
        assert isinstance(exc_info.value, DocumentStoreError)

    def test_update_merges_dotted_fields(self) -> None:
        """Test a scoped map write."""
        self.store.set("alice", {"money": 3, "maps": {"default": {}}})

        self.store.update("alice", {"maps.castle": {"2,2": "stone"}, "currentMap": "castle"})

        assert self.store.get("alice") == {
            "money": 3,
            "maps": {"default": {}, "castle": {"2,2": "stone"}},
            "currentMap": "castle",
        }

    def test_subscribe_delivers_initial_snapshot(self) -> None:
        """Test that a new subscriber receives the current document on dispatch."""
        self.store.set("alice", {"money": 5})
        received = []
        self.store.subscribe("alice", received.append)

        assert received == []
        assert self.store.dispatch_pending() == 1
        assert received == [{"money": 5}]

    def test_changes_are_coalesced_until_dispatch(self) -> None:
        """Test that several writes before a dispatch produce one notification."""
        self.store.set("alice", {"money": 5})
        received = []
        self.store.subscribe("alice", received.append)
        self.store.dispatch_pending()

        self.store.update("alice", {"money": 6})
        self.store.update("alice", {"money": 7})
        self.store.dispatch_pending()

        assert received == [{"money": 5}, {"money": 7}]

    def test_delete_notifies_none(self) -> None:
        """Test that deleting a document notifies subscribers with None."""
        self.store.set("alice", {"money": 5})
        received = []
        self.store.subscribe("alice", received.append)
        self.store.dispatch_pending()

        self.store.delete("alice")
        self.store.dispatch_pending()

        assert received[-1] is None

    def test_unsubscribe_stops_notifications(self) -> None:
        """Test that an unsubscribed listener hears nothing more."""
        received = []
        unsubscribe = self.store.subscribe("alice", received.append)
        unsubscribe()

        self.store.set("alice", {"money": 1})

        assert self.store.dispatch_pending() == 0
        assert received == []
        assert self.store.has_subscribers("alice") is False

    def test_writes_without_subscribers_queue_nothing(self) -> None:
        """Test that nothing is delivered when nobody listens."""
        self.store.set("alice", {"money": 1})

        assert self.store.dispatch_pending() == 0


def test_json_store_persists_across_instances(tmp_path: Path) -> None:
    """Test that a document written by one store is read by a fresh one."""
    JsonFileDocumentStore(root=tmp_path).set("alice", {"money": 4, "maps": {"default": {"0,0": "dirt"}}})

    reopened = JsonFileDocumentStore(root=tmp_path)

    assert reopened.get("alice") == {"money": 4, "maps": {"default": {"0,0": "dirt"}}}
    assert (tmp_path / "users" / "alice.json").exists()


def test_json_store_update_and_missing(tmp_path: Path) -> None:
    """Test dotted updates and the missing-document error on disk."""
    store = JsonFileDocumentStore(root=tmp_path)
    with pytest.raises(DocumentNotFoundError):
        store.update("alice", {"money": 1})

    store.set("alice", {"maps": {"default": {}}})
    store.update("alice", {"maps.default": {"3,4": "sand"}})

    data = json.loads((tmp_path / "users" / "alice.json").read_text(encoding="utf-8"))
    assert data == {"maps": {"default": {"3,4": "sand"}}}


def test_json_store_notices_foreign_edits(tmp_path: Path) -> None:
    """Test that editing the file from outside notifies subscribers."""
    store = JsonFileDocumentStore(root=tmp_path)
    store.set("alice", {"inventory": []})
    received = []
    store.subscribe("alice", received.append)
    store.dispatch_pending()

    path = tmp_path / "users" / "alice.json"
    path.write_text(json.dumps({"inventory": [{"type": "dirt", "count": 12, "price": 5}]}), encoding="utf-8")

    assert store.dispatch_pending() == 1
    assert received[-1] == {"inventory": [{"type": "dirt", "count": 12, "price": 5}]}
    assert store.dispatch_pending() == 0


def test_json_store_invalid_file_raises(tmp_path: Path) -> None:
    """Test that unreadable JSON surfaces as a DocumentStoreError."""
    store = JsonFileDocumentStore(root=tmp_path)
    (tmp_path / "users").mkdir(parents=True)
    (tmp_path / "users" / "alice.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DocumentStoreError):
        store.get("alice")


def test_load_store_uses_settings(tmp_path: Path) -> None:
    """Test creating the configured store class by dotted path."""
    assert isinstance(load_store(), MemoryDocumentStore)

    settings.DOCUMENT_STORE_ROOT = str(tmp_path)
    store = load_store("blockbuild.stores.json_file.JsonFileDocumentStore")

    assert isinstance(store, JsonFileDocumentStore)
    assert store.root == tmp_path


def test_load_store_rejects_bad_paths() -> None:
    """Test import and type errors for invalid store paths."""
    with pytest.raises(ImportError):
        load_store("blockbuild.stores.memory.NoSuchStore")
    with pytest.raises(ImportError):
        load_store("blockbuild.no_such_module.Store")
    with pytest.raises(TypeError):
        load_store("blockbuild.conf.LazySettings")
