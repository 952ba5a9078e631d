"""Base class for document stores.

A document store keeps one JSON-like document per id inside a collection and
offers the four operations the sync layer relies on:

- ``get(doc_id)``: fetch a snapshot, or None when the document is absent
- ``set(doc_id, document)``: create or overwrite a whole document
- ``update(doc_id, fields)``: merge-write named fields; keys may be dotted paths
  such as ``"maps.castle"`` to replace a single nested entry
- ``subscribe(doc_id, callback)``: register for change notifications and get back
  an unsubscribe callable

Change notifications are queued and delivered from ``dispatch_pending()``, which the
game loop calls once per frame. This keeps every callback on the main thread and
lets a push update interleave between a local mutation and the next write, just as
a networked store would.

Example:
    class RedisDocumentStore(BaseDocumentStore):
        def _read(self, doc_id):
            ...

        def _write(self, doc_id, document):
            ...
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from blockbuild.conf import settings

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Raised when the backing store cannot complete a read or write."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised by update() when the target document does not exist."""

    def __init__(self, doc_id: str) -> None:
        """Initialize with the missing document id."""
        super().__init__(f"Document not found: {doc_id}")
        self.doc_id = doc_id


def apply_field_paths(document: Document, fields: dict[str, Any]) -> Document:
    """Return a copy of ``document`` with ``fields`` merged in.

    Each key is a dotted path. Intermediate mappings are created when missing and
    replaced when they hold a non-mapping value. Only the addressed leaf is
    replaced; sibling entries are left untouched.

    Args:
        document: Existing document contents.
        fields: Mapping of dotted field paths to new values.

    Returns:
        New document with the updates applied.

    Example:
        >>> apply_field_paths({"maps": {"a": {}}}, {"maps.b": {"0,0": "dirt"}})
        {'maps': {'a': {}, 'b': {'0,0': 'dirt'}}}
    """
    merged = copy.deepcopy(document)
    for path, value in fields.items():
        parts = path.split(".")
        target = merged
        for part in parts[:-1]:
            child = target.get(part)
            if not isinstance(child, dict):
                child = {}
                target[part] = child
            target = child
        target[parts[-1]] = copy.deepcopy(value)
    return merged


class BaseDocumentStore(ABC):
    """Abstract base class for document stores.

    Subclasses only implement raw reads and writes; subscription bookkeeping,
    notification queueing and dotted-path merging live here.

    Attributes:
        collection: Name of the collection documents are stored in.
    """

    def __init__(self, collection: str = "users") -> None:
        """Initialize the store.

        Args:
            collection: Name of the collection documents are stored in.
        """
        self.collection = collection
        self._subscribers: dict[str, list[Callable[[Document | None], None]]] = {}
        self._pending: list[str] = []

    @classmethod
    def from_settings(cls) -> BaseDocumentStore:
        """Create a store configured from the global settings."""
        return cls(collection=settings.DOCUMENT_COLLECTION)

    @abstractmethod
    def _read(self, doc_id: str) -> Document | None:
        """Read a raw document, or None when absent."""

    @abstractmethod
    def _write(self, doc_id: str, document: Document) -> None:
        """Persist a whole document."""

    def get(self, doc_id: str) -> Document | None:
        """Fetch a snapshot of a document.

        Args:
            doc_id: Document id (the user id).

        Returns:
            A deep copy of the document, or None if it does not exist.
        """
        document = self._read(doc_id)
        if document is None:
            return None
        return copy.deepcopy(document)

    def set(self, doc_id: str, document: Document) -> None:
        """Create or overwrite a document and queue a change notification."""
        self._write(doc_id, copy.deepcopy(document))
        logger.debug("Wrote document %s/%s", self.collection, doc_id)
        self._queue(doc_id)

    def update(self, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge-write named fields of an existing document.

        Args:
            doc_id: Document id.
            fields: Mapping of (possibly dotted) field paths to new values.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        current = self._read(doc_id)
        if current is None:
            raise DocumentNotFoundError(doc_id)
        self._write(doc_id, apply_field_paths(current, fields))
        logger.debug("Updated %s on %s/%s", ", ".join(sorted(fields)), self.collection, doc_id)
        self._queue(doc_id)

    def subscribe(self, doc_id: str, callback: Callable[[Document | None], None]) -> Callable[[], None]:
        """Register a change listener for a document.

        An initial snapshot is queued immediately, so the listener sees the current
        state on the next dispatch.

        Args:
            doc_id: Document id to watch.
            callback: Called with a snapshot, or None if the document is absent.

        Returns:
            A callable that removes the listener.
        """
        self._subscribers.setdefault(doc_id, []).append(callback)
        self._queue(doc_id)

        def unsubscribe() -> None:
            listeners = self._subscribers.get(doc_id, [])
            if callback in listeners:
                listeners.remove(callback)
            if not listeners:
                self._subscribers.pop(doc_id, None)

        return unsubscribe

    def dispatch_pending(self) -> int:
        """Deliver queued change notifications.

        Returns:
            Number of callbacks invoked.
        """
        pending, self._pending = self._pending, []
        delivered = 0
        for doc_id in pending:
            listeners = list(self._subscribers.get(doc_id, []))
            if not listeners:
                continue
            document = self.get(doc_id)
            for callback in listeners:
                callback(copy.deepcopy(document))
                delivered += 1
        return delivered

    def has_subscribers(self, doc_id: str) -> bool:
        """Check whether any listener is registered for a document."""
        return bool(self._subscribers.get(doc_id))

    def _queue(self, doc_id: str) -> None:
        if doc_id in self._subscribers and doc_id not in self._pending:
            self._pending.append(doc_id)
