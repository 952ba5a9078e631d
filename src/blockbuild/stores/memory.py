"""In-process document store.

Keeps documents in a dictionary. Used by tests and for throwaway sessions where
nothing should touch the disk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockbuild.stores.base import BaseDocumentStore

if TYPE_CHECKING:
    from blockbuild.stores.base import Document


class MemoryDocumentStore(BaseDocumentStore):
    """Document store backed by a plain dictionary.

    Attributes:
        documents: Mapping of document id to stored document.
    """

    def __init__(self, collection: str = "users", documents: dict[str, Document] | None = None) -> None:
        """Initialize the store, optionally pre-seeded with documents."""
        super().__init__(collection)
        self.documents: dict[str, Document] = documents or {}

    def _read(self, doc_id: str) -> Document | None:
        return self.documents.get(doc_id)

    def _write(self, doc_id: str, document: Document) -> None:
        self.documents[doc_id] = document

    def delete(self, doc_id: str) -> None:
        """Remove a document; subscribers are notified with None."""
        self.documents.pop(doc_id, None)
        self._queue(doc_id)
