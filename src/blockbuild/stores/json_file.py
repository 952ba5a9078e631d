"""File-backed document store.

Each document is a JSON file at ``<root>/<collection>/<doc_id>.json`` written with
2-space indentation so it can be inspected and edited by hand. Edits made by
another process (or by hand) are picked up on the next ``dispatch_pending()`` by
comparing file stats, which gives subscribers the same push behaviour as a hosted
document database.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from blockbuild.conf import settings
from blockbuild.stores.base import BaseDocumentStore, DocumentStoreError

if TYPE_CHECKING:
    from collections.abc import Callable

    from blockbuild.stores.base import Document

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(BaseDocumentStore):
    """Document store persisting one JSON file per document.

    Attributes:
        root: Base directory of the store.
        directory: Directory holding this collection's files.
    """

    def __init__(self, root: Path | str | None = None, collection: str = "users") -> None:
        """Initialize the store.

        Args:
            root: Base directory. If None, uses a 'userdata' directory in the current
                  working directory.
            collection: Collection name, used as the sub-directory name.
        """
        super().__init__(collection)
        self.root = Path(root) if root is not None else Path.cwd() / "userdata"
        self.directory = self.root / collection
        self._stats: dict[str, tuple[int, int] | None] = {}

    @classmethod
    def from_settings(cls) -> JsonFileDocumentStore:
        """Create a store rooted at settings.DOCUMENT_STORE_ROOT."""
        return cls(root=settings.DOCUMENT_STORE_ROOT, collection=settings.DOCUMENT_COLLECTION)

    def _path(self, doc_id: str) -> Path:
        return self.directory / f"{doc_id}.json"

    def _stat(self, doc_id: str) -> tuple[int, int] | None:
        try:
            stat = self._path(doc_id).stat()
        except FileNotFoundError:
            return None
        return (stat.st_mtime_ns, stat.st_size)

    def _read(self, doc_id: str) -> Document | None:
        path = self._path(doc_id)
        if not path.exists():
            return None
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Failed to read document {doc_id}: {e}"
            raise DocumentStoreError(msg) from e
        if not isinstance(data, dict):
            msg = f"Document {doc_id} is not a JSON object"
            raise DocumentStoreError(msg)
        return data

    def _write(self, doc_id: str, document: Document) -> None:
        path = self._path(doc_id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as e:
            msg = f"Failed to write document {doc_id}: {e}"
            raise DocumentStoreError(msg) from e
        self._stats[doc_id] = self._stat(doc_id)

    def subscribe(self, doc_id: str, callback: Callable[[Document | None], None]) -> Callable[[], None]:
        """Register a change listener and remember the file's current stat."""
        self._stats[doc_id] = self._stat(doc_id)
        return super().subscribe(doc_id, callback)

    def dispatch_pending(self) -> int:
        """Queue documents changed on disk by someone else, then deliver notifications."""
        for doc_id in list(self._subscribers):
            current = self._stat(doc_id)
            if current != self._stats.get(doc_id):
                logger.debug("Detected external change to %s/%s", self.collection, doc_id)
                self._stats[doc_id] = current
                self._queue(doc_id)
        return super().dispatch_pending()
