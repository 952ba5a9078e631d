"""Document stores backing the per-user document.

The store class is configured by dotted path in ``settings.DOCUMENT_STORE`` and
created with ``load_store()``.
"""

import importlib
import logging

from blockbuild.conf import settings
from blockbuild.stores.base import (
    BaseDocumentStore,
    Document,
    DocumentNotFoundError,
    DocumentStoreError,
    apply_field_paths,
)
from blockbuild.stores.json_file import JsonFileDocumentStore
from blockbuild.stores.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)


def load_store(class_path: str | None = None) -> BaseDocumentStore:
    """Import and instantiate the configured document store.

    Args:
        class_path: Dotted path such as "blockbuild.stores.memory.MemoryDocumentStore".
                    If None, uses settings.DOCUMENT_STORE.

    Returns:
        A store instance created with its ``from_settings()`` constructor.

    Raises:
        ImportError: If the module or class cannot be found.
        TypeError: If the class is not a BaseDocumentStore subclass.
    """
    if class_path is None:
        class_path = settings.DOCUMENT_STORE

    module_path, _, class_name = class_path.rpartition(".")
    module = importlib.import_module(module_path)
    store_class = getattr(module, class_name, None)
    if store_class is None:
        msg = f"Document store class not found: {class_path}"
        raise ImportError(msg)
    if not (isinstance(store_class, type) and issubclass(store_class, BaseDocumentStore)):
        msg = f"{class_path} is not a BaseDocumentStore subclass"
        raise TypeError(msg)

    logger.info("Using document store: %s", class_path)
    return store_class.from_settings()


__all__ = [
    "BaseDocumentStore",
    "Document",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "JsonFileDocumentStore",
    "MemoryDocumentStore",
    "apply_field_paths",
    "load_store",
]
