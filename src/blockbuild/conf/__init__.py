"""Settings for the hotbar, build area, store and player.

Every value starts from global_settings. A player or deployment overrides the
ones it needs (usually USER_ID and the document store) in a settings module:

    # settings.py next to the game
    USER_ID = "alice"
    DOCUMENT_STORE_ROOT = "saves"

The module is named by BLOCKBUILD_SETTINGS_MODULE and defaults to ``settings``.
Tests skip the module entirely and call settings.configure().
"""

from __future__ import annotations

import importlib
import logging
import os
from typing import Any

from blockbuild.conf import global_settings

logger = logging.getLogger(__name__)


class LazySettings:
    """Reads the settings module the first time a value is asked for.

    Values come from global_settings, overridden by every upper-case name in the
    settings module. A missing settings module is not an error.
    """

    def __init__(self) -> None:
        """Initialize without reading anything."""
        self._wrapped: Settings | None = None

    def _setup(self) -> Settings:
        settings_module = os.environ.get("BLOCKBUILD_SETTINGS_MODULE", "settings")
        self._wrapped = Settings()

        try:
            mod = importlib.import_module(settings_module)
        except ImportError:
            logger.debug("No settings module %r, using defaults", settings_module)
            return self._wrapped

        for setting in dir(mod):
            if setting.isupper():
                setattr(self._wrapped, setting, getattr(mod, setting))
        return self._wrapped

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Look up a setting, reading the settings module on first use."""
        wrapped = self._wrapped if self._wrapped is not None else self._setup()
        return getattr(wrapped, name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Override one setting for the rest of the run."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
            return
        wrapped = self._wrapped if self._wrapped is not None else self._setup()
        setattr(wrapped, name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Set values directly, without a settings module.

        Example:
            settings.configure(
                HOTBAR_SLOTS=9,
                DOCUMENT_STORE="blockbuild.stores.memory.MemoryDocumentStore",
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)


class Settings:
    """Attribute bag holding one value per setting name."""

    def __init__(self) -> None:
        """Start from global_settings."""
        for setting in dir(global_settings):
            if setting.isupper():
                setattr(self, setting, getattr(global_settings, setting))


settings = LazySettings()

__all__ = ["LazySettings", "Settings", "global_settings", "settings"]
