"""Loader for pluggable systems."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from blockbuild.systems.registry import SystemRegistry

if TYPE_CHECKING:
    from blockbuild.systems.base import BaseSystem
    from blockbuild.systems.game_context import GameContext

logger = logging.getLogger(__name__)


class MissingDependencyError(Exception):
    """Raised when a system depends on a system that is not installed."""


class CircularDependencyError(Exception):
    """Raised when system dependencies form a cycle."""


class SystemLoader:
    """Loads and manages system instances.

    The SystemLoader handles:
    1. Importing installed system modules to trigger registration
    2. Instantiating the systems those modules registered
    3. Ordering them so every system is set up after its dependencies
    4. Running setup and cleanup in that order (cleanup reversed)
    """

    def __init__(self, installed_systems: list[str]) -> None:
        """Initialize the system loader.

        Args:
            installed_systems: Module paths to import (settings.INSTALLED_SYSTEMS).
        """
        self.installed_systems = installed_systems
        self._instances: dict[str, BaseSystem] = {}
        self._load_order: list[str] = []

    def load_modules(self) -> None:
        """Import all installed system modules to trigger registration."""
        for module_path in self.installed_systems:
            try:
                importlib.import_module(module_path)
                logger.debug("Loaded system module: %s", module_path)
            except ImportError:
                logger.exception("Could not load system module '%s'", module_path)
                raise

    def _installed_classes(self) -> dict[str, type[BaseSystem]]:
        installed: dict[str, type[BaseSystem]] = {}
        for name, system_class in SystemRegistry.get_all().items():
            module = system_class.__module__
            if any(module == path or module.startswith(f"{path}.") for path in self.installed_systems):
                installed[name] = system_class
        return installed

    def instantiate_all(self) -> dict[str, BaseSystem]:
        """Create instances of all installed systems in dependency order.

        Returns:
            Dictionary mapping system names to their instances.

        Raises:
            MissingDependencyError: If a dependency is not installed.
            CircularDependencyError: If dependencies form a cycle.
        """
        self.load_modules()
        classes = self._installed_classes()
        self._load_order = resolve_order({name: list(cls.dependencies) for name, cls in classes.items()})

        for name in self._load_order:
            self._instances[name] = classes[name]()
            logger.debug("Instantiated system: %s", name)

        logger.info("Instantiated %d systems", len(self._instances))
        return self._instances

    def setup_all(self, context: GameContext) -> None:
        """Register every system with the context, then set them up in order."""
        for name in self._load_order:
            context.register_system(name, self._instances[name])
        for name in self._load_order:
            self._instances[name].setup(context)
            logger.debug("Set up system: %s", name)

    def cleanup_all(self) -> None:
        """Clean up systems in reverse dependency order."""
        for name in reversed(self._load_order):
            self._instances[name].cleanup()
        logger.debug("Cleaned up all systems")

    def update_all(self, delta_time: float) -> None:
        """Update all systems in dependency order."""
        for system in self.ordered:
            system.update(delta_time)

    def draw_all(self) -> None:
        """Draw all systems (world layer) in dependency order."""
        for system in self.ordered:
            system.on_draw()

    def draw_ui_all(self) -> None:
        """Draw all systems (screen layer) in dependency order."""
        for system in self.ordered:
            system.on_draw_ui()

    def on_key_press_all(self, symbol: int, modifiers: int) -> bool:
        """Offer a key press to systems, last-loaded first, until one handles it."""
        return any(system.on_key_press(symbol, modifiers) for system in reversed(self.ordered))

    def on_mouse_press_all(self, x: float, y: float, button: int, modifiers: int) -> bool:
        """Offer a click to systems, last-loaded first, until one handles it."""
        return any(system.on_mouse_press(x, y, button, modifiers) for system in reversed(self.ordered))

    def on_mouse_scroll_all(self, x: float, y: float, scroll_x: float, scroll_y: float) -> bool:
        """Offer a wheel movement to systems, last-loaded first, until one handles it."""
        return any(system.on_mouse_scroll(x, y, scroll_x, scroll_y) for system in reversed(self.ordered))

    @property
    def ordered(self) -> list[BaseSystem]:
        """System instances in dependency order."""
        return [self._instances[name] for name in self._load_order]


def resolve_order(dependencies: dict[str, list[str]]) -> list[str]:
    """Order system names so each comes after its dependencies.

    Ties keep the sorted name order so the result is deterministic.

    Args:
        dependencies: Mapping of system name to the names it depends on.

    Returns:
        System names in setup order.

    Raises:
        MissingDependencyError: If a dependency is not a key of ``dependencies``.
        CircularDependencyError: If dependencies form a cycle.
    """
    for name, deps in dependencies.items():
        for dep in deps:
            if dep not in dependencies:
                msg = f"System '{name}' depends on '{dep}', which is not installed"
                raise MissingDependencyError(msg)

    order: list[str] = []
    visiting: set[str] = set()
    done: set[str] = set()

    def visit(name: str, chain: list[str]) -> None:
        if name in done:
            return
        if name in visiting:
            cycle = " -> ".join([*chain, name])
            msg = f"Circular system dependency: {cycle}"
            raise CircularDependencyError(msg)
        visiting.add(name)
        for dep in sorted(dependencies[name]):
            visit(dep, [*chain, name])
        visiting.discard(name)
        done.add(name)
        order.append(name)

    for name in sorted(dependencies):
        visit(name, [])
    return order
