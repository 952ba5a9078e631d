"""Free-text prompts used to name and load maps.

The sync system asks for text through the TextPrompt protocol so tests can pass a
scripted prompt. ConsolePrompt reads from the terminal the game was started from
using rich.

Example:
    prompt = ConsolePrompt()
    name = prompt.ask("New map name")
    if name is None:
        return  # cancelled
"""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt

logger = logging.getLogger(__name__)


class TextPrompt(Protocol):
    """Synchronous free-text input."""

    def ask(self, message: str) -> str | None:
        """Ask for a line of text.

        Returns:
            The stripped answer, or None if the user cancelled or entered nothing.
        """
        ...


class ConsolePrompt:
    """TextPrompt reading from the terminal via rich.

    Ctrl+C, Ctrl+D and empty answers all count as cancellation.

    Attributes:
        console: Console used for the question and the answer.
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with the given console, or a new one."""
        self.console = console or Console()

    def ask(self, message: str) -> str | None:
        """Ask ``message`` on the console."""
        try:
            answer = Prompt.ask(f"[bold]{message}[/bold]", console=self.console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            logger.debug("Prompt cancelled: %s", message)
            return None

        answer = answer.strip()
        return answer or None
