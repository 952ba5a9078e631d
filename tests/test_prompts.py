"""Tests for the console prompt."""

from unittest.mock import MagicMock, patch

import pytest

from blockbuild.prompts import ConsolePrompt


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("  castle  ", "castle"), ("", None), ("   ", None)],
)
def test_answer_is_stripped(answer: str, expected: str | None) -> None:
    """Test that answers are stripped and blank answers count as cancel."""
    prompt = ConsolePrompt(console=MagicMock())
    with patch("blockbuild.prompts.Prompt.ask", return_value=answer) as ask:
        assert prompt.ask("New map name") == expected

    assert "New map name" in ask.call_args[0][0]
    assert ask.call_args.kwargs["console"] is prompt.console


@pytest.mark.parametrize("error", [EOFError, KeyboardInterrupt])
def test_interrupt_cancels(error: type[BaseException]) -> None:
    """Test that Ctrl+D and Ctrl+C cancel the prompt."""
    prompt = ConsolePrompt(console=MagicMock())
    with patch("blockbuild.prompts.Prompt.ask", side_effect=error):
        assert prompt.ask("Load map") is None
