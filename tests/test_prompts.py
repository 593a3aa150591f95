"""Confirmation prompt behaviour."""

from __future__ import annotations

import io

import pytest
import readchar

from flamin_ui_cli import prompts


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def keys(monkeypatch: pytest.MonkeyPatch):
    def feed(*pressed: str) -> None:
        queue = list(pressed)
        monkeypatch.setattr(prompts.sys, "stdin", FakeTTY())
        monkeypatch.setattr(prompts.readchar, "readkey", lambda: queue.pop(0))

    return feed


def test_y_confirms(keys) -> None:
    keys("y")
    assert prompts.confirm("Overwrite?") is True


def test_uppercase_n_declines(keys) -> None:
    keys("N")
    assert prompts.confirm("Overwrite?", True) is False


def test_enter_takes_default(keys) -> None:
    keys(readchar.key.ENTER)
    assert prompts.confirm("Overwrite?") is False
    keys(readchar.key.ENTER)
    assert prompts.confirm("Overwrite?", True) is True


def test_unrelated_keys_are_ignored(keys) -> None:
    keys("x", "1", "y")
    assert prompts.confirm("Overwrite?") is True


def test_escape_declines(keys) -> None:
    keys(readchar.key.ESC)
    assert prompts.confirm("Overwrite?", True) is False


def test_ctrl_c_interrupts(keys) -> None:
    keys(readchar.key.CTRL_C)
    with pytest.raises(KeyboardInterrupt):
        prompts.confirm("Overwrite?")


def test_without_tty_reads_a_line(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list = []

    def fake_confirm(message, default=False):
        seen.append((message, default))
        return True

    monkeypatch.setattr(prompts.sys, "stdin", io.StringIO("y\n"))
    monkeypatch.setattr(prompts.typer, "confirm", fake_confirm)
    assert prompts.confirm("Install?") is True
    assert seen == [("Install?", False)]
