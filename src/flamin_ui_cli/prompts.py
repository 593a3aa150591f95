"""Interactive confirmation prompts."""

import sys
from typing import Callable

import readchar
import typer
from rich.console import Console

# (message, default) -> answer
Confirm = Callable[[str, bool], bool]

console = Console()


def get_key():
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.ENTER:
        return 'enter'

    if key == readchar.key.ESC:
        return 'escape'

    # Ctrl+C
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question.

    Reads a single keypress when attached to a terminal: ``y``/``n`` answer,
    Enter takes the default and Esc declines. Without a TTY (pipes, CI) the
    answer is read as a line through ``typer.confirm``.
    """
    if not sys.stdin.isatty():
        return typer.confirm(message, default=default)

    hint = "[Y/n]" if default else "[y/N]"
    console.print(f"[cyan]?[/cyan] {message} [dim]{hint}[/dim] ", end="")
    while True:
        key = get_key()
        if key == 'enter':
            answer = default
        elif key == 'escape':
            answer = False
        elif key.lower() in ("y", "n"):
            answer = key.lower() == "y"
        else:
            continue
        console.print("[green]yes[/green]" if answer else "[yellow]no[/yellow]")
        return answer
