"""Coloured status lines printed to the terminal."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def _emit(icon: str, message: str, colour: str) -> None:
    console = Console(highlight=False, soft_wrap=True, emoji=False)
    console.print(Text.assemble((icon, colour), " ", (str(message), colour)))


def warn(message: str) -> None:
    """Print a red warning line."""
    _emit("!" if no_emoji() else "⚠️ ", message, "red")


def success(message: str) -> None:
    """Print a green success line."""
    _emit("✓" if no_emoji() else "✅", message, "green")