"""Terminal helpers for PuzzleQuest."""

from .render import render_word_rows, render_keyboard, render_grid

__all__ = [
    "render_word_rows",
    "render_keyboard",
    "render_grid",
]
