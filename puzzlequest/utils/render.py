"""Plain-text rendering of boards for the terminal."""

from typing import Dict, List, Optional

from ..engine.models import BLOCK, LetterState, Tile, Cell, Cursor, GridPuzzle

# One-character markers shown under each evaluated letter
STATE_MARKS: Dict[LetterState, str] = {
    LetterState.CORRECT: "+",
    LetterState.PRESENT: "?",
    LetterState.ABSENT: "-",
    LetterState.TBD: " ",
    LetterState.EMPTY: " ",
}

KEYBOARD_ROWS = ["QWERTYUIOP", "ASDFGHJKL", "ZXCVBNM"]


def render_word_rows(rows: List[List[Tile]]) -> str:
    """
    Render guess rows, each as a letter line and a feedback line.

    '+' marks a correct letter, '?' a present one and '-' an absent one.
    """
    lines = []
    for row in rows:
        lines.append(" ".join(tile.letter or "." for tile in row))
        lines.append(" ".join(STATE_MARKS[tile.state] for tile in row))
    return "\n".join(lines)


def render_keyboard(keyboard: Dict[str, LetterState]) -> str:
    """Render the keyboard: absent letters as '_', present ones lowercased."""
    lines = []
    for keys in KEYBOARD_ROWS:
        rendered = []
        for key in keys:
            state = keyboard.get(key)
            if state is LetterState.ABSENT:
                rendered.append("_")
            elif state is LetterState.PRESENT:
                rendered.append(key.lower())
            else:
                rendered.append(key)
        lines.append(" ".join(rendered))
    return "\n".join(lines)


def render_grid(
    puzzle: GridPuzzle,
    cells: List[List[Cell]],
    cursor: Optional[Cursor] = None,
) -> str:
    """
    Render the player grid.

    Blocks show as '#', empty cells as '.', wrong letters lowercased and the
    cursor cell wrapped in brackets.
    """
    lines = []
    for r, row in enumerate(cells):
        rendered = []
        for c, cell in enumerate(row):
            if puzzle.is_block(r, c):
                text = BLOCK
            elif not cell.letter:
                text = "."
            elif cell.error:
                text = cell.letter.lower()
            else:
                text = cell.letter
            if cursor is not None and (cursor.row, cursor.col) == (r, c):
                rendered.append(f"[{text}]")
            else:
                rendered.append(f" {text} ")
        lines.append("".join(rendered))
    return "\n".join(lines)
