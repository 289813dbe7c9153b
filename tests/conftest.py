import pytest

from puzzlequest.engine import (
    Direction,
    GridPuzzle,
    GridFillEngine,
    ManualClock,
    WordGuessEngine,
)


CRANE_GRID = [
    ["C", "R", "A", "N", "E"],
    ["H", "#", "R", "#", "V"],
    ["A", "L", "I", "V", "E"],
    ["O", "#", "S", "#", "N"],
    ["S", "H", "E", "E", "T"],
]

CRANE_CLUES = {
    "across": [
        {"number": 1, "row": 0, "col": 0, "clue": "Wading bird", "answer": "CRANE", "length": 5},
        {"number": 4, "row": 2, "col": 0, "clue": "Living", "answer": "ALIVE", "length": 5},
        {"number": 5, "row": 4, "col": 0, "clue": "Bed linen", "answer": "SHEET", "length": 5},
    ],
    "down": [
        {"number": 1, "row": 0, "col": 0, "clue": "Disorder", "answer": "CHAOS", "length": 5},
        {"number": 2, "row": 0, "col": 2, "clue": "Get up", "answer": "ARISE", "length": 5},
        {"number": 3, "row": 0, "col": 4, "clue": "Happening", "answer": "EVENT", "length": 5},
    ],
}

# Cells that belong to no across word, filled through their down clue
DOWN_ONLY_CELLS = [(1, 0, "H"), (3, 0, "O"), (1, 2, "R"), (3, 2, "S"), (1, 4, "V"), (3, 4, "N")]

ACCEPTED = {
    "CRANE", "SPEED", "ERASE", "HOUSE", "SLATE", "TRACE",
    "ABOUT", "OTHER", "WORLD", "LEMON", "EERIE", "CRATE",
}


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def grid_puzzle():
    return GridPuzzle(puzzle_index=1, difficulty=1, grid=CRANE_GRID, clues=CRANE_CLUES)


@pytest.fixture
def grid_engine(grid_puzzle, clock):
    return GridFillEngine(puzzle=grid_puzzle, clock=clock)


@pytest.fixture
def word_engine(clock):
    return WordGuessEngine(target="CRANE", accepted_words=ACCEPTED, clock=clock)


def type_word(engine: WordGuessEngine, word: str) -> None:
    for letter in word:
        engine.add_letter(letter)


def play_guess(engine: WordGuessEngine, word: str) -> None:
    """Type, submit and fully reveal one guess."""
    type_word(engine, word)
    engine.submit_guess()
    engine.clock.advance(2.0)
    engine.tick()


def type_across(engine: GridFillEngine, row: int, word: str) -> None:
    engine.select_cell(row, 0)
    if engine.cursor.direction is not Direction.ACROSS:
        engine.select_cell(row, 0)
    for letter in word:
        engine.input_letter(letter)


def solve_all_but_last(engine: GridFillEngine) -> None:
    """Fill every cell except (3, 4)."""
    for row, word in ((0, "CRANE"), (2, "ALIVE"), (4, "SHEET")):
        type_across(engine, row, word)
    for row, col, letter in DOWN_ONLY_CELLS[:-1]:
        engine.select_cell(row, col)
        engine.input_letter(letter)
