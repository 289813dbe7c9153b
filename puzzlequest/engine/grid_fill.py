"""
Grid-fill engine.

Drives a single 5x5 mini crossword attempt: cursor selection, letter entry
with error counting, word locking, hints, and completion detection.
"""

import logging
from typing import List, Dict, Optional, Any, Union
from pydantic import BaseModel, Field, ConfigDict

from .clock import MonotonicClock
from .models import (
    GRID_SIZE,
    Direction,
    GridFillStatus,
    GridPuzzle,
    Clue,
    Cell,
    Cursor,
    GridFillSnapshot,
)

logger = logging.getLogger(__name__)


class GridFillEngine(BaseModel):
    """
    Manages one grid-fill attempt.

    The only status change is playing -> complete, reached when every
    non-blocked cell holds its solution letter.

    Attributes:
        puzzle: The crossword being solved
        clock: Time source for the elapsed-time counter
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    puzzle: GridPuzzle
    clock: Any = Field(default_factory=MonotonicClock)

    _cells: List[List[Cell]] = None
    _cursor: Optional[Cursor] = None
    _status: GridFillStatus = GridFillStatus.PLAYING
    _errors: int = 0
    _hints_used: int = 0
    _elapsed_base: int = 0
    _started_at: float = 0.0
    _elapsed: int = 0

    def model_post_init(self, __context) -> None:
        """Create an empty player grid and start timing."""
        self._cells = [[Cell() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
        self._started_at = self.clock.now()

    @classmethod
    def restore(
        cls,
        snapshot: Optional[GridFillSnapshot],
        **kwargs: Any,
    ) -> "GridFillEngine":
        """
        Build an engine, resuming from a snapshot when one is given.

        Args:
            snapshot: Previously saved state, or None to start fresh
            **kwargs: Engine fields (puzzle, clock)

        Returns:
            A GridFillEngine positioned where the snapshot left off
        """
        engine = cls(**kwargs)
        if snapshot is None:
            return engine

        engine._cells = [[cell.model_copy() for cell in row] for row in snapshot.cells]
        cursor = snapshot.cursor
        if cursor is not None and not engine.puzzle.is_block(cursor.row, cursor.col):
            engine._cursor = cursor.model_copy()
        engine._status = snapshot.status
        engine._errors = snapshot.errors
        engine._hints_used = snapshot.hints_used
        engine._elapsed_base = snapshot.elapsed_seconds
        engine._elapsed = snapshot.elapsed_seconds
        logger.debug(
            "Restored grid session %d (%s, %d errors)",
            engine.puzzle.puzzle_index, engine._status.value, engine._errors,
        )
        return engine

    # ─── Read-only views ────────────────────────────────────────────────────

    @property
    def status(self) -> GridFillStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is GridFillStatus.COMPLETE

    @property
    def cursor(self) -> Optional[Cursor]:
        return self._cursor.model_copy() if self._cursor else None

    @property
    def cells(self) -> List[List[Cell]]:
        return [[cell.model_copy() for cell in row] for row in self._cells]

    @property
    def errors(self) -> int:
        return self._errors

    @property
    def hints_used(self) -> int:
        return self._hints_used

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    def active_clue_numbers(self) -> Dict[str, Optional[int]]:
        """Numbers of the across and down clues covering the cursor cell."""
        numbers: Dict[str, Optional[int]] = {"across": None, "down": None}
        if self._cursor is None:
            return numbers
        for direction in Direction:
            clue = self.puzzle.find_clue(self._cursor.row, self._cursor.col, direction)
            numbers[direction.value] = clue.number if clue else None
        return numbers

    # ─── Selection ──────────────────────────────────────────────────────────

    def select_cell(self, row: int, col: int) -> None:
        """
        Focus a cell.

        Re-selecting the focused cell toggles direction. If the chosen
        direction has no clue through the cell, the other one is used.
        """
        if self.puzzle.is_block(row, col):
            return

        previous = self._cursor
        if previous is not None and (previous.row, previous.col) == (row, col):
            direction = previous.direction.flipped()
        elif previous is not None:
            direction = previous.direction
        else:
            direction = Direction.ACROSS

        if self.puzzle.find_clue(row, col, direction) is None:
            direction = direction.flipped()

        self._move_cursor(row, col, direction)

    def select_clue(self, clue: Clue, direction: Union[Direction, str]) -> None:
        """Jump to the first cell of a clue."""
        self._cursor = Cursor(
            row=clue.row, col=clue.col, direction=Direction(direction), clue=clue
        )

    def _move_cursor(self, row: int, col: int, direction: Direction) -> None:
        self._cursor = Cursor(
            row=row,
            col=col,
            direction=direction,
            clue=self.puzzle.find_clue(row, col, direction),
        )

    def _editable_cursor(self) -> Optional[Cursor]:
        """The cursor, if input may be applied at it right now."""
        if self._status is not GridFillStatus.PLAYING or self._cursor is None:
            return None
        if self._cells[self._cursor.row][self._cursor.col].locked:
            return None
        return self._cursor

    # ─── Input events ───────────────────────────────────────────────────────

    def input_letter(self, letter: str) -> None:
        """
        Write a letter at the cursor and advance.

        A mistake is counted only when a filled, non-erroneous cell is
        overwritten with a different wrong letter.
        """
        if len(letter) != 1 or not letter.isalpha():
            return
        cursor = self._editable_cursor()
        if cursor is None:
            return

        letter = letter.upper()
        row, col, direction = cursor.row, cursor.col, cursor.direction
        cell = self._cells[row][col]
        solution = self.puzzle.solution_at(row, col)

        if letter != solution and not cell.error and cell.letter != "" and cell.letter != letter:
            self._errors += 1
            logger.debug("Mistake at (%d, %d): %s, total %d", row, col, letter, self._errors)

        cell.letter = letter
        cell.error = letter != solution

        clue = self.puzzle.find_clue(row, col, direction)
        if clue is not None and self._word_matches(clue, direction):
            self._lock_word(clue, direction)

        self._check_complete()

        following = self.puzzle.next_cell(row, col, direction)
        if following is not None:
            self._move_cursor(following[0], following[1], direction)

    def delete_letter(self) -> None:
        """
        Clear the cursor cell, or step back and clear the previous cell when
        the cursor cell is already empty. Errors already counted stay counted.
        """
        cursor = self._editable_cursor()
        if cursor is None:
            return

        cell = self._cells[cursor.row][cursor.col]
        if cell.letter:
            cell.letter = ""
            cell.error = False
            return

        previous = self.puzzle.prev_cell(cursor.row, cursor.col, cursor.direction)
        if previous is None:
            return
        prev_row, prev_col = previous
        prev_cell = self._cells[prev_row][prev_col]
        if prev_cell.locked:
            return
        prev_cell.letter = ""
        prev_cell.error = False
        self._move_cursor(prev_row, prev_col, cursor.direction)

    def reveal_hint(self) -> bool:
        """
        Fill the cursor cell with its solution letter and lock it.

        Returns:
            True if a hint was spent
        """
        if self._status is not GridFillStatus.PLAYING or self._cursor is None:
            return False
        row, col = self._cursor.row, self._cursor.col
        if self.puzzle.is_block(row, col):
            return False

        cell = self._cells[row][col]
        cell.letter = self.puzzle.solution_at(row, col)
        cell.error = False
        cell.locked = True
        self._hints_used += 1
        logger.debug("Hint %d revealed (%d, %d)", self._hints_used, row, col)

        self._check_complete()
        return True

    # ─── Rules ──────────────────────────────────────────────────────────────

    def _word_matches(self, clue: Clue, direction: Direction) -> bool:
        return all(
            self._cells[r][c].letter == ch
            for (r, c), ch in zip(clue.cells(direction), clue.answer.upper())
        )

    def _lock_word(self, clue: Clue, direction: Direction) -> None:
        for r, c in clue.cells(direction):
            self._cells[r][c].locked = True
            self._cells[r][c].error = False
        logger.debug("Locked %d %s", clue.number, direction.value)

    def is_solved(self) -> bool:
        """Whether every non-blocked cell holds its solution letter."""
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                if self.puzzle.is_block(r, c):
                    continue
                if self._cells[r][c].letter != self.puzzle.solution_at(r, c):
                    return False
        return True

    def _check_complete(self) -> None:
        if self._status is GridFillStatus.PLAYING and self.is_solved():
            self.tick()
            self._status = GridFillStatus.COMPLETE
            logger.debug(
                "Grid %d complete: %d errors, %d hints, %ds",
                self.puzzle.puzzle_index, self._errors, self._hints_used, self._elapsed,
            )

    # ─── Time ───────────────────────────────────────────────────────────────

    def tick(self) -> int:
        """Refresh the elapsed-time counter; frozen once the grid is complete."""
        if self._status is GridFillStatus.PLAYING:
            self._elapsed = self._elapsed_base + int(self.clock.now() - self._started_at)
        return self._elapsed

    # ─── Persistence ────────────────────────────────────────────────────────

    def snapshot(self) -> GridFillSnapshot:
        self.tick()
        return GridFillSnapshot(
            cells=self.cells,
            cursor=self.cursor,
            status=self._status,
            errors=self._errors,
            hints_used=self._hints_used,
            elapsed_seconds=self._elapsed,
        )
