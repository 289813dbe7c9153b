"""
Main entry point for playing PuzzleQuest in the terminal.

Usage:
    python -m puzzlequest.main
    python -m puzzlequest.main config.yaml --game crossword --verbose
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import yaml

from .config import PlatformConfig
from .content import WordCatalog, GridCatalog
from .engine import (
    Direction,
    GridFillEngine,
    GuessRejected,
    WordGuessEngine,
    WordGuessStatus,
    tier_label,
)
from .scoring import hint_cost
from .storage import CompletionReport, JsonFileStore, ProgressTracker, SessionRepository
from .utils import render_grid, render_keyboard, render_word_rows

QUIT_COMMANDS = {":q", "quit", "exit"}


def load_config(config_path: str) -> PlatformConfig:
    """Load platform configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return PlatformConfig(**data)


def _read(prompt: str) -> Optional[str]:
    """Read a line of input; None when the player wants to stop."""
    try:
        line = input(prompt).strip()
    except EOFError:
        return None
    if line.lower() in QUIT_COMMANDS:
        return None
    return line


def _print_report(report: CompletionReport) -> None:
    print()
    print("=== Puzzle Summary ===")
    print(f"Score: {report.score}")
    print(f"Streak: {report.streak} (best {report.best_streak})")
    if report.decision.changed:
        if report.decision.direction == "up":
            print(f"Difficulty increased to {tier_label(report.decision.tier)}")
        else:
            print(f"Difficulty adjusted to {tier_label(report.decision.tier)}")


def play_wordle(config: PlatformConfig, tracker: ProgressTracker, sessions: SessionRepository) -> int:
    """Play the current word puzzle until it is won, lost or abandoned."""
    catalog = WordCatalog.from_file(config.wordle_data) if config.wordle_data else WordCatalog.load_default()
    progress = tracker.wordle
    if progress.all_done:
        print("Every word puzzle is solved!")
        return 0

    index, tier = progress.playable_puzzle, progress.current_tier
    engine = WordGuessEngine.restore(
        sessions.load_word_guess(index, tier),
        target=catalog.word_for(index, tier),
        accepted_words=catalog.accepted_words(),
        reveal_stagger=config.reveal_stagger,
        reveal_flip=config.reveal_flip,
    )

    print(f"Word puzzle #{index} ({tier_label(tier)}). Type a 5-letter word, ':q' to stop.")
    while not engine.is_over:
        print()
        print(render_word_rows(engine.display_rows()))
        print()
        print(render_keyboard(engine.keyboard))

        line = _read("guess> ")
        if line is None:
            sessions.save_word_guess(index, tier, engine.snapshot())
            print("Progress saved.")
            return 0

        while engine.current_input:
            engine.delete_letter()
        for letter in line:
            if letter.isalpha():
                engine.add_letter(letter)

        try:
            engine.submit_guess()
        except GuessRejected as e:
            print(e)
            continue

        while engine.is_revealing:
            time.sleep(max(config.reveal_stagger, 0.05))
            engine.tick()
        sessions.save_word_guess(index, tier, engine.snapshot())

    print()
    print(render_word_rows(engine.rows))
    if engine.status is WordGuessStatus.WON:
        print(f"Solved in {engine.guess_count}!")
    else:
        print(f"The word was {engine.target}.")

    _print_report(tracker.record_word_guess(engine, index, tier))
    sessions.discard("wordle", index, tier)
    return 0


CROSSWORD_HELP = """Commands:
  <row> <col>     select a cell (0-4), again to switch direction
  a<N> / d<N>     jump to across / down clue N
  <letters>       type letters from the cursor
  -               delete
  ?               reveal the cursor cell
  :q              save and stop"""


def _crossword_command(engine: GridFillEngine, line: str) -> Optional[str]:
    """Apply one command line; returns a message for the player, if any."""
    parts = line.split()
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        row, col = int(parts[0]), int(parts[1])
        if not (0 <= row < 5 and 0 <= col < 5):
            return "Cells are numbered 0-4"
        engine.select_cell(row, col)
        return None

    if line[:1].lower() in ("a", "d") and line[1:].isdigit():
        direction = Direction.ACROSS if line[0].lower() == "a" else Direction.DOWN
        number = int(line[1:])
        for clue in engine.puzzle.clues.for_direction(direction):
            if clue.number == number:
                engine.select_clue(clue, direction)
                return None
        return f"No {direction.value} clue {number}"

    if line == "-":
        engine.delete_letter()
        return None

    if line == "?":
        cost = hint_cost(engine.hints_used)
        if engine.reveal_hint():
            return "Hint revealed (free)" if cost == 0 else f"Hint revealed (-{cost} pts)"
        return "Select a cell first"

    if line.isalpha():
        if engine.cursor is None:
            return "Select a cell first"
        for letter in line:
            engine.input_letter(letter)
        return None

    return CROSSWORD_HELP


def play_crossword(config: PlatformConfig, tracker: ProgressTracker, sessions: SessionRepository) -> int:
    """Play the current mini crossword until it is complete or abandoned."""
    catalog = GridCatalog.from_file(config.crossword_data) if config.crossword_data else GridCatalog.load_default()
    progress = tracker.crossword
    if progress.all_done:
        print("Every crossword is complete!")
        return 0

    index, tier = progress.playable_puzzle, progress.current_tier
    engine = GridFillEngine.restore(
        sessions.load_grid_fill(index, tier),
        puzzle=catalog.puzzle_for(index, tier),
    )

    print(f"Crossword #{index} ({tier_label(tier)}).")
    print(CROSSWORD_HELP)
    while not engine.is_over:
        cursor = engine.cursor
        print()
        print(render_grid(engine.puzzle, engine.cells, cursor))
        if cursor is not None and cursor.clue is not None:
            print(f"{cursor.clue.number} {cursor.direction.value}: {cursor.clue.clue}")
        print(f"Errors: {engine.errors}  Hints: {engine.hints_used}  Time: {engine.tick()}s")

        line = _read("> ")
        if line is None:
            sessions.save_grid_fill(index, tier, engine.snapshot())
            print("Progress saved.")
            return 0

        message = _crossword_command(engine, line)
        if message:
            print(message)
        sessions.save_grid_fill(index, tier, engine.snapshot())

    print()
    print(render_grid(engine.puzzle, engine.cells))
    print(f"Complete in {engine.elapsed_seconds}s!")

    _print_report(tracker.record_grid_fill(engine, index, tier))
    sessions.discard("crossword", index, tier)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Play a PuzzleQuest puzzle in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  player_name: Sam
  store_path: .puzzlequest/progress.json
  reveal_stagger: 0.3
  reveal_flip: 0.5
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument(
        "--game", "-g",
        choices=["wordle", "crossword"],
        default="wordle",
        help="Which game to play (default: wordle)"
    )
    parser.add_argument(
        "--store",
        help="Override the progress file location"
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Erase all saved progress and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine activity to stderr"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else PlatformConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    store = JsonFileStore(args.store or config.store_path)
    tracker = ProgressTracker(store)
    sessions = SessionRepository(store)

    if args.reset:
        tracker.reset()
        print("All progress erased.")
        return 0

    print(f"Welcome, {config.player_name}!")
    try:
        if args.game == "wordle":
            return play_wordle(config, tracker, sessions)
        return play_crossword(config, tracker, sessions)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
