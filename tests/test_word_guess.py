"""
Test suite for the word-guessing engine.

Covers:
- Guess evaluation, including repeated letters
- Keyboard aggregation
- Input buffering and guess rejection
- The staggered reveal and the input it blocks
- Win/loss transitions and guess counting
- Snapshots
"""

from collections import Counter

import pytest

from puzzlequest.engine import (
    LetterState,
    WordGuessEngine,
    WordGuessSnapshot,
    WordGuessStatus,
    IncompleteGuess,
    UnknownWord,
    GuessRejected,
    ManualClock,
    evaluate_guess,
    merge_keyboard,
)

from conftest import ACCEPTED, type_word, play_guess

C, P, A = LetterState.CORRECT, LetterState.PRESENT, LetterState.ABSENT


class TestEvaluateGuess:
    """Test cases for the two-pass evaluation."""

    def test_exact_match_all_correct(self):
        """Guessing the target marks every tile correct."""
        assert evaluate_guess("CRANE", "CRANE") == [C] * 5

    def test_no_shared_letters(self):
        assert evaluate_guess("BUMPY", "CRANE") == [A] * 5

    def test_repeated_guess_letter_counts_target_occurrences(self):
        """SPEED against ERASE: both E's match the two E's in ERASE, S is present."""
        assert evaluate_guess("SPEED", "ERASE") == [P, A, P, P, A]

    def test_extra_repeat_is_absent(self):
        """Only one E in the target, so the second E is absent."""
        assert evaluate_guess("EERIE", "CRANE") == [A, A, P, A, C]

    def test_correct_position_consumed_before_present(self):
        """Exact matches are claimed before any present marks are handed out."""
        assert evaluate_guess("LLAMA", "HELLO") == [P, P, A, A, A]
        assert evaluate_guess("ALLOY", "HELLO") == [A, P, C, P, A]

    def test_case_insensitive(self):
        assert evaluate_guess("crane", "CRANE") == [C] * 5

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            evaluate_guess("CRAN", "CRANE")

    @pytest.mark.parametrize("guess,target", [
        ("SPEED", "ERASE"),
        ("EERIE", "CRANE"),
        ("LLAMA", "HELLO"),
        ("ALLOY", "HELLO"),
        ("EEEEE", "ERASE"),
        ("SASSY", "ASSET"),
    ])
    def test_never_overcounts_a_letter(self, guess, target):
        """Marked tiles for a letter never exceed its count in the target."""
        result = evaluate_guess(guess, target)
        marked = Counter(g for g, state in zip(guess, result) if state is not A)
        target_counts = Counter(target)
        for letter, count in marked.items():
            assert count <= target_counts[letter]


class TestKeyboard:
    """Test cases for the per-letter best state."""

    def test_merge_takes_best_state(self):
        keyboard = merge_keyboard({}, "CRATE", [C, C, C, A, C])
        keyboard = merge_keyboard(keyboard, "TRACE", [A, C, C, P, C])
        assert keyboard["C"] is C
        assert keyboard["T"] is A

    def test_never_downgrades(self):
        keyboard = merge_keyboard({}, "CRANE", [P, A, A, A, A])
        keyboard = merge_keyboard(keyboard, "CRANE", [A, A, A, A, A])
        assert keyboard["C"] is P

    def test_repeated_letter_in_one_guess_keeps_best(self):
        keyboard = merge_keyboard({}, "EERIE", [A, A, P, A, C])
        assert keyboard["E"] is C

    def test_engine_keyboard_monotonic(self, word_engine):
        """Across rows, no letter's priority ever decreases."""
        previous = {}
        for guess in ("SLATE", "TRACE", "CRATE", "CRANE"):
            play_guess(word_engine, guess)
            current = word_engine.keyboard
            for letter, state in previous.items():
                assert current[letter].priority >= state.priority
            previous = current
        assert word_engine.keyboard["C"] is C


class TestInput:
    """Test cases for typing and deleting."""

    def test_add_and_delete(self, word_engine):
        type_word(word_engine, "cra")
        assert word_engine.current_input == "CRA"
        word_engine.delete_letter()
        assert word_engine.current_input == "CR"

    def test_buffer_capped_at_five(self, word_engine):
        type_word(word_engine, "CRANES")
        assert word_engine.current_input == "CRANE"

    def test_only_single_letters_buffered(self, word_engine):
        for text in ("ABC", "ABC", "", "7", "-"):
            word_engine.add_letter(text)
        assert word_engine.current_input == ""
        type_word(word_engine, "CRANE")
        word_engine.add_letter("ST")
        assert word_engine.current_input == "CRANE"

    def test_delete_on_empty_buffer(self, word_engine):
        word_engine.delete_letter()
        assert word_engine.current_input == ""

    def test_display_rows_show_typing(self, word_engine):
        type_word(word_engine, "CR")
        row = word_engine.display_rows()[0]
        assert [t.letter for t in row] == ["C", "R", "", "", ""]
        assert [t.state for t in row] == [LetterState.TBD] * 2 + [LetterState.EMPTY] * 3
        assert word_engine.rows[0][0].letter == ""


class TestRejectedGuesses:
    """Test cases for guesses that are refused."""

    def test_incomplete_guess(self, word_engine):
        type_word(word_engine, "CRAN")
        with pytest.raises(IncompleteGuess) as exc:
            word_engine.submit_guess()
        assert str(exc.value) == "Not enough letters"
        assert word_engine.current_input == "CRAN"
        assert word_engine.current_row == 0
        assert not word_engine.is_revealing

    def test_unknown_word(self, word_engine):
        type_word(word_engine, "ZZZZZ")
        with pytest.raises(UnknownWord) as exc:
            word_engine.submit_guess()
        assert str(exc.value) == "Not in word list"
        assert exc.value.guess == "ZZZZZ"
        assert word_engine.current_input == "ZZZZZ"
        assert word_engine.rows[0][0].letter == ""

    def test_rejections_are_value_errors(self):
        assert issubclass(IncompleteGuess, GuessRejected)
        assert issubclass(UnknownWord, ValueError)

    def test_accepted_words_case_insensitive(self, clock):
        engine = WordGuessEngine(target="crane", accepted_words={"slate", "crane"}, clock=clock)
        assert engine.target == "CRANE"
        type_word(engine, "slate")
        assert engine.submit_guess() is not None


class TestReveal:
    """Test cases for the staggered reveal."""

    def test_tiles_start_tbd(self, word_engine):
        type_word(word_engine, "SLATE")
        evaluation = word_engine.submit_guess()
        assert evaluation == [A, A, C, A, C]
        assert word_engine.is_revealing
        assert [t.state for t in word_engine.rows[0]] == [LetterState.TBD] * 5
        assert [t.letter for t in word_engine.rows[0]] == list("SLATE")

    def test_schedule_offsets(self, word_engine):
        type_word(word_engine, "SLATE")
        word_engine.submit_guess()
        offsets = [event.offset for event in word_engine.reveal_schedule()]
        assert offsets == pytest.approx([0.5, 0.8, 1.1, 1.4, 1.7])
        assert [event.index for event in word_engine.reveal_schedule()] == [0, 1, 2, 3, 4]

    def test_tiles_reveal_one_at_a_time(self, word_engine, clock):
        type_word(word_engine, "SLATE")
        word_engine.submit_guess()

        clock.advance(0.5)
        events = word_engine.tick()
        assert [e.index for e in events] == [0]
        assert word_engine.rows[0][0].state is A
        assert word_engine.rows[0][1].state is LetterState.TBD

        clock.advance(0.65)
        events = word_engine.tick()
        assert [e.index for e in events] == [1, 2]
        assert word_engine.is_revealing

    def test_input_blocked_while_revealing(self, word_engine, clock):
        type_word(word_engine, "SLATE")
        word_engine.submit_guess()

        word_engine.add_letter("X")
        word_engine.delete_letter()
        assert word_engine.current_input == "SLATE"
        assert word_engine.submit_guess() is None

        clock.advance(2.0)
        word_engine.tick()
        assert not word_engine.is_revealing
        assert word_engine.current_input == ""
        word_engine.add_letter("X")
        assert word_engine.current_input == "X"

    def test_row_settles_after_last_tile(self, word_engine, clock):
        type_word(word_engine, "SLATE")
        word_engine.submit_guess()
        clock.advance(1.6)
        word_engine.tick()
        assert word_engine.current_row == 0
        assert word_engine.keyboard == {}

        clock.advance(0.2)
        word_engine.tick()
        assert word_engine.current_row == 1
        assert word_engine.keyboard["A"] is C
        assert word_engine.reveal_schedule() == []

    def test_win_deferred_until_reveal_completes(self, word_engine, clock):
        type_word(word_engine, "CRANE")
        word_engine.submit_guess()
        assert word_engine.status is WordGuessStatus.PLAYING
        clock.advance(1.0)
        word_engine.tick()
        assert word_engine.status is WordGuessStatus.PLAYING
        clock.advance(1.0)
        word_engine.tick()
        assert word_engine.status is WordGuessStatus.WON

    def test_zero_timing_settles_immediately(self):
        engine = WordGuessEngine(
            target="CRANE",
            accepted_words=ACCEPTED,
            clock=ManualClock(),
            reveal_stagger=0,
            reveal_flip=0,
        )
        type_word(engine, "CRANE")
        engine.submit_guess()
        assert not engine.is_revealing
        assert engine.status is WordGuessStatus.WON

    def test_tick_without_reveal(self, word_engine):
        assert word_engine.tick() == []


class TestOutcome:
    """Test cases for winning, losing and the guess count."""

    def test_win_first_guess(self, word_engine):
        play_guess(word_engine, "CRANE")
        assert word_engine.status is WordGuessStatus.WON
        assert word_engine.is_over
        assert word_engine.guess_count == 1

    def test_win_on_third_guess(self, word_engine):
        for guess in ("SLATE", "TRACE", "CRANE"):
            play_guess(word_engine, guess)
        assert word_engine.status is WordGuessStatus.WON
        assert word_engine.guess_count == 3

    def test_lose_after_six(self, word_engine):
        for guess in ("SLATE", "TRACE", "CRATE", "HOUSE", "ABOUT"):
            play_guess(word_engine, guess)
            assert word_engine.status is WordGuessStatus.PLAYING
        play_guess(word_engine, "OTHER")
        assert word_engine.status is WordGuessStatus.LOST
        assert word_engine.guess_count == 6

    def test_win_on_last_row(self, word_engine):
        for guess in ("SLATE", "TRACE", "CRATE", "HOUSE", "ABOUT", "CRANE"):
            play_guess(word_engine, guess)
        assert word_engine.status is WordGuessStatus.WON
        assert word_engine.guess_count == 6

    def test_no_input_after_game_over(self, word_engine):
        play_guess(word_engine, "CRANE")
        rows = word_engine.rows
        word_engine.add_letter("S")
        word_engine.delete_letter()
        assert word_engine.current_input == ""
        assert word_engine.submit_guess() is None
        assert word_engine.rows == rows
        assert word_engine.status is WordGuessStatus.WON


class TestSnapshot:
    """Test cases for saving and resuming a session."""

    def test_fresh_restore(self, clock):
        engine = WordGuessEngine.restore(None, target="CRANE", accepted_words=ACCEPTED, clock=clock)
        assert engine.current_row == 0
        assert engine.status is WordGuessStatus.PLAYING

    def test_round_trip(self, word_engine, clock):
        play_guess(word_engine, "SLATE")
        play_guess(word_engine, "TRACE")
        snapshot = WordGuessSnapshot.model_validate_json(word_engine.snapshot().model_dump_json())

        resumed = WordGuessEngine.restore(
            snapshot, target="CRANE", accepted_words=ACCEPTED, clock=clock
        )
        assert resumed.current_row == 2
        assert resumed.rows == word_engine.rows
        assert resumed.keyboard == word_engine.keyboard

        play_guess(resumed, "CRANE")
        assert resumed.status is WordGuessStatus.WON
        assert resumed.guess_count == 3

    def test_finished_session_stays_finished(self, word_engine, clock):
        play_guess(word_engine, "CRANE")
        resumed = WordGuessEngine.restore(
            word_engine.snapshot(), target="CRANE", accepted_words=ACCEPTED, clock=clock
        )
        assert resumed.status is WordGuessStatus.WON
        type_word(resumed, "SLATE")
        assert resumed.current_input == ""

    def test_snapshot_leaves_out_revealing_row(self, word_engine):
        play_guess(word_engine, "SLATE")
        type_word(word_engine, "TRACE")
        word_engine.submit_guess()

        snapshot = word_engine.snapshot()
        assert snapshot.current_row == 1
        assert [t.letter for t in snapshot.rows[0]] == list("SLATE")
        assert all(t.letter == "" for t in snapshot.rows[1])

    def test_bad_shape_rejected(self):
        with pytest.raises(ValueError):
            WordGuessSnapshot(rows=[[]])
