"""PuzzleQuest: word-guess and mini-crossword session engines."""
