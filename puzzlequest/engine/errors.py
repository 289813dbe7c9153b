"""Rejections raised when a submitted guess cannot be evaluated."""


class GuessRejected(ValueError):
    """A guess was refused; the session is unchanged and the player may retry."""

    message = "Guess rejected"

    def __init__(self, guess: str = ""):
        self.guess = guess
        super().__init__(self.message)


class IncompleteGuess(GuessRejected):
    message = "Not enough letters"


class UnknownWord(GuessRejected):
    message = "Not in word list"
