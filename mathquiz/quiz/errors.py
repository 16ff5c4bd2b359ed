from __future__ import annotations

"""Exceptions raised by the quiz controllers."""


class QuizError(Exception):
    """Base class for quiz errors."""


class InvalidInput(QuizError, ValueError):
    """Typed answer could not be read as a whole number."""

    def __init__(self, text: str) -> None:
        super().__init__("Please enter a valid number!")
        self.text = text


class InvalidTransition(QuizError):
    """Action is not allowed in the quiz's current state."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"Cannot {action} while quiz is {state}")
        self.action = action
        self.state = state
