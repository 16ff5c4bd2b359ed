"""mathquiz: mental-math strategy and place-value scaling quizzes."""

__version__ = "0.1.0"

__all__ = ["__version__"]
