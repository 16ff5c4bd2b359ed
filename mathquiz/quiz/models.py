from __future__ import annotations

"""Problem/question records shared by the quizzes and front-ends."""

from dataclasses import dataclass
from typing import Literal, Tuple

STRATEGIES: Tuple[str, ...] = (
    "Distributive Property",
    "Compensation",
    "Compatible Numbers",
)

Operation = Literal["multiply", "divide"]

OPERATION_SYMBOLS = {"multiply": "×", "divide": "÷"}


@dataclass(frozen=True)
class Problem:
    """One strategy-quiz problem."""

    question: str
    answer: int
    strategy: str
    hint: str


@dataclass(frozen=True)
class Question:
    """One scaling-quiz multiple-choice question.

    `options` holds the canonical answer strings in display order; it has
    fewer than 4 entries only when `complete` is False.
    """

    number_display: str
    number_value: float
    operation: Operation
    power_display: str
    power_value: float
    correct_answer: str
    options: Tuple[str, ...]
    complete: bool = True

    @property
    def text(self) -> str:
        symbol = OPERATION_SYMBOLS[self.operation]
        return f"{self.number_display} {symbol} {self.power_display}"


@dataclass(frozen=True)
class GradeResult:
    correct: bool
    expected: str
    given: str
    points: int
    message: str


@dataclass(frozen=True)
class QuizSummary:
    score: int
    max_score: int
    percentage: float
    message: str

    def format(self) -> str:
        return "\n".join(
            [
                "Game Over!",
                self.message,
                f"Your Final Score: {self.score} out of {self.max_score}",
                f"Percentage: {self.percentage:.0f}%",
            ]
        )


def celebration_message(percentage: float) -> str:
    """Pick the end-of-game message for a final percentage.

    Bands include their lower bound: 100, [80, 100), [50, 80), below 50.
    """
    if percentage >= 100:
        return "PERFECT SCORE! You are a Mental Math Master!"
    if percentage >= 80:
        return "Fantastic effort! Great work applying those strategies!"
    if percentage >= 50:
        return "Keep practicing! You've successfully used the properties!"
    return "Good start! Review how to break numbers apart to make multiplication easier."


def build_summary(score: int, max_score: int) -> QuizSummary:
    percentage = (score / max_score) * 100 if max_score > 0 else 0.0
    return QuizSummary(
        score=score,
        max_score=max_score,
        percentage=percentage,
        message=celebration_message(percentage),
    )
