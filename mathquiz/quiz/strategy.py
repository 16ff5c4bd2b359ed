from __future__ import annotations

"""Mental-math strategy quiz.

Each problem is built for one of three strategies and carries a hint that
explains the strategy with the problem's own numbers:

- Distributive Property: 8 × 16 = 8 × (10 + 6)
- Compensation: 9 × 49 = 9 × 50 - 9
- Compatible Numbers: 4 × 7 × 25 = (4 × 25) × 7
"""

import random
import re
from typing import Optional

from .base_quiz import BaseQuiz, EventSink
from .errors import InvalidInput
from .models import STRATEGIES, GradeResult, Problem, QuizSummary, build_summary

MAX_PROBLEMS = 20
POINTS_PER_QUESTION = 5

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

ACTIVE = "active"
GRADED = "graded"
ENDED = "ended"

_TIMES = "×"

COMPATIBLE_PAIRS = ((4, 25), (2, 50))


def _distributive(rng: random.Random) -> Problem:
    factor1 = rng.randint(3, 10)
    factor2 = rng.randint(0, 4) * 5 + 11  # 11, 16, 21, 26, 31
    tens, ones = factor2 // 10 * 10, factor2 % 10
    hint = (
        f"Break the number {factor2} into tens and ones ({factor2} = {tens} + {ones}) "
        f"and multiply both parts by {factor1}."
    )
    return Problem(
        question=f"{factor1} {_TIMES} {factor2}",
        answer=factor1 * factor2,
        strategy="Distributive Property",
        hint=hint,
    )


def _compensation(rng: random.Random) -> Problem:
    factor = rng.randint(2, 9)
    anchor = 99 if rng.random() < 0.5 else 49
    nearest = "hundred" if anchor > 50 else "fifty"
    hint = (
        f"Round {anchor} to the nearest {nearest} ({anchor + 1}), multiply by {factor}, "
        f"and then subtract the extra amount you added ({factor} {_TIMES} 1)."
    )
    return Problem(
        question=f"{factor} {_TIMES} {anchor}",
        answer=factor * anchor,
        strategy="Compensation",
        hint=hint,
    )


def _compatible(rng: random.Random) -> Problem:
    pair = COMPATIBLE_PAIRS[0] if rng.random() < 0.5 else COMPATIBLE_PAIRS[1]
    middle = rng.randint(5, 19)
    hint = (
        "Use the Commutative Property to reorder the factors. Multiply the compatible pair "
        f"({pair[0]} {_TIMES} {pair[1]} = {pair[0] * pair[1]}) first!"
    )
    return Problem(
        question=f"{pair[0]} {_TIMES} {middle} {_TIMES} {pair[1]}",
        answer=pair[0] * middle * pair[1],
        strategy="Compatible Numbers",
        hint=hint,
    )


_BUILDERS = {
    "Distributive Property": _distributive,
    "Compensation": _compensation,
    "Compatible Numbers": _compatible,
}


def generate_strategy_problem(rng: random.Random) -> Problem:
    """Generate one problem for a uniformly chosen strategy."""
    strategy = rng.choice(STRATEGIES)
    return _BUILDERS[strategy](rng)


def parse_answer(text: str) -> int:
    """Read a typed whole-number answer, raising InvalidInput otherwise."""
    raw = (text or "").strip()
    # ASCII digits only; int() alone also takes "1_000" and other scripts
    if not _INTEGER.fullmatch(raw):
        raise InvalidInput(raw)
    return int(raw)


class StrategyQuiz(BaseQuiz):
    """Question-by-question controller for the strategy quiz.

    States: active (awaiting an answer) -> graded -> active, or ended once
    `max_problems` problems were graded. `restart()` leaves ended.
    """

    quiz_id = "strategy"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        events: Optional[EventSink] = None,
        max_problems: int = MAX_PROBLEMS,
        points_per_question: int = POINTS_PER_QUESTION,
    ) -> None:
        super().__init__(rng, events, points_per_question)
        if max_problems < 1:
            raise ValueError("max_problems must be >= 1")
        self.max_problems = int(max_problems)
        self.problem_count = 0
        self.problem: Optional[Problem] = None
        self.hint_revealed = False
        self.last_result: Optional[GradeResult] = None
        self._summary: Optional[QuizSummary] = None
        self._next_problem()

    @property
    def max_score(self) -> int:
        return self.max_problems * self.points_per_question

    def _next_problem(self) -> None:
        self.problem = generate_strategy_problem(self.rng)
        self.problem_count += 1
        self.hint_revealed = False
        self.last_result = None
        self.state = ACTIVE
        self._emit(
            "question_ready",
            {"index": self.problem_count, "question": self.problem.question, "strategy": self.problem.strategy},
        )

    def score_text(self) -> str:
        return f"Total Score: {self.score} / {self.max_score}"

    def counter_text(self) -> str:
        return f"Question {self.problem_count} of {self.max_problems}"

    def hint(self) -> str:
        self._require("show hint", ACTIVE)
        assert self.problem is not None
        self.hint_revealed = True
        return f"Strategy: {self.problem.strategy}\n{self.problem.hint}"

    def submit(self, text: str) -> GradeResult:
        self._require("submit", ACTIVE)
        assert self.problem is not None
        value = parse_answer(text)
        correct = value == self.problem.answer
        points = self._award(correct)
        if correct:
            message = (
                f"Correct! You used a great strategy to get {self.problem.answer}! "
                f"(+{points} points)"
            )
        else:
            message = (
                f"Incorrect. The correct answer is {self.problem.answer}. "
                f"Try using the {self.problem.strategy} strategy next time."
            )
        result = GradeResult(
            correct=correct,
            expected=str(self.problem.answer),
            given=str(value),
            points=points,
            message=message,
        )
        self.last_result = result
        self.state = GRADED
        self._emit(
            "answer_graded",
            {
                "index": self.problem_count,
                "category": self.problem.strategy,
                "prompt": self.problem.question,
                "given": result.given,
                "expected": result.expected,
                "correct": correct,
                "points": points,
            },
        )
        return result

    def advance(self) -> Optional[Problem]:
        """Move past a graded problem; returns None once the quiz ended."""
        self._require("advance", GRADED)
        if self.problem_count >= self.max_problems:
            self.state = ENDED
            self.problem = None
            self._summary = build_summary(self.score, self.max_score)
            self._emit("quiz_ended", {"score": self.score, "max_score": self.max_score})
            return None
        self._next_problem()
        return self.problem

    def summary(self) -> QuizSummary:
        self._require("summarize", ENDED)
        assert self._summary is not None
        return self._summary

    def restart(self) -> Problem:
        self._require("restart", ENDED)
        self.score = 0
        self.problem_count = 0
        self._summary = None
        self._next_problem()
        assert self.problem is not None
        return self.problem
