from __future__ import annotations

"""Place-value scaling quiz.

A number (decimal, whole number or benchmark fraction) is multiplied or
divided by a power of ten. The player picks the result among four options:
the correct answer plus distractors built from typical scaling mistakes
(using the inverse operation, or being off by one or two decades).

All answers are compared as canonical strings, see `format_answer`.
"""

import random
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from .base_quiz import BaseQuiz, EventSink
from .models import GradeResult, Operation, Question, QuizSummary, build_summary

QUESTIONS = 10
DISTRACTOR_COUNT = 3
MAX_DISTRACTOR_ATTEMPTS = 20
ADVANCE_DELAY_MS = 1500

IDLE = "idle"
IN_PROGRESS = "in_progress"
GRADED = "graded"
FINISHED = "finished"

# label shown to the player, decimal value used for the arithmetic
BENCHMARK_FRACTIONS: Tuple[Tuple[str, float], ...] = (
    ("½", 1 / 2),
    ("¼", 1 / 4),
    ("¾", 3 / 4),
    ("⅓", 1 / 3),
    ("⅔", 2 / 3),
    ("⅕", 1 / 5),
)

POWERS: Tuple[Tuple[str, float], ...] = (
    ("10", 10.0),
    ("100", 100.0),
    ("1000", 1000.0),
    ("0.1", 0.1),
    ("0.01", 0.01),
)

POWER_CHOICES: Tuple[Tuple[str, float, Operation], ...] = tuple(
    (display, value, op) for display, value in POWERS for op in ("multiply", "divide")
)

DECADE_FACTORS = (10, 100)

Scheduler = Callable[[int, Callable[[], None]], Any]


def format_answer(value: float) -> str:
    """Render a numeric answer canonically so equal values compare equal.

    Very large (>= 1e6) and very small (< 1e-4, non-zero) magnitudes use
    exponential notation with 4 fractional digits. Everything else is rounded
    to 6 decimals with trailing zeros and a trailing point removed.
    """
    magnitude = abs(value)
    if magnitude >= 1e6 or (magnitude != 0 and magnitude < 1e-4):
        return f"{value:.4e}"
    text = f"{round(value, 6):.6f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def apply_operation(value: float, operation: Operation, power: float) -> float:
    if operation == "multiply":
        return value * power
    return value / power


def sample_operand(rng: random.Random) -> Tuple[str, float]:
    """Return (display, value) for the number being scaled."""
    roll = rng.random()
    if roll < 0.4:
        # keep the value below 200 after rounding
        value = min(round(rng.random() * 200, 3), 199.999)
        return format_answer(value), value
    if roll < 0.8:
        whole = rng.randint(1, 500)
        return str(whole), float(whole)
    return rng.choice(BENCHMARK_FRACTIONS)


def sample_power(rng: random.Random) -> Tuple[str, float, Operation]:
    return rng.choice(POWER_CHOICES)


class Distractors(NamedTuple):
    options: List[str]
    complete: bool


def generate_distractors(
    value: float,
    operation: Operation,
    power: float,
    correct: str,
    rng: random.Random,
    max_attempts: int = MAX_DISTRACTOR_ATTEMPTS,
) -> Distractors:
    """Collect up to three distinct wrong answers.

    Each attempt proposes the inverse-operation result and the results of
    using a power one or two decades too large or too small. Candidates that
    render like the correct answer are skipped. The attempt cap bounds the
    loop when the mistakes collapse onto few distinct strings; `complete` is
    False in that case.
    """
    inverse: Operation = "divide" if operation == "multiply" else "multiply"
    found: Dict[str, None] = {}
    attempts = 0
    while len(found) < DISTRACTOR_COUNT and attempts < max_attempts:
        attempts += 1
        factor = rng.choice(DECADE_FACTORS)
        candidates = (
            apply_operation(value, inverse, power),
            apply_operation(value, operation, power * factor),
            apply_operation(value, operation, power / factor),
        )
        for candidate in candidates:
            text = format_answer(candidate)
            if text == correct or text in found:
                continue
            found[text] = None
            if len(found) == DISTRACTOR_COUNT:
                break
    options = list(found)
    return Distractors(options=options, complete=len(options) == DISTRACTOR_COUNT)


def generate_question(rng: random.Random, max_attempts: int = MAX_DISTRACTOR_ATTEMPTS) -> Question:
    number_display, number_value = sample_operand(rng)
    power_display, power_value, operation = sample_power(rng)
    correct = format_answer(apply_operation(number_value, operation, power_value))
    distractors = generate_distractors(number_value, operation, power_value, correct, rng, max_attempts)
    options = [correct, *distractors.options]
    rng.shuffle(options)
    return Question(
        number_display=number_display,
        number_value=number_value,
        operation=operation,
        power_display=power_display,
        power_value=power_value,
        correct_answer=correct,
        options=tuple(options),
        complete=distractors.complete,
    )


def generate_batch(
    n: int = QUESTIONS, rng: Optional[random.Random] = None, max_attempts: int = MAX_DISTRACTOR_ATTEMPTS
) -> List[Question]:
    rng = rng or random.Random()
    return [generate_question(rng, max_attempts) for _ in range(n)]


class ScalingQuiz(BaseQuiz):
    """Controller walking through a pre-generated batch of questions.

    States: idle -> in_progress -> graded -> in_progress ... -> finished.
    After each answer the move to the next question is handed to `scheduler`
    as `scheduler(delay_ms, callback)`; without a scheduler the caller invokes
    `advance()` itself.
    """

    quiz_id = "scaling"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        events: Optional[EventSink] = None,
        questions: int = QUESTIONS,
        points_per_question: int = 1,
        advance_delay_ms: int = ADVANCE_DELAY_MS,
        scheduler: Optional[Scheduler] = None,
        max_attempts: int = MAX_DISTRACTOR_ATTEMPTS,
    ) -> None:
        super().__init__(rng, events, points_per_question)
        if questions < 1:
            raise ValueError("questions must be >= 1")
        self.advance_delay_ms = int(advance_delay_ms)
        self.scheduler = scheduler
        self.max_attempts = int(max_attempts)
        self.questions: List[Question] = generate_batch(int(questions), self.rng, self.max_attempts)
        self.index = 0
        self.last_result: Optional[GradeResult] = None
        self._round = 0
        self.state = IDLE

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def max_score(self) -> int:
        return self.total * self.points_per_question

    @property
    def current(self) -> Optional[Question]:
        if self.state in (IN_PROGRESS, GRADED):
            return self.questions[self.index]
        return None

    def progress_text(self) -> str:
        return f"Question {self.index + 1} of {self.total}"

    def score_text(self) -> str:
        return f"Score: {self.score}"

    def start(self) -> Question:
        self._require("start", IDLE)
        self.score = 0
        self.index = 0
        self.state = IN_PROGRESS
        self._announce()
        return self.questions[0]

    def _announce(self) -> None:
        q = self.questions[self.index]
        self._emit("question_ready", {"index": self.index + 1, "question": q.text, "options": list(q.options)})

    def select(self, answer: str) -> Optional[GradeResult]:
        """Grade a chosen option; repeated picks on a graded question are ignored."""
        if self.state == GRADED:
            return None
        self._require("select", IN_PROGRESS)
        q = self.questions[self.index]
        correct = answer == q.correct_answer
        points = self._award(correct)
        message = "Correct!" if correct else f"Incorrect. The correct answer is {q.correct_answer}."
        result = GradeResult(correct=correct, expected=q.correct_answer, given=answer, points=points, message=message)
        self.last_result = result
        self.state = GRADED
        self._emit(
            "answer_graded",
            {
                "index": self.index + 1,
                "category": q.operation,
                "prompt": q.text,
                "given": answer,
                "expected": q.correct_answer,
                "correct": correct,
                "points": points,
            },
        )
        if self.scheduler is not None:
            round_, index = self._round, self.index
            self.scheduler(self.advance_delay_ms, lambda: self._on_timer(round_, index))
        return result

    def _on_timer(self, round_: int, index: int) -> None:
        # timers from an earlier question or round are stale
        if self.state == GRADED and self._round == round_ and self.index == index:
            self.advance()

    def advance(self) -> Optional[Question]:
        self._require("advance", GRADED)
        self.index += 1
        self.last_result = None
        if self.index >= self.total:
            self.state = FINISHED
            self._emit("quiz_ended", {"score": self.score, "max_score": self.max_score})
            return None
        self.state = IN_PROGRESS
        self._announce()
        return self.questions[self.index]

    def finish(self) -> QuizSummary:
        self._require("finish", FINISHED)
        return build_summary(self.score, self.max_score)

    def restart(self, regenerate: bool = False) -> None:
        """Return to idle with score and position reset.

        The batch is reused unless `regenerate` is set.
        """
        self._round += 1
        self.score = 0
        self.index = 0
        self.last_result = None
        if regenerate:
            self.questions = generate_batch(self.total, self.rng, self.max_attempts)
        self.state = IDLE
