from __future__ import annotations

"""Base quiz abstractions: state bookkeeping, scoring and event emission."""

import random
from typing import Any, Dict, Optional, Protocol

from .errors import InvalidTransition
from ..app.explain import trace as xtrace


class EventSink(Protocol):
    def emit(self, event: str, payload: Any) -> None: ...


class BaseQuiz:
    """Abstract base for quizzes.

    Holds the session state both quizzes share (score, position, state name)
    and forwards lifecycle events to an optional event bus.
    """

    quiz_id = ""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        events: Optional[EventSink] = None,
        points_per_question: int = 1,
    ) -> None:
        self.rng = rng or random.Random()
        self.events = events
        self.points_per_question = int(points_per_question)
        self.score = 0
        self.state = ""

    @property
    def max_score(self) -> int:
        raise NotImplementedError

    def _require(self, action: str, *states: str) -> None:
        if self.state not in states:
            raise InvalidTransition(action, self.state)

    def _award(self, correct: bool) -> int:
        points = self.points_per_question if correct else 0
        self.score += points
        return points

    def _emit(self, event: str, payload: Dict[str, Any]) -> None:
        payload = {"quiz": self.quiz_id, **payload}
        xtrace(event, payload)
        if self.events is not None:
            self.events.emit(event, payload)
