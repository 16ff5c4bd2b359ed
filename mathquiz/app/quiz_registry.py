from __future__ import annotations

"""Quiz registry and metadata.

Expose quiz metadata and presets, resolve parameters, and construct quiz
instances via a simple factory.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..quiz.base_quiz import BaseQuiz, EventSink
from ..quiz.scaling import Scheduler, ScalingQuiz
from ..quiz.strategy import StrategyQuiz
from .presets import SCALING_PRESETS, STRATEGY_PRESETS


@dataclass(frozen=True)
class QuizMeta:
    id: str
    name: str
    description: str
    parameters_schema: Dict[str, Any]
    presets: Dict[str, Dict[str, Any]]


def _strategy_meta() -> QuizMeta:
    return QuizMeta(
        id="strategy",
        name="Mental Math Strategies",
        description="Solve products with the distributive property, compensation or compatible numbers.",
        parameters_schema={
            "type": "object",
            "properties": {
                "questions": {"type": "integer", "minimum": 1, "default": 20},
                "points_per_question": {"type": "integer", "minimum": 1, "default": 5},
            },
            "required": ["questions"],
        },
        presets=STRATEGY_PRESETS,
    )


def _scaling_meta() -> QuizMeta:
    return QuizMeta(
        id="scaling",
        name="Powers of Ten",
        description="Multiply and divide by 10, 100, 1000, 0.1 and 0.01 (multiple choice).",
        parameters_schema={
            "type": "object",
            "properties": {
                "questions": {"type": "integer", "minimum": 1, "default": 10},
                "points_per_question": {"type": "integer", "minimum": 1, "default": 1},
                "advance_delay_ms": {"type": "integer", "minimum": 0, "default": 1500},
                "distractor_attempts": {"type": "integer", "minimum": 1, "default": 20},
            },
            "required": ["questions"],
        },
        presets=SCALING_PRESETS,
    )


def list_quizzes() -> List[QuizMeta]:
    return [_strategy_meta(), _scaling_meta()]


def get_quiz(quiz_id: str) -> QuizMeta:
    for m in list_quizzes():
        if m.id == quiz_id:
            return m
    raise KeyError(f"Unknown quiz id: {quiz_id}")


def resolve_params(
    quiz_id: str,
    preset: Optional[str] = None,
    cfg: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge parameters: config section -> preset -> explicit overrides.

    Without a preset the config section (itself defaulted) is used as is.
    """
    meta = get_quiz(quiz_id)
    params = dict((cfg or {}).get(quiz_id, {}))
    if preset:
        if preset not in meta.presets:
            raise KeyError(f"Unknown preset '{preset}' for quiz '{quiz_id}'")
        params.update(meta.presets[preset])
    params.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return params


def make_quiz(
    quiz_id: str,
    *,
    params: Dict[str, Any],
    rng: Optional[random.Random] = None,
    events: Optional[EventSink] = None,
    scheduler: Optional[Scheduler] = None,
) -> BaseQuiz:
    """Factory that builds the concrete quiz from resolved params."""
    if quiz_id == "strategy":
        return StrategyQuiz(
            rng=rng,
            events=events,
            max_problems=int(params.get("questions", 20)),
            points_per_question=int(params.get("points_per_question", 5)),
        )
    if quiz_id == "scaling":
        return ScalingQuiz(
            rng=rng,
            events=events,
            questions=int(params.get("questions", 10)),
            points_per_question=int(params.get("points_per_question", 1)),
            advance_delay_ms=int(params.get("advance_delay_ms", 1500)),
            scheduler=scheduler,
            max_attempts=int(params.get("distractor_attempts", 20)),
        )
    raise KeyError(f"Unsupported quiz for factory: {quiz_id}")
