from __future__ import annotations

"""Pydantic model for one graded answer."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator

COLUMNS = ["session_id", "quiz", "index", "category", "prompt", "given", "expected", "correct", "points", "answered_at"]


class AnswerRow(BaseModel):
    session_id: str
    quiz: Literal["strategy", "scaling"]
    index: int = Field(ge=1)
    category: str = Field(min_length=1)
    prompt: str
    given: str
    expected: str
    correct: bool
    points: int = Field(default=0, ge=0)
    answered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("points")
    @classmethod
    def _no_points_when_wrong(cls, v: int, info):
        if not info.data.get("correct", False) and v != 0:
            raise ValueError("points must be 0 for an incorrect answer")
        return v

    @field_validator("answered_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
