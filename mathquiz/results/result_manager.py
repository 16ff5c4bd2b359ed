from __future__ import annotations

"""Results Manager: in-memory record of graded answers.

Rows arrive through the `answer_graded` event and are summarized per
category (strategy name, or scaling operation) with pandas. Nothing is
written to disk.
"""

from typing import Any, Dict, List, Optional
from uuid import uuid4

import pandas as pd

from .schema import COLUMNS, AnswerRow


class ResultManager:
    def __init__(self, session_id: Optional[str] = None) -> None:
        self.session_id = session_id or str(uuid4())
        self._rows: List[AnswerRow] = []

    def attach(self, bus: Any) -> None:
        bus.subscribe("answer_graded", self.record)

    def record(self, payload: Dict[str, Any]) -> AnswerRow:
        row = AnswerRow.model_validate({"session_id": self.session_id, **payload})
        self._rows.append(row)
        return row

    def reset(self) -> None:
        """Forget recorded rows (used when a quiz restarts)."""
        self._rows = []

    @property
    def rows(self) -> List[AnswerRow]:
        return list(self._rows)

    def to_frame(self) -> pd.DataFrame:
        if not self._rows:
            return pd.DataFrame({c: pd.Series(dtype="object") for c in COLUMNS})
        return pd.DataFrame([r.model_dump() for r in self._rows], columns=COLUMNS)

    def summarize(self) -> pd.DataFrame:
        """Per-category asked/correct/points/accuracy, sorted by category."""
        df = self.to_frame()
        if df.empty:
            return pd.DataFrame(columns=["category", "asked", "correct", "points", "accuracy"])
        out = (
            df.assign(correct=df["correct"].astype(int))
            .groupby("category", sort=True)
            .agg(asked=("index", "size"), correct=("correct", "sum"), points=("points", "sum"))
            .reset_index()
        )
        out["accuracy"] = out["correct"] / out["asked"]
        return out

    def format_summary(self) -> str:
        """Return a human-readable per-category breakdown."""
        summary = self.summarize()
        total = int(summary["asked"].sum()) if not summary.empty else 0
        correct = int(summary["correct"].sum()) if not summary.empty else 0
        lines = [f"Total: {correct}/{total} correct"]
        for rec in summary.itertuples(index=False):
            lines.append(f"{rec.category}: {int(rec.correct)}/{int(rec.asked)} ({rec.accuracy:.0%})")
        return "\n".join(lines)
