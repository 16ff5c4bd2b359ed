from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the --explain CLI flag to print one JSON line per milestone:
question generated, answer graded, quiz ended.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    data = payload or {}
    print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',', ':'), ensure_ascii=False, default=str)}")
