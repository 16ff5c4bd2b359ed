from __future__ import annotations

"""Curated human-friendly parameter presets per quiz.

Presets help users select sensible defaults quickly without many flags.
"""

STRATEGY_PRESETS = {
    "beginner": {
        "questions": 10,
        "points_per_question": 5,
    },
    "default": {
        "questions": 20,
        "points_per_question": 5,
    },
    "advanced": {
        "questions": 30,
        "points_per_question": 5,
    },
}

SCALING_PRESETS = {
    "beginner": {
        "questions": 5,
        "points_per_question": 1,
        "advance_delay_ms": 2500,
    },
    "default": {
        "questions": 10,
        "points_per_question": 1,
        "advance_delay_ms": 1500,
    },
    "advanced": {
        "questions": 20,
        "points_per_question": 1,
        "advance_delay_ms": 800,
    },
}
