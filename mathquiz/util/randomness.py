from __future__ import annotations

"""Randomness helpers: seeding and injectable random sources."""

import os
import random
from typing import Optional


def seed_from_env() -> Optional[int]:
    """Return the integer in the SEED env var, if set and valid."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        return int(seed)
    except ValueError:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build a random source, seeded explicitly or from SEED.

    Quizzes take the returned object instead of calling the module-level
    functions so a run can be replayed from its seed.
    """
    if seed is None:
        seed = seed_from_env()
    return random.Random(seed)
