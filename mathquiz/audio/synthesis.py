from __future__ import annotations

"""Abstract-ish audio synthesis interface.

Concrete implementations provide the chord playback the feedback
cues need.
"""

import time
from typing import List


class Synth:
    """Abstract-like synth interface for playback engines."""

    def __init__(self, sample_rate: int, gain: float) -> None:
        self.sample_rate = sample_rate
        self.gain = gain

    def play_chord(self, midis: List[int], velocity: int = 90, dur_ms: int = 800) -> None:
        """Play a chord (simultaneous notes)."""
        raise NotImplementedError

    def sleep_ms(self, ms: int) -> None:
        time.sleep(ms / 1000.0)

    def close(self) -> None:
        """Release resources."""
        pass
