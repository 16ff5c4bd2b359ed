from __future__ import annotations

"""Correct/incorrect sound cues driven by graded-answer events.

Playback runs on a daemon thread so the quiz never waits for audio.
`close()` waits for cues still playing. Any playback error is logged and
dropped.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .synthesis import Synth

logger = logging.getLogger(__name__)

# C major triad around C5; low minor second
CORRECT_CHORD = [72, 76, 79]
INCORRECT_CHORD = [48, 49]


class FeedbackCues:
    def __init__(self, synth: Optional[Synth], dur_ms: int = 350, threaded: bool = True) -> None:
        self.synth = synth
        self.dur_ms = int(dur_ms)
        self.threaded = threaded
        self._threads: List[threading.Thread] = []
        self._lock = threading.Lock()
        self._closed = False

    def attach(self, bus: Any) -> None:
        bus.subscribe("answer_graded", self.on_graded)

    def on_graded(self, payload: Dict[str, Any]) -> None:
        if bool(payload.get("correct")):
            self.play_correct()
        else:
            self.play_incorrect()

    def play_correct(self) -> None:
        self._fire(lambda s: s.play_chord(CORRECT_CHORD, velocity=90, dur_ms=self.dur_ms))

    def play_incorrect(self) -> None:
        self._fire(lambda s: s.play_chord(INCORRECT_CHORD, velocity=80, dur_ms=self.dur_ms))

    def _fire(self, action: Callable[[Synth], None]) -> None:
        synth = self.synth
        if synth is None or self._closed:
            return

        def run() -> None:
            try:
                action(synth)
            except Exception:
                logger.warning("Sound cue playback failed", exc_info=True)

        if self.threaded:
            with self._lock:
                self._threads = [t for t in self._threads if t.is_alive()]
                t = threading.Thread(target=run, name="feedback-cue", daemon=True)
                self._threads.append(t)
                t.start()
        else:
            run()

    def close(self, timeout_ms: Optional[int] = None) -> None:
        """Stop taking cues and wait for the ones still playing.

        Call before closing the synth; a chord must not outlive it.
        """
        self._closed = True
        wait_s = (self.dur_ms if timeout_ms is None else timeout_ms) / 1000.0 + 0.5
        with self._lock:
            threads, self._threads = self._threads, []
        for t in threads:
            t.join(timeout=wait_s)
            if t.is_alive():
                logger.warning("Sound cue still playing after %.1fs", wait_s)
