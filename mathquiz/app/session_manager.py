from __future__ import annotations

"""Session Manager: runs a quiz against front-end callbacks.

The manager wires a quiz to the event bus, the sound cues and the results
manager, then drives it through three UI callbacks:

- ask(prompt) -> str: read one line from the player
- inform(msg): show a message
- sleep_ms(ms): wait (the scaling quiz's reveal pause)

It is front-end agnostic: the terminal CLI passes input/print, tests pass
scripted callbacks.
"""

import random
import string
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..audio.cues import FeedbackCues
from ..audio.synthesis import Synth
from ..quiz.errors import InvalidInput
from ..quiz.models import QuizSummary
from ..quiz.scaling import FINISHED, GRADED, ScalingQuiz
from ..quiz.strategy import ACTIVE, StrategyQuiz
from ..results.result_manager import ResultManager
from .events import EventBus
from .explain import trace as xtrace
from .quiz_registry import make_quiz, resolve_params

QUIT = "q"
HINT = "h"


class DeferredScheduler:
    """Collects scheduled callbacks so a blocking loop can run them later."""

    def __init__(self) -> None:
        self.pending: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((int(delay_ms), callback))

    def run_pending(self, sleep_ms: Callable[[int], None]) -> None:
        while self.pending:
            delay_ms, callback = self.pending.pop(0)
            sleep_ms(delay_ms)
            callback()


def _default_sleep(ms: int) -> None:
    time.sleep(ms / 1000.0)


class SessionManager:
    def __init__(self, cfg: Dict[str, Any], synth: Optional[Synth] = None, rng: Optional[random.Random] = None) -> None:
        self.cfg = cfg
        self.rng = rng or random.Random()
        self.bus = EventBus()
        self.results = ResultManager()
        self.results.attach(self.bus)
        cue_ms = int(cfg.get("audio", {}).get("cue_duration_ms", 350))
        self.cues = FeedbackCues(synth, dur_ms=cue_ms)
        self.cues.attach(self.bus)
        self.scheduler = DeferredScheduler()
        self.quiz_id: Optional[str] = None
        self.params: Dict[str, Any] = {}
        self.quiz: Any = None

    def start_session(self, quiz_id: str, preset: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> None:
        self.quiz_id = quiz_id
        self.params = resolve_params(quiz_id, preset, self.cfg, overrides)
        self.results.reset()
        self.quiz = make_quiz(
            quiz_id,
            params=self.params,
            rng=self.rng,
            events=self.bus,
            scheduler=self.scheduler,
        )
        xtrace("session_started", {"quiz": quiz_id, "preset": preset, "params": self.params})

    def close(self) -> None:
        """Let sound cues finish; call before closing the synth."""
        self.cues.close()

    def run(self, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        assert self.quiz is not None, "start_session() first"
        if isinstance(self.quiz, StrategyQuiz):
            return self._run_strategy(ui)
        return self._run_scaling(ui)

    def _play_again(self, ask: Callable[[str], str]) -> bool:
        return ask("Play again? (y/n): ").strip().lower() in ("y", "yes")

    def _finish(self, summary: Optional[QuizSummary], inform: Callable[[str], None], aborted: bool = False) -> Dict[str, Any]:
        if summary is not None:
            inform(summary.format())
            inform(self.results.format_summary())
        out: Dict[str, Any] = {
            "quiz": self.quiz_id,
            "score": self.quiz.score,
            "max_score": self.quiz.max_score,
            "aborted": aborted,
            "answers": len(self.results.rows),
        }
        if summary is not None:
            out["percentage"] = summary.percentage
            out["message"] = summary.message
        xtrace("session_ended", out)
        return out

    def _run_strategy(self, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        ask = ui["ask"]
        inform = ui["inform"]
        quiz: StrategyQuiz = self.quiz

        while True:
            while quiz.problem is not None:
                inform(f"{quiz.counter_text()} | {quiz.score_text()}")
                inform(quiz.problem.question)
                while quiz.state == ACTIVE:
                    ans = ask("Your answer ('h' hint, 'q' quit): ")
                    cmd = ans.strip().lower()
                    if cmd == QUIT:
                        return self._finish(None, inform, aborted=True)
                    if cmd == HINT:
                        inform(quiz.hint())
                        continue
                    try:
                        result = quiz.submit(ans)
                    except InvalidInput as e:
                        inform(str(e))
                        continue
                    inform(result.message)
                quiz.advance()

            summary = quiz.summary()
            out = self._finish(summary, inform)
            if not self._play_again(ask):
                return out
            self.results.reset()
            quiz.restart()

    def _run_scaling(self, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        ask = ui["ask"]
        inform = ui["inform"]
        sleep_ms = ui.get("sleep_ms", _default_sleep)
        quiz: ScalingQuiz = self.quiz

        while True:
            quiz.start()
            while quiz.state != FINISHED:
                q = quiz.current
                assert q is not None
                labels = string.ascii_lowercase[: len(q.options)]
                inform(f"{quiz.progress_text()} | {quiz.score_text()}")
                inform(f"What is {q.text}?")
                for label, option in zip(labels, q.options):
                    inform(f"  {label}) {option}")
                ans = ask(f"Choose ({'/'.join(labels)}, 'q' quit): ").strip()
                if ans.lower() == QUIT:
                    return self._finish(None, inform, aborted=True)
                choice = self._pick_option(ans, labels, q.options)
                if choice is None:
                    inform(f"Please choose one of: {', '.join(labels)}")
                    continue
                result = quiz.select(choice)
                if result is not None:
                    inform(result.message)
                self.scheduler.run_pending(sleep_ms)
                if quiz.state == GRADED:
                    # no timer was registered; move on ourselves
                    quiz.advance()

            summary = quiz.finish()
            out = self._finish(summary, inform)
            if not self._play_again(ask):
                return out
            self.results.reset()
            quiz.restart(regenerate=bool(self.params.get("regenerate_on_restart", False)))

    @staticmethod
    def _pick_option(ans: str, labels: str, options: Tuple[str, ...]) -> Optional[str]:
        key = ans.lower()
        if len(key) == 1 and key in labels:
            return options[labels.index(key)]
        if ans in options:
            return ans
        return None
