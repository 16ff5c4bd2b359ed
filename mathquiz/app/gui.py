from __future__ import annotations

"""Very simple Tkinter GUI for both quizzes.

Pick a quiz, press Start, and play: the strategy quiz takes typed answers
with Check/Hint/Next, the scaling quiz shows four option buttons and moves on
by itself after a short pause.
"""

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Callable, Dict, List, Optional

from ..audio.cues import FeedbackCues
from ..audio.playback import make_synth_from_config
from ..config.config import ConfigError, load_config, validate_config
from ..quiz.errors import InvalidInput
from ..quiz.scaling import FINISHED, ScalingQuiz
from ..quiz.strategy import ACTIVE, ENDED, GRADED, StrategyQuiz
from ..results.result_manager import ResultManager
from ..util.randomness import make_rng
from .events import EventBus
from .quiz_registry import make_quiz, resolve_params

logger = logging.getLogger(__name__)

QUIZZES = ["strategy", "scaling"]
CORRECT_FG = "#1b7f3b"
INCORRECT_FG = "#b3261e"


class App(tk.Tk):
    def __init__(self, cfg: Dict[str, Any]) -> None:
        super().__init__()
        self.title("Math Quiz")
        self.geometry("560x420")

        self.cfg = cfg
        self.rng = make_rng()
        self.synth = make_synth_from_config(cfg)
        self.bus = EventBus()
        self.results = ResultManager()
        self.results.attach(self.bus)
        self.cues = FeedbackCues(self.synth, dur_ms=int(cfg["audio"]["cue_duration_ms"]))
        self.cues.attach(self.bus)

        self.quiz_var = tk.StringVar(value=cfg["ui"]["default_quiz"])
        self.score_var = tk.StringVar(value="")
        self.counter_var = tk.StringVar(value="")
        self.problem_var = tk.StringVar(value="Pick a quiz and press Start.")
        self.feedback_var = tk.StringVar(value="")
        self.hint_var = tk.StringVar(value="")

        self.quiz: Any = None
        self._params: Dict[str, Any] = {}
        self._option_buttons: List[ttk.Button] = []

        self._build_controls()
        self._build_board()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_controls(self) -> None:
        bar = ttk.Frame(self)
        bar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=10)
        ttk.Label(bar, text="Quiz:").pack(side=tk.LEFT)
        ttk.OptionMenu(bar, self.quiz_var, self.quiz_var.get(), *QUIZZES).pack(side=tk.LEFT, padx=6)
        ttk.Button(bar, text="Start", command=self.start_session).pack(side=tk.LEFT, padx=6)
        ttk.Label(bar, textvariable=self.score_var).pack(side=tk.RIGHT)

    def _build_board(self) -> None:
        board = ttk.Frame(self)
        board.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10)

        ttk.Label(board, textvariable=self.counter_var).pack(side=tk.TOP, anchor=tk.W)
        ttk.Label(board, textvariable=self.problem_var, font=("TkDefaultFont", 22)).pack(side=tk.TOP, pady=12)

        # typed answers (strategy quiz)
        self.answer_row = ttk.Frame(board)
        self.entry = ttk.Entry(self.answer_row, width=12)
        self.entry.pack(side=tk.LEFT, padx=4)
        self.entry.bind("<Return>", lambda _e: self._on_enter())
        self.check_btn = ttk.Button(self.answer_row, text="Check", command=self._on_check)
        self.check_btn.pack(side=tk.LEFT, padx=4)
        self.hint_btn = ttk.Button(self.answer_row, text="Strategy Hint", command=self._on_hint)
        self.hint_btn.pack(side=tk.LEFT, padx=4)
        self.next_btn = ttk.Button(self.answer_row, text="Next", command=self._on_next)
        self.next_btn.pack(side=tk.LEFT, padx=4)

        # multiple choice (scaling quiz)
        self.options_row = ttk.Frame(board)
        for i in range(4):
            btn = ttk.Button(self.options_row, text="", width=12)
            btn.grid(row=i // 2, column=i % 2, padx=6, pady=6)
            self._option_buttons.append(btn)

        self.hint_label = ttk.Label(board, textvariable=self.hint_var, wraplength=520, justify=tk.LEFT)
        self.hint_label.pack(side=tk.TOP, fill=tk.X, pady=(8, 0))
        self.feedback_label = tk.Label(board, textvariable=self.feedback_var, wraplength=520, justify=tk.LEFT)
        self.feedback_label.pack(side=tk.TOP, fill=tk.X, pady=8)

        self.again_btn = ttk.Button(board, text="Play Again!", command=self._on_play_again)

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        def fire() -> None:
            callback()
            self._render()

        self.after(delay_ms, fire)

    def start_session(self) -> None:
        quiz_id = self.quiz_var.get()
        try:
            params = resolve_params(quiz_id, None, self.cfg)
            self.quiz = make_quiz(quiz_id, params=params, rng=self.rng, events=self.bus, scheduler=self._schedule)
        except (KeyError, ValueError) as e:
            messagebox.showerror("Cannot start", str(e))
            return
        self._params = params
        self.results.reset()
        if isinstance(self.quiz, ScalingQuiz):
            self.quiz.start()
        self.feedback_var.set("")
        self.hint_var.set("")
        self._render()

    # --- rendering -------------------------------------------------------

    def _render(self) -> None:
        self.again_btn.pack_forget()
        if isinstance(self.quiz, StrategyQuiz):
            self.options_row.pack_forget()
            self._render_strategy(self.quiz)
        elif isinstance(self.quiz, ScalingQuiz):
            self.answer_row.pack_forget()
            self._render_scaling(self.quiz)

    def _render_strategy(self, quiz: StrategyQuiz) -> None:
        self.score_var.set(quiz.score_text())
        if quiz.state == ENDED:
            self.answer_row.pack_forget()
            self._show_summary(quiz.summary().format())
            return
        self.counter_var.set(quiz.counter_text())
        assert quiz.problem is not None
        self.problem_var.set(quiz.problem.question)
        self.answer_row.pack(side=tk.TOP)
        active = quiz.state == ACTIVE
        self.entry.configure(state=tk.NORMAL if active else tk.DISABLED)
        self.check_btn.configure(state=tk.NORMAL if active else tk.DISABLED)
        self.hint_btn.configure(state=tk.NORMAL if active and not quiz.hint_revealed else tk.DISABLED)
        self.next_btn.configure(state=tk.NORMAL if quiz.state == GRADED else tk.DISABLED)
        if active:
            self.entry.focus_set()

    def _render_scaling(self, quiz: ScalingQuiz) -> None:
        self.score_var.set(quiz.score_text())
        if quiz.state == FINISHED:
            self.options_row.pack_forget()
            self._show_summary(quiz.finish().format())
            return
        q = quiz.current
        if q is None:
            return
        self.counter_var.set(quiz.progress_text())
        self.problem_var.set(f"{q.text} = ?")
        if quiz.last_result is None:
            self.feedback_var.set("")
        self.options_row.pack(side=tk.TOP)
        for i, btn in enumerate(self._option_buttons):
            if i < len(q.options):
                option = q.options[i]
                btn.configure(text=option, state=tk.NORMAL, command=lambda o=option: self._on_option(o))
                btn.grid()
            else:
                btn.grid_remove()

    def _show_summary(self, text: str) -> None:
        self.counter_var.set("")
        self.problem_var.set("")
        self.hint_var.set("")
        self.feedback_label.configure(fg=CORRECT_FG)
        self.feedback_var.set(f"{text}\n\n{self.results.format_summary()}")
        self.again_btn.pack(side=tk.TOP, pady=12)

    def _show_feedback(self, correct: bool, message: str) -> None:
        self.feedback_label.configure(fg=CORRECT_FG if correct else INCORRECT_FG)
        self.feedback_var.set(message)

    # --- actions ---------------------------------------------------------

    def _on_enter(self) -> None:
        if not isinstance(self.quiz, StrategyQuiz):
            return
        if self.quiz.state == ACTIVE:
            self._on_check()
        elif self.quiz.state == GRADED:
            self._on_next()

    def _on_check(self) -> None:
        quiz = self.quiz
        try:
            result = quiz.submit(self.entry.get())
        except InvalidInput as e:
            self._show_feedback(False, str(e))
            return
        self._show_feedback(result.correct, result.message)
        self._render()
        self.next_btn.focus_set()

    def _on_hint(self) -> None:
        self.hint_var.set(self.quiz.hint())
        self._render()

    def _on_next(self) -> None:
        self.quiz.advance()
        self.entry.delete(0, tk.END)
        self.hint_var.set("")
        if self.quiz.state != ENDED:
            self.feedback_var.set("")
        self._render()

    def _on_option(self, option: str) -> None:
        result = self.quiz.select(option)
        if result is None:
            return
        for btn in self._option_buttons:
            btn.configure(state=tk.DISABLED)
        self._show_feedback(result.correct, result.message)
        self.score_var.set(self.quiz.score_text())

    def _on_play_again(self) -> None:
        self.results.reset()
        self.feedback_var.set("")
        if isinstance(self.quiz, StrategyQuiz):
            self.quiz.restart()
        elif isinstance(self.quiz, ScalingQuiz):
            self.quiz.restart(regenerate=bool(self._params.get("regenerate_on_restart", False)))
            self.quiz.start()
        self._render()

    def _on_close(self) -> None:
        self.cues.close()
        if self.synth is not None:
            self.synth.close()
        self.destroy()


def main(config_path: Optional[str] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        cfg = validate_config(load_config(config_path))
    except ConfigError as e:
        logger.error("%s", e)
        return 1
    app = App(cfg)
    app.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
