from __future__ import annotations

"""CLI for mathquiz using SessionManager and the quiz registry."""

import argparse
import logging
import sys
import time
from typing import Any, Dict

from .. import __version__
from ..audio.playback import make_synth_from_config
from ..config.config import ConfigError, load_config, validate_config
from ..util.randomness import make_rng
from .quiz_registry import get_quiz, list_quizzes
from .session_manager import SessionManager


def _build_ui() -> Dict[str, Any]:
    def ask(prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return "q"

    def inform(msg: str) -> None:
        print(msg)

    def sleep_ms(ms: int) -> None:
        time.sleep(ms / 1000.0)

    return {"ask": ask, "inform": inform, "sleep_ms": sleep_ms}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="mathquiz")
    p.add_argument("--version", action="version", version=f"mathquiz {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-quizzes")

    sp = sub.add_parser("show-params")
    sp.add_argument("--quiz", required=True)

    rp = sub.add_parser("run")
    rp.add_argument("--config", default=None, help="Path to YAML config")
    rp.add_argument("--quiz", default=None, choices=["strategy", "scaling"])
    rp.add_argument("--preset", default=None, help="beginner, default or advanced")
    rp.add_argument("--questions", type=int, default=None)
    rp.add_argument("--seed", type=int, default=None, help="Seed for reproducible questions (or SEED env var)")
    rp.add_argument("--no-sound", dest="sound", action="store_false", help="Disable sound cues")
    rp.add_argument("--explain", action="store_true")

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "list-quizzes":
        for m in list_quizzes():
            print(f"{m.id}: {m.name} - {m.description} | presets: {', '.join(m.presets.keys())}")
        return 0

    if args.cmd == "show-params":
        try:
            m = get_quiz(args.quiz)
        except KeyError as e:
            print(e.args[0], file=sys.stderr)
            return 2
        print(f"Quiz {m.id}: {m.name}")
        print("Presets:")
        for name, params in m.presets.items():
            print(f"  - {name}: {params}")
        return 0

    if args.cmd == "run":
        try:
            cfg = validate_config(load_config(args.config))
        except ConfigError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        if args.explain or cfg["ui"]["explain"]:
            from .explain import enable as explain_enable

            explain_enable(True)
        if not args.sound:
            cfg["audio"]["enabled"] = False

        quiz_id = args.quiz or cfg["ui"]["default_quiz"]
        synth = make_synth_from_config(cfg)
        sm = SessionManager(cfg, synth, rng=make_rng(args.seed))
        try:
            sm.start_session(quiz_id, args.preset, {"questions": args.questions})
        except (KeyError, ValueError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sm.close()
            if synth is not None:
                synth.close()
            return 2

        try:
            sm.run(_build_ui())
        except KeyboardInterrupt:
            print()
        finally:
            sm.close()
            if synth is not None:
                synth.close()
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
