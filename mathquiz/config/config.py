from __future__ import annotations

"""Configuration loading and validation for mathquiz.

This module loads YAML configuration, applies defaults, and coerces
unsupported values back to sane ones with a warning.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

ALLOWED_BACKENDS = {"fluidsynth", "none"}
ALLOWED_QUIZZES = {"strategy", "scaling"}


class ConfigError(Exception):
    """Configuration file is missing or unreadable."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _positive_int(section: Dict[str, Any], key: str, default: int, minimum: int = 1) -> None:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r, using %s.", key, section.get(key), default)
        value = default
    if value < minimum:
        logger.warning("%s must be >= %s, using %s.", key, minimum, default)
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in ("audio", "strategy", "scaling", "ui"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    audio = cfg["audio"]
    strategy = cfg["strategy"]
    scaling = cfg["scaling"]
    ui = cfg["ui"]

    audio.setdefault("enabled", True)
    audio.setdefault("backend", "fluidsynth")
    audio.setdefault("soundfont_path", "./soundfonts/GrandPiano.sf2")
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("gain", 0.5)
    audio.setdefault("program", 0)
    audio.setdefault("cue_duration_ms", 350)

    strategy.setdefault("questions", 20)
    strategy.setdefault("points_per_question", 5)

    scaling.setdefault("questions", 10)
    scaling.setdefault("points_per_question", 1)
    scaling.setdefault("advance_delay_ms", 1500)
    scaling.setdefault("distractor_attempts", 20)
    scaling.setdefault("regenerate_on_restart", False)

    ui.setdefault("default_quiz", "strategy")
    ui.setdefault("explain", False)

    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        logger.warning("Unsupported audio backend '%s', falling back to 'fluidsynth'.", backend)
        audio["backend"] = "fluidsynth"

    default_quiz = ui.get("default_quiz")
    if default_quiz not in ALLOWED_QUIZZES:
        logger.warning("Unsupported default_quiz '%s', using 'strategy'.", default_quiz)
        ui["default_quiz"] = "strategy"

    _positive_int(strategy, "questions", 20)
    _positive_int(strategy, "points_per_question", 5)
    _positive_int(scaling, "questions", 10)
    _positive_int(scaling, "points_per_question", 1)
    _positive_int(scaling, "advance_delay_ms", 1500, minimum=0)
    _positive_int(scaling, "distractor_attempts", 20)
    _positive_int(audio, "cue_duration_ms", 350)

    audio["enabled"] = bool(audio["enabled"])
    scaling["regenerate_on_restart"] = bool(scaling["regenerate_on_restart"])
    ui["explain"] = bool(ui["explain"])
    return cfg
