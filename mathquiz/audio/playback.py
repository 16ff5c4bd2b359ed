from __future__ import annotations

"""FluidSynth-based audio playback implementation."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .synthesis import Synth

logger = logging.getLogger(__name__)


class FluidSynthSynth(Synth):
    """Concrete Synth using pyfluidsynth."""

    def __init__(self, soundfont_path: str, sample_rate: int = 44100, gain: float = 0.5, program: int = 0) -> None:
        super().__init__(sample_rate=sample_rate, gain=gain)
        try:
            import fluidsynth  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("pyfluidsynth is not installed") from e

        self._fs = fluidsynth.Synth(samplerate=float(sample_rate), gain=gain)
        # Prefer CoreAudio on macOS to avoid SDL warnings
        driver = "coreaudio" if sys.platform == "darwin" else None
        try:
            if driver:
                self._fs.start(driver=driver)
            else:
                self._fs.start()
        except Exception:
            self._fs.start()
        self._sfid = self._fs.sfload(soundfont_path)
        self._fs.program_select(0, self._sfid, 0, int(program))

    def play_chord(self, midis: List[int], velocity: int = 90, dur_ms: int = 800) -> None:
        for m in midis:
            self._fs.noteon(0, m, velocity)
        self.sleep_ms(dur_ms)
        for m in midis:
            self._fs.noteoff(0, m)

    def close(self) -> None:
        try:
            self._fs.delete()
        except Exception:
            logger.debug("FluidSynth cleanup failed", exc_info=True)


def make_synth_from_config(cfg: Dict[str, Any]) -> Optional[Synth]:
    """Build the feedback synth, or None when sound is off or unavailable.

    A missing library or SoundFont only disables the cues; the quiz runs on.
    """
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "fluidsynth")
    if backend == "none" or not audio.get("enabled", True):
        return None
    if backend != "fluidsynth":
        raise ValueError(f"Unsupported backend: {backend}")
    sf_path = Path(str(audio.get("soundfont_path", "")))
    if not sf_path.exists():
        logger.warning("SoundFont not found at '%s'; sound cues disabled.", sf_path)
        return None
    try:
        return FluidSynthSynth(
            soundfont_path=str(sf_path),
            sample_rate=int(audio.get("sample_rate", 44100)),
            gain=float(audio.get("gain", 0.5)),
            program=int(audio.get("program", 0)),
        )
    except Exception as e:
        logger.warning("Audio init failed, sound cues disabled: %s", e)
        return None
