import unittest

from mathquiz.app.events import EventBus
from mathquiz.audio.cues import CORRECT_CHORD, INCORRECT_CHORD, FeedbackCues
from mathquiz.audio.playback import make_synth_from_config
from mathquiz.audio.synthesis import Synth


class RecordingSynth(Synth):
    def __init__(self):
        super().__init__(sample_rate=44100, gain=0.5)
        self.chords = []

    def play_chord(self, midis, velocity=90, dur_ms=800):
        self.chords.append(list(midis))


class BrokenSynth(Synth):
    def __init__(self):
        super().__init__(sample_rate=44100, gain=0.5)

    def play_chord(self, midis, velocity=90, dur_ms=800):
        raise RuntimeError("audio device gone")


class SlowSynth(Synth):
    def __init__(self):
        super().__init__(sample_rate=44100, gain=0.5)
        self.log = []
        self.closed = False

    def play_chord(self, midis, velocity=90, dur_ms=800):
        self.log.append("note_on")
        self.sleep_ms(dur_ms)
        self.log.append("note_off_after_close" if self.closed else "note_off")

    def close(self):
        self.closed = True


class EventBusTests(unittest.TestCase):
    def test_delivers_to_subscribers_in_order(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("answer_graded", lambda p: seen.append(("a", p)))
        bus.subscribe("answer_graded", lambda p: seen.append(("b", p)))
        bus.emit("answer_graded", 1)
        bus.emit("other", 2)
        self.assertEqual(seen, [("a", 1), ("b", 1)])

    def test_failing_handler_is_logged_not_raised(self) -> None:
        bus = EventBus()
        seen = []

        def boom(_payload):
            raise ValueError("nope")

        bus.subscribe("answer_graded", boom)
        bus.subscribe("answer_graded", seen.append)
        with self.assertLogs("mathquiz.app.events", level="ERROR"):
            bus.emit("answer_graded", {"correct": True})
        self.assertEqual(seen, [{"correct": True}])


class FeedbackCueTests(unittest.TestCase):
    def test_plays_chord_per_correctness(self) -> None:
        synth = RecordingSynth()
        bus = EventBus()
        FeedbackCues(synth, threaded=False).attach(bus)
        bus.emit("answer_graded", {"correct": True})
        bus.emit("answer_graded", {"correct": False})
        self.assertEqual(synth.chords, [CORRECT_CHORD, INCORRECT_CHORD])

    def test_playback_failure_is_swallowed(self) -> None:
        cues = FeedbackCues(BrokenSynth(), threaded=False)
        with self.assertLogs("mathquiz.audio.cues", level="WARNING"):
            cues.play_correct()

    def test_no_synth_is_silent(self) -> None:
        FeedbackCues(None).play_incorrect()

    def test_close_waits_for_playing_cue(self) -> None:
        synth = SlowSynth()
        cues = FeedbackCues(synth, dur_ms=200)
        cues.on_graded({"correct": True})
        cues.close()
        synth.close()
        self.assertEqual(synth.log, ["note_on", "note_off"])

    def test_no_cues_after_close(self) -> None:
        synth = RecordingSynth()
        cues = FeedbackCues(synth, threaded=False)
        cues.close()
        cues.play_correct()
        self.assertEqual(synth.chords, [])


class SynthFactoryTests(unittest.TestCase):
    def test_disabled_audio_builds_nothing(self) -> None:
        self.assertIsNone(make_synth_from_config({"audio": {"backend": "none"}}))
        self.assertIsNone(make_synth_from_config({"audio": {"enabled": False}}))

    def test_missing_soundfont_disables_audio(self) -> None:
        cfg = {"audio": {"backend": "fluidsynth", "soundfont_path": "/nonexistent/piano.sf2"}}
        with self.assertLogs("mathquiz.audio.playback", level="WARNING"):
            self.assertIsNone(make_synth_from_config(cfg))

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            make_synth_from_config({"audio": {"backend": "midi-cable"}})


if __name__ == "__main__":
    unittest.main()
