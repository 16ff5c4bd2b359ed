import random


class ScriptedRandom(random.Random):
    """random.Random that returns queued values before falling back to its seed."""

    def __init__(self, choices=(), ints=(), floats=(), seed=0):
        super().__init__(seed)
        self._choices = list(choices)
        self._ints = list(ints)
        self._floats = list(floats)

    def choice(self, seq):
        if self._choices:
            value = self._choices.pop(0)
            assert value in seq, f"{value!r} not in {seq!r}"
            return value
        return super().choice(seq)

    def randint(self, a, b):
        if self._ints:
            value = self._ints.pop(0)
            assert a <= value <= b, f"{value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)

    def random(self):
        if self._floats:
            return self._floats.pop(0)
        return super().random()


class ManualScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))

    def fire_next(self):
        _delay, callback = self.calls.pop(0)
        callback()


class RecordingBus:
    def __init__(self):
        self.events = []

    def emit(self, event, payload):
        self.events.append((event, payload))

    def names(self):
        return [e for e, _ in self.events]
