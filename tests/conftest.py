import faulthandler
import sys
import threading

import pytest


class FakeSynth:
    def __init__(self):
        self.events = []
        self._next = 1
        self._freq = {}
        self.all_off_calls = 0
        self.max_sounding = 0

    def tone_on(self, frequency):
        t = self._next; self._next += 1
        self._freq[t] = frequency
        self.max_sounding = max(self.max_sounding, len(self._freq))
        self.events.append(("on", frequency))
        return t

    def tone_off(self, token):
        if token is None:
            return
        self.events.append(("off", self._freq.pop(token)))

    def all_off(self):
        self.all_off_calls += 1

    @property
    def sounding(self):
        return dict(self._freq)


class FakeClock:
    """Every tick advances `step_ms`; `on_tick` lets a test act mid-playback."""
    def __init__(self, step_ms=10, on_tick=None):
        self.step_ms = step_ms
        self.on_tick = on_tick
        self.ticks = 0

    def tick(self, fps=0):
        self.ticks += 1
        if self.on_tick:
            self.on_tick(self.ticks)
        return self.step_ms


@pytest.fixture
def fake_synth():
    return FakeSynth()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def restore_hooks(monkeypatch):
    from utils import crashlog
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    monkeypatch.setattr(crashlog, "_fault_file", None)
    was_enabled = faulthandler.is_enabled()
    yield
    if crashlog._fault_file is not None:
        faulthandler.disable()
        crashlog._fault_file.close()
        if was_enabled and sys.__stderr__ is not None:
            faulthandler.enable(sys.__stderr__)
