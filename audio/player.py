# audio/player.py
import logging
import threading
from typing import Dict, Iterable, Optional

import pygame

from config import AudioConfig
from notes.model import ScheduledTone
from timeline.scheduler import Timeline

log = logging.getLogger(__name__)


class MelodyPlayer:
    """Sounds a computed schedule against a real-time clock.

    The schedule is data; this is the only place that waits. stop() cancels
    a running playback and silences whatever is still sounding.
    """
    def __init__(self, synth, cfg: AudioConfig, clock=None):
        self.synth = synth
        self.cfg = cfg
        # created on the caller's thread, only the timer is needed
        self._clock = clock if clock is not None else pygame.time.Clock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def play(self, tones: Iterable[ScheduledTone], origin: float = 0.0):
        """Blocking playback; returns when the last tone has stopped or stop() is called."""
        self._stop.clear()
        self._run(list(tones), origin)

    def start(self, tones: Iterable[ScheduledTone], origin: float = 0.0):
        self.stop()
        self.wait()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, args=(list(tones), origin),
                                        name="melody-player", daemon=True)
        self._thread.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        t = self._thread
        if t is None:
            return True
        t.join(timeout)
        return not t.is_alive()

    def stop(self):
        self._stop.set()
        self.synth.all_off()

    @property
    def is_playing(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self, tones, origin: float):
        timeline = Timeline(tones, start=origin)
        clock = self._clock
        sounding: Dict[ScheduledTone, Optional[int]] = {}
        log.debug("Playing %d tones from t=%.3f", len(timeline.tones), origin)

        clock.tick()
        try:
            while not self._stop.is_set() and not timeline.finished:
                timeline.step(clock.tick(self.cfg.fps) / 1000.0)

                for tone in timeline.ending_tones():
                    self.synth.tone_off(sounding.pop(tone, None))

                for tone in timeline.starting_tones():
                    for done in timeline.ending_tones(until=tone.start):
                        self.synth.tone_off(sounding.pop(done, None))
                    # silent slots keep their place on the timeline, no oscillator
                    sounding[tone] = self.synth.tone_on(tone.frequency) if tone.audible else None
        finally:
            for token in sounding.values():
                self.synth.tone_off(token)
