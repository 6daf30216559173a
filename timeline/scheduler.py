# timeline/scheduler.py
"""
Turns a melody into timed tones for the local preview and into wire notes
for the device. Both are derived from the same Melody value; neither one
is computed from the other.
"""
import math
from numbers import Real
from typing import Iterable, List, Optional

from notes.errors import InvalidDuration
from notes.model import MelodyLike, ScheduledTone, WireNote, as_melody
from notes.pitch import frequency_of

TEMPO_BPM = 150
SECONDS_IN_MINUTE = 60
SECONDS_PER_BEAT = SECONDS_IN_MINUTE / TEMPO_BPM  # 0.4

# shared by start and release
TOLERANCE = 0.004


def beats_to_seconds(beats) -> float:
    return float(beats) * SECONDS_PER_BEAT


def schedule_local(melody: MelodyLike, origin: float = 0.0) -> List[ScheduledTone]:
    """
    Back-to-back tones starting at `origin` (seconds on the audio clock).
    Silence still takes its slot, with a 0 Hz tone.
    """
    melody = as_melody(melody)
    tones: List[ScheduledTone] = []
    cursor = float(origin)
    for event in melody:
        play = beats_to_seconds(event.beats)
        tones.append(ScheduledTone(frequency_of(event.pitch), cursor, cursor + play))
        cursor += play
    return tones


def to_wire_encoding(melody: MelodyLike, scale_factor: float = 1.0) -> List[WireNote]:
    """
    (pitch code, duration) pairs for the device:
        duration = beats * SECONDS_PER_BEAT * 1000 * scale_factor
    With the default factor of 1.0 the duration is in milliseconds
    (0.25 beat -> 100). The factor maps milliseconds onto the device's time unit.
    """
    if isinstance(scale_factor, bool) or not isinstance(scale_factor, Real) \
            or not math.isfinite(scale_factor) or scale_factor <= 0:
        raise InvalidDuration(scale_factor)
    melody = as_melody(melody)
    return [WireNote(e.pitch.code, beats_to_seconds(e.beats) * 1000 * scale_factor)
            for e in melody]


def melody_duration(melody: MelodyLike) -> float:
    return sum(beats_to_seconds(e.beats) for e in as_melody(melody))


class Timeline:
    """Advances time and yields tones that start/stop around the current time.
    The audio player steps it with its own clock; the tones are plain data.
    """
    def __init__(self, tones: Iterable[ScheduledTone], start: float = 0.0):
        self.tones = sorted(tones, key=lambda t: t.start)
        self.i = 0
        self.time = float(start)
        self._pending: List[ScheduledTone] = []

    def step(self, dt: float):
        self.time += dt

    def starting_tones(self, tolerance: float = TOLERANCE):
        t = self.time
        while self.i < len(self.tones) and self.tones[self.i].start <= t + tolerance:
            tone = self.tones[self.i]
            self.i += 1
            yield tone
            # pending only once the consumer has started it
            self._pending.append(tone)

    def ending_tones(self, until: Optional[float] = None, tolerance: float = TOLERANCE) -> List[ScheduledTone]:
        """Pending tones whose stop is at or before `until` (default: now)."""
        t = self.time if until is None else until
        done = [n for n in self._pending if n.stop <= t + tolerance]
        self._pending = [n for n in self._pending if n.stop > t + tolerance]
        return done

    @property
    def finished(self) -> bool:
        return self.i >= len(self.tones) and not self._pending
