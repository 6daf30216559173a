# notes/model.py
import math
from dataclasses import dataclass
from fractions import Fraction
from numbers import Real
from typing import Iterable, Iterator, Tuple, Union

from notes.errors import InvalidDuration, MalformedEvent
from notes.pitch import Pitch, PitchLike, parse_pitch

Beats = Union[int, float, Fraction]


def check_beats(value, index=None) -> Beats:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidDuration(value, index)
    if not math.isfinite(value) or value <= 0:
        raise InvalidDuration(value, index)
    return value


@dataclass(frozen=True)
class MelodyEvent:
    pitch: Pitch
    beats: Beats    # quarter notes, tempo independent

    def __post_init__(self):
        object.__setattr__(self, "pitch", parse_pitch(self.pitch))
        check_beats(self.beats)


def _coerce_events(items) -> Tuple[MelodyEvent, ...]:
    """
    (pitch, beats) pairs or MelodyEvent items to a tuple of events.
    The whole input is validated before anything is returned.
    """
    try:
        items = list(items)
    except TypeError:
        raise MalformedEvent(items) from None
    events = []
    for i, item in enumerate(items):
        if isinstance(item, MelodyEvent):
            events.append(item)
            continue
        try:
            pitch, beats = item
        except (TypeError, ValueError):
            raise MalformedEvent(item, i) from None
        events.append(MelodyEvent(parse_pitch(pitch), check_beats(beats, i)))
    return tuple(events)


@dataclass(frozen=True)
class Melody:
    """Ordered, immutable sequence of events; playback order is list order."""
    events: Tuple[MelodyEvent, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "events", _coerce_events(self.events))

    @classmethod
    def from_pairs(cls, pairs: Iterable) -> "Melody":
        """Build from (pitch, beats) pairs or MelodyEvent items."""
        return cls(pairs)

    def __iter__(self) -> Iterator[MelodyEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, i) -> MelodyEvent:
        return self.events[i]

    @property
    def total_beats(self) -> Beats:
        return sum((e.beats for e in self.events), 0)


MelodyLike = Union[Melody, Iterable[Union[MelodyEvent, Tuple[PitchLike, Beats]]]]


def as_melody(melody: MelodyLike) -> Melody:
    return melody if isinstance(melody, Melody) else Melody.from_pairs(melody)


@dataclass(frozen=True)
class ScheduledTone:
    frequency: float    # Hz, 0 for silence
    start: float        # seconds
    stop: float         # seconds

    @property
    def dur(self) -> float:
        return self.stop - self.start

    @property
    def audible(self) -> bool:
        return self.frequency > 0


@dataclass(frozen=True)
class WireNote:
    code: int
    duration_ms: float

    def as_pair(self) -> list:
        return [self.code, self.duration_ms]
