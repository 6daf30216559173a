import math

import pytest

from notes.errors import InvalidDuration, MelodyError, UnknownPitch
from notes.model import Melody
from notes.pitch import Pitch
from notes.presets import ALARM, RESET
from timeline.scheduler import (SECONDS_PER_BEAT, Timeline, melody_duration,
                                schedule_local, to_wire_encoding)

SCALE = [(Pitch.A5, 0.25), (Pitch.ASharp5, 0.25), (Pitch.B5, 0.25)]


def test_tempo_is_150_bpm():
    assert SECONDS_PER_BEAT == pytest.approx(0.4)


def test_three_note_scale():
    tones = schedule_local(SCALE, 0)
    got = [(t.frequency, t.start, t.stop) for t in tones]
    expected = [(880.0, 0.0, 0.1), (932.33, 0.1, 0.2), (987.77, 0.2, 0.3)]
    for g, e in zip(got, expected):
        assert g == pytest.approx(e)
    assert len(got) == 3


def test_three_note_scale_wire():
    wire = to_wire_encoding(SCALE, 400)
    assert [n.code for n in wire] == [0xA5, 0xB5, 0xC5]
    assert [n.duration_ms for n in wire] == pytest.approx([40000, 40000, 40000])
    # default: milliseconds, what the device was sent as beats * 400
    assert [n.duration_ms for n in to_wire_encoding(SCALE)] == pytest.approx([100, 100, 100])


@pytest.mark.parametrize("melody", [SCALE, RESET, ALARM])
@pytest.mark.parametrize("origin", [0.0, 12.5])
def test_tones_are_contiguous_from_origin(melody, origin):
    tones = schedule_local(melody, origin)
    assert tones[0].start == origin
    for a, b in zip(tones, tones[1:]):
        assert b.start == a.stop
    total_beats = sum(float(e.beats) for e in Melody.from_pairs(melody))
    assert sum(t.dur for t in tones) == pytest.approx(total_beats * 0.4)
    assert melody_duration(melody) == pytest.approx(total_beats * 0.4)


@pytest.mark.parametrize("scale", [1.0, 0.5, 400])
def test_wire_and_local_durations_agree(scale):
    tones = schedule_local(ALARM, 3.0)
    wire = to_wire_encoding(ALARM, scale)
    assert len(tones) == len(wire)
    for t, w in zip(tones, wire):
        assert w.duration_ms / (1000 * scale) == pytest.approx(t.stop - t.start)


def test_silence_keeps_its_slot():
    tones = schedule_local([("A4", 1), ("Silence", 0.5), ("A4", 1)], 0)
    assert [t.frequency for t in tones] == [440.0, 0.0, 440.0]
    assert not tones[1].audible
    assert tones[2].start == pytest.approx(0.6)
    assert to_wire_encoding([("Silence", 0.5)])[0].code == 0


def test_empty_melody():
    assert schedule_local([], 7.0) == []
    assert schedule_local(Melody(), 0) == []
    assert to_wire_encoding([], 400) == []
    assert melody_duration([]) == 0


@pytest.mark.parametrize("bad", [0, -1])
def test_invalid_duration_fails_whole_melody(bad):
    melody = [(Pitch.A5, 0.25), (Pitch.B5, bad), (Pitch.C6, 0.25)]
    with pytest.raises(InvalidDuration):
        schedule_local(melody, 0)
    with pytest.raises(InvalidDuration):
        to_wire_encoding(melody, 1.0)


def test_unknown_pitch_rejected_at_boundary():
    with pytest.raises(UnknownPitch):
        schedule_local([("A5", 0.25), (0x0F, 0.25)])


@pytest.mark.parametrize("scale", [0, -400, math.nan, math.inf, "400"])
def test_scale_factor_must_be_positive(scale):
    with pytest.raises(InvalidDuration):
        to_wire_encoding(SCALE, scale)


def test_timeline_walks_tones():
    tones = schedule_local(SCALE, 0)
    tl = Timeline(tones)
    assert list(tl.starting_tones()) == [tones[0]]
    assert tl.ending_tones() == []

    tl.step(0.1)
    assert tl.ending_tones() == [tones[0]]
    assert list(tl.starting_tones()) == [tones[1]]

    tl.step(0.25)
    assert tl.ending_tones() == [tones[1]]
    assert list(tl.starting_tones()) == [tones[2]]
    assert not tl.finished
    assert tl.ending_tones() == [tones[2]]
    assert tl.finished


def test_timeline_starts_at_origin():
    tones = schedule_local(SCALE, 5.0)
    tl = Timeline(tones, start=4.0)
    assert list(tl.starting_tones()) == []
    tl.step(1.0)
    assert list(tl.starting_tones()) == [tones[0]]


@pytest.mark.parametrize("melody", [
    [("A5",)],
    [5],
    [("A5", 0.25, 1)],
])
def test_malformed_input_raises_melody_error(melody):
    with pytest.raises(MelodyError):
        schedule_local(melody)
    with pytest.raises(MelodyError):
        to_wire_encoding(melody)


def test_constructed_melody_is_checked_before_scheduling():
    with pytest.raises(InvalidDuration):
        schedule_local(Melody((("A5", 0),)))
    with pytest.raises(UnknownPitch):
        to_wire_encoding(Melody((("Q9", 0.25),)))
