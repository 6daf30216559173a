import pytest

from notes.pitch import Pitch
from notes.presets import ALARM, BEEP, PRESETS, RESET, SETUP, get_preset
from timeline.scheduler import to_wire_encoding


def test_firmware_lengths():
    assert (len(ALARM), len(BEEP), len(RESET), len(SETUP)) == (24, 1, 13, 2)


def test_reset_is_a_chromatic_run():
    codes = [e.pitch for e in RESET]
    assert codes[0] is Pitch.A5 and codes[-1] is Pitch.A6
    assert [p.midi for p in codes] == list(range(81, 94))


def test_presets_encode_to_firmware_milliseconds():
    assert [n.duration_ms for n in to_wire_encoding(BEEP)] == pytest.approx([100])
    alarm_ms = {round(n.duration_ms) for n in to_wire_encoding(ALARM)}
    assert alarm_ms == {100, 200}


def test_get_preset():
    assert get_preset(" Alarm ") is ALARM
    assert set(PRESETS) == {"alarm", "beep", "reset", "setup"}
    with pytest.raises(KeyError, match="expected one of"):
        get_preset("fanfare")
