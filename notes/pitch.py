# notes/pitch.py
"""
Pitch vocabulary shared by the local preview and the device.

Every pitch code packs the semitone and the octave into one byte:
high nibble = semitone + 1 (C=1 .. B=12), low nibble = octave (0..8).
Silence is 0x00. The same code is used as table key and on the wire.
"""
import re
from enum import IntEnum
from typing import Union

from notes.errors import UnknownPitch

SILENCE_HZ = 0.0

SEMITONE_NAMES = ("C", "CSharp", "D", "DSharp", "E", "F",
                  "FSharp", "G", "GSharp", "A", "ASharp", "B")

_NAME_RE = re.compile(r"^([A-Ga-g])(#|s|Sharp)?(\d)$")


class Pitch(IntEnum):
    Silence = 0x00

    C0 = 0x10
    CSharp0 = 0x20
    D0 = 0x30
    DSharp0 = 0x40
    E0 = 0x50
    F0 = 0x60
    FSharp0 = 0x70
    G0 = 0x80
    GSharp0 = 0x90
    A0 = 0xA0
    ASharp0 = 0xB0
    B0 = 0xC0

    C1 = 0x11
    CSharp1 = 0x21
    D1 = 0x31
    DSharp1 = 0x41
    E1 = 0x51
    F1 = 0x61
    FSharp1 = 0x71
    G1 = 0x81
    GSharp1 = 0x91
    A1 = 0xA1
    ASharp1 = 0xB1
    B1 = 0xC1

    C2 = 0x12
    CSharp2 = 0x22
    D2 = 0x32
    DSharp2 = 0x42
    E2 = 0x52
    F2 = 0x62
    FSharp2 = 0x72
    G2 = 0x82
    GSharp2 = 0x92
    A2 = 0xA2
    ASharp2 = 0xB2
    B2 = 0xC2

    C3 = 0x13
    CSharp3 = 0x23
    D3 = 0x33
    DSharp3 = 0x43
    E3 = 0x53
    F3 = 0x63
    FSharp3 = 0x73
    G3 = 0x83
    GSharp3 = 0x93
    A3 = 0xA3
    ASharp3 = 0xB3
    B3 = 0xC3

    C4 = 0x14
    CSharp4 = 0x24
    D4 = 0x34
    DSharp4 = 0x44
    E4 = 0x54
    F4 = 0x64
    FSharp4 = 0x74
    G4 = 0x84
    GSharp4 = 0x94
    A4 = 0xA4
    ASharp4 = 0xB4
    B4 = 0xC4

    C5 = 0x15
    CSharp5 = 0x25
    D5 = 0x35
    DSharp5 = 0x45
    E5 = 0x55
    F5 = 0x65
    FSharp5 = 0x75
    G5 = 0x85
    GSharp5 = 0x95
    A5 = 0xA5
    ASharp5 = 0xB5
    B5 = 0xC5

    C6 = 0x16
    CSharp6 = 0x26
    D6 = 0x36
    DSharp6 = 0x46
    E6 = 0x56
    F6 = 0x66
    FSharp6 = 0x76
    G6 = 0x86
    GSharp6 = 0x96
    A6 = 0xA6
    ASharp6 = 0xB6
    B6 = 0xC6

    C7 = 0x17
    CSharp7 = 0x27
    D7 = 0x37
    DSharp7 = 0x47
    E7 = 0x57
    F7 = 0x67
    FSharp7 = 0x77
    G7 = 0x87
    GSharp7 = 0x97
    A7 = 0xA7
    ASharp7 = 0xB7
    B7 = 0xC7

    C8 = 0x18
    CSharp8 = 0x28
    D8 = 0x38
    DSharp8 = 0x48
    E8 = 0x58
    F8 = 0x68
    FSharp8 = 0x78
    G8 = 0x88
    GSharp8 = 0x98
    A8 = 0xA8
    ASharp8 = 0xB8
    B8 = 0xC8

    @classmethod
    def from_parts(cls, semitone: int, octave: int) -> "Pitch":
        if not (0 <= semitone < 12 and 0 <= octave <= 8):
            raise UnknownPitch((semitone, octave))
        return cls(((semitone + 1) << 4) | octave)

    @classmethod
    def from_midi(cls, number: int) -> "Pitch":
        """MIDI note 12 is C0, 69 is A4."""
        octave, semitone = divmod(int(number), 12)
        try:
            return cls.from_parts(semitone, octave - 1)
        except UnknownPitch:
            raise UnknownPitch(number) from None

    @property
    def code(self) -> int:
        return int(self)

    @property
    def is_silence(self) -> bool:
        return self is Pitch.Silence

    @property
    def semitone(self) -> int:
        return (self.value >> 4) - 1

    @property
    def octave(self) -> int:
        return self.value & 0x0F

    @property
    def midi(self) -> int:
        return (self.octave + 1) * 12 + self.semitone

    @property
    def frequency(self) -> float:
        return FREQUENCIES.get(self, SILENCE_HZ)


# Equal temperament, A4 = 440 Hz.
FREQUENCIES = {
    Pitch.C0: 16.35,
    Pitch.CSharp0: 17.32,
    Pitch.D0: 18.35,
    Pitch.DSharp0: 19.45,
    Pitch.E0: 20.60,
    Pitch.F0: 21.83,
    Pitch.FSharp0: 23.12,
    Pitch.G0: 24.50,
    Pitch.GSharp0: 25.96,
    Pitch.A0: 27.50,
    Pitch.ASharp0: 29.14,
    Pitch.B0: 30.87,

    Pitch.C1: 32.70,
    Pitch.CSharp1: 34.65,
    Pitch.D1: 36.71,
    Pitch.DSharp1: 38.89,
    Pitch.E1: 41.20,
    Pitch.F1: 43.65,
    Pitch.FSharp1: 46.25,
    Pitch.G1: 49.00,
    Pitch.GSharp1: 51.91,
    Pitch.A1: 55.00,
    Pitch.ASharp1: 58.27,
    Pitch.B1: 61.74,

    Pitch.C2: 65.41,
    Pitch.CSharp2: 69.30,
    Pitch.D2: 73.42,
    Pitch.DSharp2: 77.78,
    Pitch.E2: 82.41,
    Pitch.F2: 87.31,
    Pitch.FSharp2: 92.50,
    Pitch.G2: 98.00,
    Pitch.GSharp2: 103.83,
    Pitch.A2: 110.00,
    Pitch.ASharp2: 116.54,
    Pitch.B2: 123.47,

    Pitch.C3: 130.81,
    Pitch.CSharp3: 138.59,
    Pitch.D3: 146.83,
    Pitch.DSharp3: 155.56,
    Pitch.E3: 164.81,
    Pitch.F3: 174.61,
    Pitch.FSharp3: 185.00,
    Pitch.G3: 196.00,
    Pitch.GSharp3: 207.65,
    Pitch.A3: 220.00,
    Pitch.ASharp3: 233.08,
    Pitch.B3: 246.94,

    Pitch.C4: 261.63,
    Pitch.CSharp4: 277.18,
    Pitch.D4: 293.66,
    Pitch.DSharp4: 311.13,
    Pitch.E4: 329.63,
    Pitch.F4: 349.23,
    Pitch.FSharp4: 369.99,
    Pitch.G4: 392.00,
    Pitch.GSharp4: 415.30,
    Pitch.A4: 440.00,
    Pitch.ASharp4: 466.16,
    Pitch.B4: 493.88,

    Pitch.C5: 523.25,
    Pitch.CSharp5: 554.37,
    Pitch.D5: 587.33,
    Pitch.DSharp5: 622.25,
    Pitch.E5: 659.26,
    Pitch.F5: 698.46,
    Pitch.FSharp5: 739.99,
    Pitch.G5: 783.99,
    Pitch.GSharp5: 830.61,
    Pitch.A5: 880.00,
    Pitch.ASharp5: 932.33,
    Pitch.B5: 987.77,

    Pitch.C6: 1046.50,
    Pitch.CSharp6: 1108.73,
    Pitch.D6: 1174.66,
    Pitch.DSharp6: 1244.51,
    Pitch.E6: 1318.51,
    Pitch.F6: 1396.91,
    Pitch.FSharp6: 1479.98,
    Pitch.G6: 1567.98,
    Pitch.GSharp6: 1661.22,
    Pitch.A6: 1760.00,
    Pitch.ASharp6: 1864.66,
    Pitch.B6: 1975.53,

    Pitch.C7: 2093.00,
    Pitch.CSharp7: 2217.46,
    Pitch.D7: 2349.32,
    Pitch.DSharp7: 2489.02,
    Pitch.E7: 2637.02,
    Pitch.F7: 2793.83,
    Pitch.FSharp7: 2959.96,
    Pitch.G7: 3135.96,
    Pitch.GSharp7: 3322.44,
    Pitch.A7: 3520.00,
    Pitch.ASharp7: 3729.31,
    Pitch.B7: 3951.07,

    Pitch.C8: 4186.01,
    Pitch.CSharp8: 4434.92,
    Pitch.D8: 4698.64,
    Pitch.DSharp8: 4978.03,
    Pitch.E8: 5274.04,
    Pitch.F8: 5587.65,
    Pitch.FSharp8: 5919.91,
    Pitch.G8: 6271.93,
    Pitch.GSharp8: 6644.88,
    Pitch.A8: 7040.00,
    Pitch.ASharp8: 7458.62,
    Pitch.B8: 7902.13,
}


PitchLike = Union[Pitch, int, str]


def parse_pitch(identifier: PitchLike) -> Pitch:
    """
    Resolve a pitch identifier to a Pitch:
    - a Pitch member
    - its wire code (e.g. 0xA4)
    - a name: 'A4', 'ASharp4', 'A#4', 'As4' or 'Silence'
    Anything else raises UnknownPitch.
    """
    if isinstance(identifier, Pitch):
        return identifier
    if isinstance(identifier, int) and not isinstance(identifier, bool):
        try:
            return Pitch(identifier)
        except ValueError:
            raise UnknownPitch(identifier) from None
    if isinstance(identifier, str):
        name = identifier.strip()
        if name.lower() == "silence":
            return Pitch.Silence
        m = _NAME_RE.match(name)
        if m:
            letter, sharp, octave = m.groups()
            member = Pitch.__members__.get(f"{letter.upper()}{'Sharp' if sharp else ''}{octave}")
            if member is not None:
                return member
    raise UnknownPitch(identifier)


def frequency_of(identifier: PitchLike) -> float:
    """Frequency in Hz; Silence and unknown identifiers give SILENCE_HZ."""
    try:
        return parse_pitch(identifier).frequency
    except UnknownPitch:
        return SILENCE_HZ


def pitch_code(identifier: PitchLike) -> int:
    return parse_pitch(identifier).code
