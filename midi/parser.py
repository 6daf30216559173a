# midi/parser.py
import logging
from fractions import Fraction
from typing import List, Optional, Tuple

import mido

from notes.model import Melody
from notes.pitch import Pitch

log = logging.getLogger(__name__)


def parse_midi_to_melody(path: str) -> Melody:
    """
    Read a Standard MIDI File as a single monophonic line.
    Durations are ticks / ticks_per_beat (tempo meta events are ignored,
    playback tempo is fixed). A new onset cuts the sounding note; gaps
    between notes become Silence.
    """
    mid = mido.MidiFile(path)
    tpb = mid.ticks_per_beat
    tick = 0
    cursor = 0
    current: Optional[Tuple[int, int]] = None  # (midi note, start tick)
    pairs: List[Tuple[Pitch, Fraction]] = []

    def emit(pitch: Pitch, start: int, end: int):
        nonlocal cursor
        if end > start:
            pairs.append((pitch, Fraction(end - start, tpb)))
        cursor = end

    for msg in mido.merge_tracks(mid.tracks):
        tick += msg.time
        if msg.is_meta:
            continue
        if msg.type == 'note_on' and msg.velocity > 0:
            if current is not None:
                emit(Pitch.from_midi(current[0]), current[1], tick)
            elif tick > cursor:
                emit(Pitch.Silence, cursor, tick)
            current = (msg.note, tick)
        elif msg.type == 'note_off' or (msg.type == 'note_on' and msg.velocity == 0):
            if current is not None and current[0] == msg.note:
                emit(Pitch.from_midi(current[0]), current[1], tick)
                current = None
    # close dangling
    if current is not None:
        emit(Pitch.from_midi(current[0]), current[1], tick)

    log.debug("parsed %s: %d events, %d ticks/beat", path, len(pairs), tpb)
    return Melody.from_pairs(pairs)
