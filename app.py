# app.py
import logging
import os
from typing import List, Tuple

from config import AppConfig
from notes.model import Melody, MelodyLike, ScheduledTone, WireNote, as_melody
from notes.presets import get_preset
from notes.serialize import load_melody_json
from midi.parser import parse_midi_to_melody
from timeline.scheduler import schedule_local, to_wire_encoding

log = logging.getLogger(__name__)

MIDI_EXTS = (".mid", ".midi")


def load_melody(source: str) -> Melody:
    """Preset name, or a path to a .json melody or a .mid file."""
    if os.path.isfile(source):
        ext = os.path.splitext(source)[1].lower()
        if ext == ".json":
            return load_melody_json(source)
        if ext in MIDI_EXTS:
            return parse_midi_to_melody(source)
        raise ValueError(f"Unsupported melody file type: {source}")
    return get_preset(source)


class App:
    """Plays one melody locally and on the device, both derived from the same Melody value."""

    def __init__(self, cfg: AppConfig, player=None, client=None):
        self.cfg = cfg
        self.synth = None
        self.player = player
        self.client = client

        if self.player is None and cfg.audio.enabled:
            from audio.synth import Synth
            from audio.player import MelodyPlayer
            self.synth = Synth(cfg.audio)
            self.player = MelodyPlayer(self.synth, cfg.audio)
        if self.client is None and cfg.device.enabled:
            from device.client import DeviceClient
            self.client = DeviceClient(cfg.device)

    def prepare(self, melody: MelodyLike, origin: float = 0.0) -> Tuple[List[ScheduledTone], List[WireNote]]:
        melody = as_melody(melody)
        return schedule_local(melody, origin), to_wire_encoding(melody, self.cfg.device.scale_factor)

    def run(self, melody: MelodyLike, origin: float = 0.0) -> Tuple[List[ScheduledTone], List[WireNote]]:
        # validation happens here, before anything sounds or is sent
        tones, wire = self.prepare(melody, origin)
        if not tones:
            log.info("Empty melody, nothing to play")
            return tones, wire

        if self.player is not None:
            self.player.start(tones, origin)
        try:
            if self.client is not None:
                self.client.play_melody(wire)
            if self.player is not None:
                self.player.wait()
        except BaseException:
            self.stop()
            raise
        return tones, wire

    def stop(self):
        if self.player is not None:
            self.player.stop()

    def close(self):
        self.stop()
        if self.synth is not None:
            self.synth.close()
        if self.client is not None:
            self.client.close()
