# notes/presets.py
# Tunes built into the device firmware, in beats (0.25 beat = 100 ms at 150 BPM).
from typing import Dict

from notes.model import Melody
from notes.pitch import Pitch as P

Q = 0.25    # quarter-note slot on the device
H = 0.5     # half-note slot on the device

ALARM = Melody.from_pairs([
    (P.B7, Q), (P.GSharp7, Q), (P.DSharp7, H),
    (P.GSharp7, Q), (P.DSharp7, Q), (P.FSharp7, H),
    (P.DSharp7, Q), (P.FSharp7, Q), (P.DSharp7, H),
    (P.Silence, H),
    (P.DSharp7, H), (P.FSharp7, Q), (P.DSharp7, Q),
    (P.F7, Q), (P.DSharp7, Q), (P.F7, Q), (P.DSharp7, Q),
    (P.D7, Q), (P.F7, Q), (P.CSharp7, Q), (P.F7, Q),
    (P.FSharp7, H), (P.DSharp7, H),
    (P.Silence, H),
])

BEEP = Melody.from_pairs([(P.G5, Q)])

# Also the console's "Play melody" diagnostics tune.
RESET = Melody.from_pairs([
    (P.A5, Q), (P.ASharp5, Q), (P.B5, Q), (P.C6, Q), (P.CSharp6, Q),
    (P.D6, Q), (P.DSharp6, Q), (P.E6, Q), (P.F6, Q), (P.FSharp6, Q),
    (P.G6, Q), (P.GSharp6, Q), (P.A6, Q),
])

SETUP = Melody.from_pairs([(P.DSharp5, Q), (P.DSharp5, Q)])

PRESETS: Dict[str, Melody] = {
    "alarm": ALARM,
    "beep": BEEP,
    "reset": RESET,
    "setup": SETUP,
}


def get_preset(name: str) -> Melody:
    try:
        return PRESETS[name.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}, expected one of: {', '.join(sorted(PRESETS))}") from None
