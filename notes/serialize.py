# notes/serialize.py
import json
from typing import List

from notes.model import Melody


def serialize_melody(melody: Melody) -> List[list]:
    """以名稱輸出，便於人看與儲存 JSON：[["A5", 0.25], ...]"""
    return [[e.pitch.name, float(e.beats)] for e in melody]


def deserialize_melody(obj) -> Melody:
    """從 [[pitch, beats], ...] 還原；pitch 可為名稱或整數代碼。"""
    if not isinstance(obj, list):
        raise ValueError(f"Melody JSON must be a list of [pitch, beats] pairs, got {type(obj).__name__}")
    pairs = []
    for i, item in enumerate(obj):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Melody entry {i} must be a [pitch, beats] pair, got {item!r}")
        pairs.append((item[0], item[1]))
    return Melody.from_pairs(pairs)


def load_melody_json(path: str) -> Melody:
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_melody(json.load(f))


def save_melody_json(melody: Melody, path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_melody(melody), f, ensure_ascii=False, indent=2)
