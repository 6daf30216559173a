# device/client.py
import logging
from typing import Iterable, List

import requests

from config import DeviceConfig
from notes.model import WireNote

log = logging.getLogger(__name__)


class DeviceClient:
    """Hands a wire-encoded melody to the console backend, which forwards it to the device."""

    def __init__(self, cfg: DeviceConfig, session=None):
        self.cfg = cfg
        self.session = session or requests.Session()

    @property
    def play_url(self) -> str:
        return self.cfg.base_url.rstrip("/") + "/" + self.cfg.play_path.lstrip("/")

    @staticmethod
    def payload(wire_notes: Iterable[WireNote]) -> List[list]:
        # the device counts in whole units
        return [[n.code, int(round(n.duration_ms))] for n in wire_notes]

    def play_melody(self, wire_notes: Iterable[WireNote]) -> requests.Response:
        body = self.payload(wire_notes)
        log.info("POST %s (%d notes)", self.play_url, len(body))
        resp = self.session.post(self.play_url, json=body, timeout=self.cfg.timeout)
        resp.raise_for_status()
        return resp

    def close(self):
        self.session.close()
