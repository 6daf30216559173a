import pytest
import requests

from config import DeviceConfig
from device.client import DeviceClient
from notes.model import WireNote
from notes.presets import BEEP
from timeline.scheduler import to_wire_encoding


class FakeResponse:
    def __init__(self, status=204):
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    def __init__(self, status=204):
        self.status = status
        self.calls = []
        self.closed = False

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        return FakeResponse(self.status)

    def close(self):
        self.closed = True


def test_payload_rounds_to_device_units():
    notes = [WireNote(0xA5, 100.00000000000001), WireNote(0x00, 199.6)]
    assert DeviceClient.payload(notes) == [[0xA5, 100], [0x00, 200]]


def test_posts_wire_encoding_as_json():
    session = FakeSession()
    client = DeviceClient(DeviceConfig(base_url="http://127.0.0.1:9000/", timeout=2.5), session=session)
    client.play_melody(to_wire_encoding(BEEP))
    assert session.calls == [("http://127.0.0.1:9000/api/play", [[0x85, 100]], 2.5)]


def test_http_errors_propagate():
    client = DeviceClient(DeviceConfig(), session=FakeSession(status=500))
    with pytest.raises(requests.HTTPError):
        client.play_melody(to_wire_encoding(BEEP))


def test_close_closes_session():
    session = FakeSession()
    DeviceClient(DeviceConfig(), session=session).close()
    assert session.closed
