# ========================= config.py =========================
from dataclasses import dataclass, field

@dataclass
class AudioConfig:
    sample_rate: int = 44100
    volume: float = 0.3       # 0.0 ~ 1.0
    fps: int = 250            # player clock rate, 4 ms resolution
    enabled: bool = True

@dataclass
class DeviceConfig:
    base_url: str = "http://127.0.0.1:8080"
    play_path: str = "/api/play"
    timeout: float = 5.0
    # beats * 0.4 s * 1000 * scale_factor; 1.0 sends real milliseconds
    scale_factor: float = 1.0
    enabled: bool = True

@dataclass
class AppConfig:
    audio: AudioConfig = field(default_factory=AudioConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)
