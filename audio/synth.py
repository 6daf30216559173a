# audio/synth.py
import logging
import math
from array import array

import pygame

from config import AudioConfig

log = logging.getLogger(__name__)

LOOP_SECONDS = 0.05  # shortest buffer that is looped for a sustained tone


def square_wave(frequency: float, sample_rate: int, volume: float = 0.3, periods: int = 1) -> array:
    """Signed 16-bit mono samples of `periods` whole square-wave cycles."""
    if frequency <= 0:
        return array('h')
    amp = int(max(0.0, min(float(volume), 1.0)) * 32767)
    n = max(2, int(round(periods * sample_rate / frequency)))
    step = frequency / sample_rate
    return array('h', (amp if (i * step) % 1.0 < 0.5 else -amp for i in range(n)))


class Synth:
    """
    pygame.mixer 方波音源（蜂鳴器預覽）：
    - tone_on(freq) -> token，0 Hz 不發聲
    - tone_off(token) 關閉該次觸發
    - all_off() 全部靜音
    打不開音訊裝置時只記錄警告，之後所有呼叫都是 no-op。
    """
    def __init__(self, cfg: AudioConfig):
        self.cfg = cfg
        self.enabled = False
        self.sample_rate = cfg.sample_rate
        self.out_channels = 1
        self._sounds = {}       # frequency -> pygame.mixer.Sound
        self._next_token = 1
        self._token_map = {}    # token -> pygame.mixer.Channel

        if not cfg.enabled:
            return
        try:
            pygame.mixer.init(frequency=cfg.sample_rate, size=-16, channels=1)
            self.sample_rate, _, self.out_channels = pygame.mixer.get_init()
            self.enabled = True
            log.info("Audio out: %d Hz, %d channel(s)", self.sample_rate, self.out_channels)
        except pygame.error as e:
            log.warning("Audio init failed, local preview disabled: %s", e)

    def _sound(self, frequency: float) -> pygame.mixer.Sound:
        snd = self._sounds.get(frequency)
        if snd is None:
            periods = max(1, math.ceil(LOOP_SECONDS * frequency))
            samples = square_wave(frequency, self.sample_rate, self.cfg.volume, periods)
            if self.out_channels > 1:
                samples = array('h', (s for s in samples for _ in range(self.out_channels)))
            snd = pygame.mixer.Sound(buffer=samples.tobytes())
            self._sounds[frequency] = snd
        return snd

    def tone_on(self, frequency: float):
        if not self.enabled or frequency <= 0:
            return None
        channel = self._sound(frequency).play(loops=-1)
        if channel is None:
            log.debug("No free mixer channel for %.2f Hz", frequency)
            return None
        t = self._next_token; self._next_token += 1
        self._token_map[t] = channel
        return t

    def tone_off(self, token):
        if token is None:
            return
        channel = self._token_map.pop(token, None)
        if channel is not None:
            channel.stop()

    def all_off(self):
        if self.enabled:
            pygame.mixer.stop()
        self._token_map.clear()

    def close(self):
        if self.enabled:
            self.all_off()
            pygame.mixer.quit()
        self._sounds.clear()
        self.enabled = False
