"""Speaker change ding."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import SoundConfig

logger = logging.getLogger("scrumdinger")


def build_ding(
    sample_rate_hz: int = 44100,
    frequency_hz: float = 880.0,
    duration_ms: int = 250,
    volume: float = 0.3,
) -> np.ndarray:
    if sample_rate_hz <= 0:
        raise ValueError("sample_rate_hz must be > 0.")
    if duration_ms <= 0:
        raise ValueError("duration_ms must be > 0.")
    if not 0.0 <= volume <= 1.0:
        raise ValueError("volume must be between 0 and 1.")

    frames = int(sample_rate_hz * duration_ms / 1000)
    t = np.arange(frames, dtype=np.float64) / sample_rate_hz
    # decays to ~1% of the start level by the end of the tone
    envelope = np.exp(-t * (4.6 * 1000.0 / duration_ms))
    wave = np.sin(2.0 * np.pi * frequency_hz * t) * envelope * volume
    return (wave * np.iinfo(np.int16).max).astype(np.int16)


def find_output_device(name: Optional[str]) -> Optional[int]:
    if not name:
        return None
    try:
        import sounddevice as sd
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError("sounddevice is required for playback.") from exc

    name_lower = name.lower()
    for index, device in enumerate(sd.query_devices()):
        if device.get("max_output_channels", 0) <= 0:
            continue
        if name_lower in device.get("name", "").lower():
            return device.get("index", index)
    return None


def play_ding(
    sample_rate_hz: int = 44100,
    frequency_hz: float = 880.0,
    duration_ms: int = 250,
    volume: float = 0.3,
    device_name: Optional[str] = None,
    blocking: bool = False,
) -> None:
    try:
        import sounddevice as sd
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError("sounddevice is required for playback.") from exc

    samples = build_ding(sample_rate_hz, frequency_hz, duration_ms, volume)
    device = find_output_device(device_name)
    sd.play(samples, samplerate=sample_rate_hz, device=device)
    if blocking:
        sd.wait()


class DingNotifier:
    """Plays the ding on speaker change; goes quiet after a playback failure."""

    def __init__(self, config: SoundConfig) -> None:
        self.config = config
        self.enabled = config.enabled
        self.plays = 0

    def __call__(self) -> None:
        if not self.enabled:
            return
        try:
            play_ding(
                sample_rate_hz=self.config.sample_rate_hz,
                frequency_hz=self.config.frequency_hz,
                duration_ms=self.config.duration_ms,
                volume=self.config.volume,
                device_name=self.config.device_name,
            )
        except Exception as exc:  # PortAudioError, missing sounddevice, bad params
            logger.warning("Ding playback disabled: %s", exc)
            self.enabled = False
            return
        self.plays += 1
