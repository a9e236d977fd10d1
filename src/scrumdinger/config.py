"""Configuration handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
import yaml

from .models import DailyScrum
from .themes import Theme


@dataclass
class ScrumConfig:
    title: str = "Daily Scrum"
    length_in_minutes: int = 5
    theme: str = Theme.YELLOW.value
    attendees: List[str] = field(default_factory=list)

    def to_scrum(self) -> DailyScrum:
        return DailyScrum.from_names(
            title=self.title,
            names=self.attendees,
            length_in_minutes=int(self.length_in_minutes),
            theme=Theme.parse(self.theme),
        )


@dataclass
class TimerConfig:
    frequency_hz: int = 60

    @property
    def interval(self) -> float:
        return 1.0 / max(self.frequency_hz, 1)


@dataclass
class SoundConfig:
    enabled: bool = True
    sample_rate_hz: int = 44100
    frequency_hz: float = 880.0
    duration_ms: int = 250
    volume: float = 0.3
    device_name: Optional[str] = None


@dataclass
class Config:
    log_dir: str = "logs"
    debug_logging: bool = False
    scrum: ScrumConfig = field(default_factory=ScrumConfig)
    timer: TimerConfig = field(default_factory=TimerConfig)
    sound: SoundConfig = field(default_factory=SoundConfig)


def default_config() -> Config:
    return Config(
        scrum=ScrumConfig(attendees=["Cathy", "Daisy", "Simon", "Jonathan"])
    )


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    scrum_data = dict(data.get("scrum") or {})
    scrum_data["attendees"] = [str(a) for a in scrum_data.get("attendees") or []]
    scrum = ScrumConfig(**scrum_data)
    scrum.theme = Theme.parse(scrum.theme).value
    timer = TimerConfig(**(data.get("timer") or {}))
    sound = SoundConfig(**(data.get("sound") or {}))

    return Config(
        log_dir=data.get("log_dir", "logs"),
        debug_logging=bool(data.get("debug_logging", False)),
        scrum=scrum,
        timer=timer,
        sound=sound,
    )


def save_config(path: str, config: Config) -> None:
    data = {
        "log_dir": config.log_dir,
        "debug_logging": config.debug_logging,
        "scrum": {
            "title": config.scrum.title,
            "length_in_minutes": config.scrum.length_in_minutes,
            "theme": config.scrum.theme,
            "attendees": list(config.scrum.attendees),
        },
        "timer": {
            "frequency_hz": config.timer.frequency_hz,
        },
        "sound": {
            "enabled": config.sound.enabled,
            "sample_rate_hz": config.sound.sample_rate_hz,
            "frequency_hz": config.sound.frequency_hz,
            "duration_ms": config.sound.duration_ms,
            "volume": config.sound.volume,
            "device_name": config.sound.device_name,
        },
    }
    with open(path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)
