import os
import tempfile

import pytest

from scrumdinger.config import Config, ScrumConfig, default_config, load_config, save_config
from scrumdinger.themes import Theme


def test_save_and_load_config_roundtrip():
    cfg = Config(scrum=ScrumConfig(title="Web Dev", length_in_minutes=10, theme="navy"))
    cfg.scrum.attendees.extend(["Chella", "Chris"])
    cfg.sound.enabled = False

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "scrumdinger_config.yml")
        save_config(path, cfg)
        loaded = load_config(path)

    assert loaded.scrum.title == "Web Dev"
    assert loaded.scrum.attendees == ["Chella", "Chris"]
    assert loaded.scrum.length_in_minutes == 10
    assert loaded.sound.enabled is False
    assert loaded.timer.frequency_hz == 60


def test_load_config_fills_missing_sections():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "partial.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("scrum:\n  title: Standup\n")
        loaded = load_config(path)

    assert loaded.scrum.title == "Standup"
    assert loaded.scrum.attendees == []
    assert loaded.sound.sample_rate_hz == 44100
    assert loaded.log_dir == "logs"


def test_scrum_config_to_scrum():
    scrum = default_config().scrum.to_scrum()
    assert scrum.theme is Theme.YELLOW
    assert scrum.attendee_names == ["Cathy", "Daisy", "Simon", "Jonathan"]
    assert scrum.length_in_minutes == 5


def test_timer_interval_from_frequency():
    cfg = Config()
    assert cfg.timer.interval == 1.0 / 60


def test_load_config_rejects_unknown_theme():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "bad_theme.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("scrum:\n  theme: chartreuse\n")
        with pytest.raises(ValueError):
            load_config(path)


def test_load_config_normalises_theme_name():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "theme.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("scrum:\n  theme: Navy\n")
        loaded = load_config(path)
    assert loaded.scrum.theme == "navy"
    assert loaded.scrum.to_scrum().theme is Theme.NAVY
