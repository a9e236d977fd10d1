import io
import os
import tempfile

import pytest

from scrumdinger.cli import main, run_meeting
from scrumdinger.config import load_config
from scrumdinger.timer import PollingTickSource, TurnTimer


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_run_meeting_drives_timer_to_the_end():
    clock = FakeClock()
    changes = []
    timer = TurnTimer(
        1,
        ["Alice", "Bob"],
        clock=clock,
        tick_source=PollingTickSource(clock),
        frequency=0.5,
        on_speaker_changed=lambda: changes.append(1),
    )

    def _sleep(seconds):
        clock.now += seconds

    out = io.StringIO()
    final = run_meeting(timer, "Standup", out=out, sleep=_sleep)

    assert final.is_finished
    assert len(changes) == 2
    assert timer.is_stopped
    text = out.getvalue()
    assert "Speaker 1: Alice" in text
    assert "Speaker 2: Bob" in text
    assert "Meeting finished" in text


def test_plan_command(capsys):
    code = main(["plan", "--config", "missing.yml", "--length", "3", "--attendee", "Ann"])
    assert code == 0
    assert "180s per speaker" in capsys.readouterr().out


def test_config_command_writes_defaults(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "scrumdinger_config.yml")
        assert main(["config", "--path", path]) == 0
        assert load_config(path).scrum.title == "Daily Scrum"
        assert main(["config", "--path", path]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_negative_length_in_config_names_the_key(capsys):
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "scrumdinger_config.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("scrum:\n  length_in_minutes: -3\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["plan", "--config", path])
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "scrum.length_in_minutes" in err
    assert "--length" not in err


def test_negative_length_flag_is_reported(capsys):
    with pytest.raises(SystemExit):
        main(["plan", "--config", "missing.yml", "--length", "-1"])
    assert "--length must be >= 0" in capsys.readouterr().err
