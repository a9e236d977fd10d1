"""Meeting header and speaker list rendering."""

from __future__ import annotations

from typing import List, Sequence

from .models import Speaker, speakers_from_names
from .timer import TimerSnapshot


def _clean_text(value: str) -> str:
    return " ".join(value.split())


def meeting_progress(seconds_elapsed: int, seconds_remaining: int) -> float:
    total = seconds_elapsed + seconds_remaining
    if total <= 0:
        return 1.0
    return seconds_elapsed / total


def minutes_remaining(seconds_remaining: int) -> int:
    return seconds_remaining // 60


def accessibility_value(seconds_remaining: int) -> str:
    return f"{minutes_remaining(seconds_remaining)} minutes"


def format_clock(seconds: int) -> str:
    mins, secs = divmod(max(seconds, 0), 60)
    return f"{mins:02d}:{secs:02d}"


def render_progress_bar(progress: float, width: int = 30) -> str:
    width = max(width, 1)
    filled = int(round(min(max(progress, 0.0), 1.0) * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_header(snapshot: TimerSnapshot, width: int = 30) -> str:
    progress = meeting_progress(snapshot.seconds_elapsed, snapshot.seconds_remaining)
    lines: List[str] = []
    lines.append(f"{render_progress_bar(progress, width)} {progress * 100:3.0f}%")
    lines.append(
        f"Seconds Elapsed: {snapshot.seconds_elapsed}"
        f"  Seconds Remaining: {snapshot.seconds_remaining}"
        f"  ({accessibility_value(snapshot.seconds_remaining)})"
    )
    return "\n".join(lines)


def render_speakers(speakers: Sequence[Speaker], active_index: int | None = None) -> str:
    lines: List[str] = []
    for index, speaker in enumerate(speakers):
        mark = "x" if speaker.is_completed else " "
        pointer = ">" if index == active_index and not speaker.is_completed else " "
        lines.append(f"{pointer} [{mark}] {_clean_text(speaker.name)}")
    return "\n".join(lines)


def render_meeting(title: str, snapshot: TimerSnapshot, width: int = 30) -> str:
    lines: List[str] = []
    lines.append(_clean_text(title) or "Daily Scrum")
    lines.append(render_header(snapshot, width))
    if snapshot.is_finished:
        lines.append("Meeting finished")
    else:
        lines.append(snapshot.active_speaker_label)
    lines.append(render_speakers(snapshot.speakers, snapshot.active_speaker_index))
    return "\n".join(lines)


def render_turn_plan(length_in_minutes: int, names: Sequence[str]) -> str:
    speakers = speakers_from_names(names)
    total = length_in_minutes * 60
    per_speaker = total // len(speakers)
    lines: List[str] = []
    lines.append(
        f"Meeting: {length_in_minutes} min, {len(speakers)} speakers,"
        f" {per_speaker}s per speaker"
    )
    for index, speaker in enumerate(speakers):
        start = index * per_speaker
        lines.append(
            f"Speaker {index + 1}: {_clean_text(speaker.name)}"
            f"  {format_clock(start)}-{format_clock(start + per_speaker)}"
        )
    leftover = total - per_speaker * len(speakers)
    if leftover:
        lines.append(f"Unallocated: {leftover}s")
    return "\n".join(lines)
