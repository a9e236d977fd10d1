"""Data models for Scrumdinger."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Sequence, Tuple

from .themes import Theme

MIN_LENGTH_MINUTES = 5
MAX_LENGTH_MINUTES = 30


@dataclass(frozen=True)
class Speaker:
    """One speaking turn in a meeting."""

    name: str
    is_completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False)

    def completed(self) -> "Speaker":
        return replace(self, is_completed=True)


def speakers_from_names(names: Iterable[str]) -> Tuple[Speaker, ...]:
    """Build fresh speakers, substituting "Speaker 1" when nobody is listed."""

    speakers = tuple(Speaker(name=name) for name in names)
    if not speakers:
        return (Speaker(name="Speaker 1"),)
    return speakers


@dataclass
class Attendee:
    name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class ScrumData:
    """Editable draft of a scrum, as filled in by the edit form."""

    title: str = ""
    attendees: List[Attendee] = field(default_factory=list)
    length_in_minutes: float = float(MIN_LENGTH_MINUTES)
    theme: Theme = Theme.SEAFOAM

    def set_length(self, minutes: float) -> None:
        value = round(float(minutes))
        self.length_in_minutes = float(
            min(max(value, MIN_LENGTH_MINUTES), MAX_LENGTH_MINUTES)
        )

    def add_attendee(self, name: str) -> bool:
        if not name or not name.strip():
            return False
        self.attendees.append(Attendee(name=name))
        return True

    def remove_attendees(self, indices: Iterable[int]) -> None:
        drop = set(indices)
        self.attendees = [a for i, a in enumerate(self.attendees) if i not in drop]


@dataclass
class DailyScrum:
    title: str
    attendees: List[Attendee]
    length_in_minutes: int
    theme: Theme = Theme.YELLOW
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_names(
        cls,
        title: str,
        names: Sequence[str],
        length_in_minutes: int,
        theme: Theme = Theme.YELLOW,
    ) -> "DailyScrum":
        return cls(
            title=title,
            attendees=[Attendee(name=n) for n in names],
            length_in_minutes=length_in_minutes,
            theme=theme,
        )

    @property
    def attendee_names(self) -> List[str]:
        return [a.name for a in self.attendees]

    @property
    def data(self) -> ScrumData:
        draft = ScrumData(
            title=self.title,
            attendees=list(self.attendees),
            theme=self.theme,
        )
        draft.set_length(self.length_in_minutes)
        return draft

    def update(self, data: ScrumData) -> None:
        self.title = data.title
        self.attendees = list(data.attendees)
        self.length_in_minutes = int(data.length_in_minutes)
        self.theme = data.theme

    def timer(self, **kwargs):
        from .timer import TurnTimer

        return TurnTimer(self.length_in_minutes, self.attendee_names, **kwargs)
