"""Turn timer for a daily scrum.

The meeting length is split evenly (integer division) across the speakers.
A tick source calls back at a high frequency; each tick recomputes the
elapsed and remaining seconds from the clock and moves to the next speaker
once the current turn is used up.

All state is owned by one :class:`TurnTimer` and is only mutated from the
thread that delivers ticks and issues control calls, so nothing here takes
a lock.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .models import Speaker, speakers_from_names

logger = logging.getLogger("scrumdinger")

DEFAULT_FREQUENCY = 1.0 / 60.0


@dataclass(frozen=True)
class TimerSnapshot:
    active_speaker_index: int
    active_speaker_label: str
    seconds_elapsed: int
    seconds_remaining: int
    speakers: Tuple[Speaker, ...]
    is_finished: bool = False


class PollingTickSource:
    """Tick source driven by its owner's loop.

    ``poll()`` fires the callback when at least one interval has passed on
    the clock since the previous tick. ``run()`` polls until cancelled.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._callback: Optional[Callable[[], None]] = None
        self.interval = DEFAULT_FREQUENCY
        self._next_due = 0.0

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self._next_due = self._clock() + interval

    def cancel(self) -> None:
        self._callback = None

    def poll(self) -> bool:
        callback = self._callback
        if callback is None:
            return False
        now = self._clock()
        if now < self._next_due:
            return False
        self._next_due = now + self.interval
        callback()
        return True

    def run(self, sleep: Callable[[float], None] = time.sleep) -> None:
        while self.running:
            self.poll()
            sleep(self.interval)


class TurnTimer:
    """Tracks the active speaker and elapsed/remaining time of a meeting.

    Use :meth:`start` to begin the first turn. Observers registered with
    :meth:`subscribe` receive a :class:`TimerSnapshot` whenever the visible
    state changes; ``on_speaker_changed`` is called after every turn change
    triggered by the clock.
    """

    def __init__(
        self,
        length_in_minutes: int = 0,
        participant_names: Iterable[str] = (),
        *,
        clock: Callable[[], float] = time.monotonic,
        tick_source=None,
        frequency: float = DEFAULT_FREQUENCY,
        on_speaker_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._clock = clock
        self._ticks = tick_source if tick_source is not None else PollingTickSource(clock)
        self.frequency = frequency
        self.on_speaker_changed = on_speaker_changed
        self._listeners: List[Callable[[TimerSnapshot], None]] = []
        self._published: Optional[TimerSnapshot] = None
        self._load(length_in_minutes, participant_names)

    def _load(self, length_in_minutes: int, participant_names: Iterable[str]) -> None:
        self._length_in_minutes = length_in_minutes
        self._speakers: List[Speaker] = list(speakers_from_names(participant_names))
        self._speaker_index = 0
        self._seconds_elapsed_for_speaker = 0
        self._seconds_elapsed = 0
        self._seconds_remaining = self._length_in_seconds
        self._active_speaker = self._speaker_text
        self._start_instant: Optional[float] = None
        self._stopped = False
        self._finished = False

    @property
    def _length_in_seconds(self) -> int:
        return self._length_in_minutes * 60

    @property
    def _speaker_text(self) -> str:
        return f"Speaker {self._speaker_index + 1}: {self._speakers[self._speaker_index].name}"

    @property
    def length_in_minutes(self) -> int:
        return self._length_in_minutes

    @property
    def speakers(self) -> Tuple[Speaker, ...]:
        return tuple(self._speakers)

    @property
    def active_speaker_index(self) -> int:
        return self._speaker_index

    @property
    def active_speaker_label(self) -> str:
        return self._active_speaker

    @property
    def seconds_elapsed(self) -> int:
        return self._seconds_elapsed

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def seconds_per_speaker(self) -> int:
        return self._length_in_seconds // len(self._speakers)

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def tick_source(self):
        return self._ticks

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            active_speaker_index=self._speaker_index,
            active_speaker_label=self._active_speaker,
            seconds_elapsed=self._seconds_elapsed,
            seconds_remaining=self._seconds_remaining,
            speakers=tuple(self._speakers),
            is_finished=self._finished,
        )

    def subscribe(
        self, listener: Callable[[TimerSnapshot], None]
    ) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, force: bool = False) -> None:
        current = self.snapshot()
        if not force and current == self._published:
            return
        self._published = current
        for listener in list(self._listeners):
            try:
                listener(current)
            except Exception:
                logger.exception("Timer listener failed")

    def start(self) -> None:
        if self._stopped:
            logger.debug("Start ignored: timer stopped")
            return
        logger.info(
            "Meeting started: %s min, %s speakers",
            self._length_in_minutes,
            len(self._speakers),
        )
        self._advance_to(0)

    def stop(self) -> None:
        if self._stopped:
            return
        self._ticks.cancel()
        self._stopped = True
        logger.info("Meeting stopped at %ss", self._seconds_elapsed)

    def skip_speaker(self) -> None:
        if self._stopped:
            logger.debug("Skip ignored: timer stopped")
            return
        self._advance_to(self._speaker_index + 1)

    def reset(self, length_in_minutes: int, participant_names: Iterable[str]) -> None:
        self._ticks.cancel()
        self._load(length_in_minutes, participant_names)
        logger.info(
            "Timer reset: %s min, %s speakers",
            length_in_minutes,
            len(self._speakers),
        )
        self._publish(force=True)

    def _advance_to(self, index: int) -> None:
        if index > 0:
            previous = index - 1
            self._speakers[previous] = self._speakers[previous].completed()
        self._seconds_elapsed_for_speaker = 0
        if index >= len(self._speakers):
            self._ticks.cancel()
            if not self._finished:
                self._finished = True
                logger.info("Meeting reached the end of the speaker list")
            self._publish()
            return
        self._speaker_index = index
        self._active_speaker = self._speaker_text
        self._seconds_elapsed = index * self.seconds_per_speaker
        self._seconds_remaining = max(self._length_in_seconds - self._seconds_elapsed, 0)
        self._start_instant = self._clock()
        self._ticks.cancel()
        self._ticks.start(self.frequency, self._tick)
        logger.info("Turn changed: %s", self._active_speaker)
        self._publish()

    def _tick(self) -> None:
        if self._stopped or self._start_instant is None:
            return
        elapsed = int(self._clock() - self._start_instant)
        self._update(elapsed)
        self._publish()

    def _update(self, seconds_elapsed: int) -> None:
        per_speaker = self.seconds_per_speaker
        self._seconds_elapsed_for_speaker = seconds_elapsed
        self._seconds_elapsed = per_speaker * self._speaker_index + seconds_elapsed
        if seconds_elapsed > per_speaker:
            return
        self._seconds_remaining = max(self._length_in_seconds - self._seconds_elapsed, 0)

        if self._seconds_elapsed_for_speaker >= per_speaker:
            self._advance_to(self._speaker_index + 1)
            self._notify_speaker_changed()

    def _notify_speaker_changed(self) -> None:
        action = self.on_speaker_changed
        if action is None:
            return
        try:
            action()
        except Exception:
            logger.exception("Speaker change callback failed")
