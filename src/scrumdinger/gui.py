"""Tkinter GUI: scrum edit form and meeting window."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from .config import Config, default_config, load_config, save_config
from .logging_utils import setup_logging
from .models import MAX_LENGTH_MINUTES, MIN_LENGTH_MINUTES, DailyScrum
from .renderer import accessibility_value, meeting_progress
from .sound import DingNotifier
from .themes import Theme
from .timer import TimerSnapshot, TurnTimer


class TkTickSource:
    """Tick source backed by ``after`` on a tkinter widget."""

    def __init__(self, widget) -> None:
        self.widget = widget
        self.interval = 0.0
        self._job = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        self.cancel()
        self.interval = interval
        self._callback = callback
        self._schedule()

    def cancel(self) -> None:
        self._callback = None
        if self._job is not None:
            self.widget.after_cancel(self._job)
            self._job = None

    def _schedule(self) -> None:
        delay_ms = max(int(self.interval * 1000), 1)
        self._job = self.widget.after(delay_ms, self._fire)

    def _fire(self) -> None:
        self._job = None
        callback = self._callback
        if callback is None:
            return
        self._schedule()
        callback()


def launch_gui(config_path: str = "scrumdinger_config.yml") -> None:
    import tkinter as tk
    from tkinter import ttk

    if os.path.exists(config_path):
        try:
            config = load_config(config_path)
        except Exception:
            logging.getLogger("scrumdinger").exception("Config load failed")
            config = default_config()
    else:
        config = default_config()

    logger, log_path = setup_logging(
        log_dir=config.log_dir,
        level=logging.DEBUG if config.debug_logging else logging.INFO,
    )
    logger.info("GUI starting (log: %s)", log_path)

    scrum = config.scrum.to_scrum()
    draft = scrum.data

    root = tk.Tk()
    root.title("Scrumdinger")
    root.resizable(False, False)

    style = ttk.Style(root)
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass

    main = ttk.Frame(root, padding=10)
    main.grid(row=0, column=0, sticky="nsew")

    info_frame = ttk.LabelFrame(main, text="Meeting Info", padding=8)
    info_frame.grid(row=0, column=0, sticky="ew")

    ttk.Label(info_frame, text="Title").grid(row=0, column=0, sticky="w")
    title_var = tk.StringVar(value=draft.title)
    ttk.Entry(info_frame, textvariable=title_var, width=32).grid(
        row=0, column=1, columnspan=2, sticky="ew", padx=(8, 0)
    )

    ttk.Label(info_frame, text="Length").grid(row=1, column=0, sticky="w", pady=(6, 0))
    length_var = tk.DoubleVar(value=draft.length_in_minutes)
    length_label_var = tk.StringVar(value=f"{int(draft.length_in_minutes)} minutes")

    def _on_length(value: str) -> None:
        draft.set_length(float(value))
        length_var.set(draft.length_in_minutes)
        length_label_var.set(f"{int(draft.length_in_minutes)} minutes")

    ttk.Scale(
        info_frame,
        from_=MIN_LENGTH_MINUTES,
        to=MAX_LENGTH_MINUTES,
        variable=length_var,
        command=_on_length,
        length=180,
    ).grid(row=1, column=1, sticky="ew", padx=(8, 0), pady=(6, 0))
    ttk.Label(info_frame, textvariable=length_label_var).grid(
        row=1, column=2, sticky="w", padx=(8, 0), pady=(6, 0)
    )

    ttk.Label(info_frame, text="Theme").grid(row=2, column=0, sticky="w", pady=(6, 0))
    theme_var = tk.StringVar(value=draft.theme.display_name)
    theme_combo = ttk.Combobox(
        info_frame,
        textvariable=theme_var,
        values=[t.display_name for t in Theme],
        state="readonly",
        width=14,
    )
    theme_combo.grid(row=2, column=1, sticky="w", padx=(8, 0), pady=(6, 0))

    attendees_frame = ttk.LabelFrame(main, text="Attendees", padding=8)
    attendees_frame.grid(row=1, column=0, sticky="ew", pady=(8, 0))
    attendees_box = tk.Listbox(attendees_frame, height=6, selectmode="extended")
    attendees_box.grid(row=0, column=0, columnspan=3, sticky="ew")

    def _refresh_attendees() -> None:
        attendees_box.delete(0, "end")
        for attendee in draft.attendees:
            attendees_box.insert("end", attendee.name)

    new_attendee_var = tk.StringVar()
    ttk.Entry(attendees_frame, textvariable=new_attendee_var, width=22).grid(
        row=1, column=0, sticky="ew", pady=(6, 0)
    )

    def _add_attendee() -> None:
        if draft.add_attendee(new_attendee_var.get()):
            new_attendee_var.set("")
            _refresh_attendees()

    def _delete_attendees() -> None:
        draft.remove_attendees(attendees_box.curselection())
        _refresh_attendees()

    add_button = ttk.Button(attendees_frame, text="Add", command=_add_attendee)
    add_button.grid(row=1, column=1, padx=(6, 0), pady=(6, 0))
    ttk.Button(attendees_frame, text="Delete", command=_delete_attendees).grid(
        row=1, column=2, padx=(6, 0), pady=(6, 0)
    )

    def _update_add_state(*_args) -> None:
        if new_attendee_var.get().strip():
            add_button.state(["!disabled"])
        else:
            add_button.state(["disabled"])

    new_attendee_var.trace_add("write", _update_add_state)
    _update_add_state()
    _refresh_attendees()

    def _apply_draft() -> DailyScrum:
        draft.title = title_var.get().strip()
        draft.theme = Theme.parse(theme_var.get())
        scrum.update(draft)
        config.scrum.title = scrum.title
        config.scrum.length_in_minutes = scrum.length_in_minutes
        config.scrum.theme = scrum.theme.value
        config.scrum.attendees = scrum.attendee_names
        return scrum

    def _open_meeting() -> None:
        meeting = _apply_draft()
        logger.info(
            "Opening meeting %r (%s min, %s attendees)",
            meeting.title,
            meeting.length_in_minutes,
            len(meeting.attendees),
        )
        _meeting_window(tk, ttk, root, meeting, config, logger)

    ttk.Button(main, text="Start Meeting", command=_open_meeting).grid(
        row=2, column=0, sticky="e", pady=(8, 0)
    )

    def _on_close() -> None:
        _apply_draft()
        try:
            save_config(config_path, config)
        except OSError:
            logger.exception("Config save failed")
        logger.info("GUI closing")
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _on_close)
    root.mainloop()


def _meeting_window(tk, ttk, root, scrum: DailyScrum, config: Config, logger) -> TurnTimer:
    theme = scrum.theme
    window = tk.Toplevel(root)
    window.title(scrum.title or "Meeting")
    window.configure(bg=theme.main_color)
    window.resizable(False, False)

    style = ttk.Style(window)
    style.configure(
        "Meeting.Horizontal.TProgressbar",
        troughcolor=theme.main_color,
        background=theme.accent_color,
    )

    def _label(parent, **kwargs):
        return tk.Label(parent, bg=theme.main_color, fg=theme.accent_color, **kwargs)

    header = tk.Frame(window, bg=theme.main_color, padx=12, pady=10)
    header.grid(row=0, column=0, sticky="ew")

    progress_var = tk.DoubleVar(value=0.0)
    ttk.Progressbar(
        header,
        maximum=1.0,
        variable=progress_var,
        length=280,
        style="Meeting.Horizontal.TProgressbar",
    ).grid(row=0, column=0, columnspan=2, sticky="ew")

    _label(header, text="Seconds Elapsed", font=("TkDefaultFont", 8)).grid(
        row=1, column=0, sticky="w"
    )
    _label(header, text="Seconds Remaining", font=("TkDefaultFont", 8)).grid(
        row=1, column=1, sticky="e"
    )
    elapsed_var = tk.StringVar(value="0")
    remaining_var = tk.StringVar(value="0")
    _label(header, textvariable=elapsed_var).grid(row=2, column=0, sticky="w")
    _label(header, textvariable=remaining_var).grid(row=2, column=1, sticky="e")

    speaker_var = tk.StringVar()
    _label(window, textvariable=speaker_var, font=("TkDefaultFont", 14, "bold")).grid(
        row=1, column=0, pady=(6, 6)
    )

    speakers_box = tk.Listbox(window, height=8, width=36)
    speakers_box.grid(row=2, column=0, padx=12)

    status_var = tk.StringVar()
    _label(window, textvariable=status_var).grid(row=3, column=0, sticky="w", padx=12)

    ticks = TkTickSource(window)
    timer = scrum.timer(
        tick_source=ticks,
        frequency=config.timer.interval,
        on_speaker_changed=DingNotifier(config.sound),
    )

    def _render(snapshot: TimerSnapshot) -> None:
        progress_var.set(
            meeting_progress(snapshot.seconds_elapsed, snapshot.seconds_remaining)
        )
        elapsed_var.set(str(snapshot.seconds_elapsed))
        remaining_var.set(str(snapshot.seconds_remaining))
        status_var.set(f"Time remaining: {accessibility_value(snapshot.seconds_remaining)}")
        speaker_var.set(
            "Meeting finished" if snapshot.is_finished else snapshot.active_speaker_label
        )
        speakers_box.delete(0, "end")
        for speaker in snapshot.speakers:
            mark = "✓" if speaker.is_completed else "•"
            speakers_box.insert("end", f"{mark} {speaker.name}")

    timer.subscribe(_render)
    _render(timer.snapshot())

    buttons = tk.Frame(window, bg=theme.main_color, pady=8)
    buttons.grid(row=4, column=0)
    ttk.Button(buttons, text="Skip Speaker", command=timer.skip_speaker).grid(
        row=0, column=0, padx=(0, 6)
    )

    def _end_meeting() -> None:
        timer.stop()
        window.destroy()

    ttk.Button(buttons, text="End Meeting", command=_end_meeting).grid(row=0, column=1)
    window.protocol("WM_DELETE_WINDOW", _end_meeting)

    timer.reset(scrum.length_in_minutes, scrum.attendee_names)
    timer.start()
    return timer
