"""CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Callable, Optional

from .config import Config, default_config, load_config, save_config
from .logging_utils import setup_logging
from .renderer import render_meeting, render_turn_plan
from .sound import DingNotifier
from .timer import PollingTickSource, TimerSnapshot, TurnTimer


def _load_or_default(path: str) -> Config:
    if os.path.exists(path):
        try:
            return load_config(path)
        except Exception:
            logging.getLogger("scrumdinger").exception("Config load failed: %s", path)
    return default_config()


def run_meeting(
    timer: TurnTimer,
    title: str,
    out=None,
    sleep: Callable[[float], None] = time.sleep,
) -> TimerSnapshot:
    """Drive ``timer`` on the calling thread until it finishes or is interrupted."""

    stream = out or sys.stdout
    ticks = timer.tick_source

    def _draw(snapshot: TimerSnapshot) -> None:
        stream.write(render_meeting(title, snapshot) + "\n\n")
        stream.flush()

    unsubscribe = timer.subscribe(_draw)
    try:
        timer.start()
        while ticks.running:
            ticks.poll()
            sleep(ticks.interval)
    except KeyboardInterrupt:
        stream.write("Meeting ended early.\n")
    finally:
        timer.stop()
        unsubscribe()
    return timer.snapshot()


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(prog="scrumdinger")
    sub = parser.add_subparsers(dest="command")

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config", default="scrumdinger_config.yml", help="Config.")
    run_cmd.add_argument("--title", help="Meeting title.")
    run_cmd.add_argument("--length", type=int, help="Meeting length in minutes.")
    run_cmd.add_argument(
        "--attendee",
        action="append",
        help="Attendee name. Repeat for each attendee.",
    )
    run_cmd.add_argument("--no-sound", action="store_true", help="Disable the ding.")

    plan_cmd = sub.add_parser("plan")
    plan_cmd.add_argument("--config", default="scrumdinger_config.yml", help="Config.")
    plan_cmd.add_argument("--length", type=int, help="Meeting length in minutes.")
    plan_cmd.add_argument("--attendee", action="append", help="Attendee name.")

    config_cmd = sub.add_parser("config")
    config_cmd.add_argument(
        "--path", default="scrumdinger_config.yml", help="Where to write."
    )

    gui_cmd = sub.add_parser("gui")
    gui_cmd.add_argument("--config", default="scrumdinger_config.yml", help="Config.")

    args = parser.parse_args(argv)

    if args.command in ("run", "plan"):
        cfg = _load_or_default(args.config)
        length = args.length if args.length is not None else cfg.scrum.length_in_minutes
        if length < 0:
            if args.length is not None:
                parser.error("--length must be >= 0")
            parser.error(f"scrum.length_in_minutes in {args.config} must be >= 0")
        names = args.attendee if args.attendee is not None else cfg.scrum.attendees

        if args.command == "plan":
            print(render_turn_plan(length, names))
            return 0

        logger, log_path = setup_logging(
            log_dir=cfg.log_dir,
            level=logging.DEBUG if cfg.debug_logging else logging.INFO,
        )
        logger.info("CLI run (log: %s)", log_path)
        if args.no_sound:
            cfg.sound.enabled = False
        timer = TurnTimer(
            length,
            names,
            tick_source=PollingTickSource(),
            frequency=cfg.timer.interval,
            on_speaker_changed=DingNotifier(cfg.sound),
        )
        run_meeting(timer, args.title or cfg.scrum.title)
        return 0

    if args.command == "config":
        if os.path.exists(args.path):
            print(f"Config already exists: {args.path}")
            return 1
        save_config(args.path, default_config())
        print(f"Wrote {args.path}")
        return 0

    if args.command == "gui":
        from .gui import launch_gui

        launch_gui(args.config)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
