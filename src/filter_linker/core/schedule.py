"""Registration of a periodic ``git pull`` for the filter repository.

Windows uses the Task Scheduler through ``schtasks``; other platforms get a
tagged line in the user's crontab.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from filter_linker.core.errors import (
    GitNotFound,
    RepositoryNotFound,
    ScheduleError,
    TaskAlreadyExists,
)

DEFAULT_TASK_NAME = "filter-linker-update"
CRON_MARKER = "# filter-linker:"

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True)
class PullSchedule:
    repo: Path
    name: str = DEFAULT_TASK_NAME
    every_hours: int = 1
    git: str = "git"

    @property
    def marker(self) -> str:
        return f"{CRON_MARKER}{self.name}"


def resolve_git(executable: str = "git") -> str:
    found = shutil.which(executable)
    if found is None:
        raise GitNotFound(executable)
    return found


def validate_schedule(schedule: PullSchedule) -> None:
    if not (schedule.repo / ".git").exists():
        raise RepositoryNotFound(schedule.repo)
    if not 1 <= schedule.every_hours <= 23:
        raise ScheduleError("Interval must be between 1 and 23 hours")
    if not schedule.name or any(c in schedule.name for c in "\\/\n"):
        raise ScheduleError(f"Invalid task name: {schedule.name!r}")


def schtasks_command(schedule: PullSchedule, force: bool = False) -> list[str]:
    action = f'"{schedule.git}" -C "{schedule.repo}" pull'
    cmd = [
        "schtasks", "/Create",
        "/TN", schedule.name,
        "/TR", action,
        "/SC", "HOURLY",
        "/MO", str(schedule.every_hours),
    ]
    if force:
        cmd.append("/F")
    return cmd


def cron_line(schedule: PullSchedule) -> str:
    action = f"{shlex.quote(schedule.git)} -C {shlex.quote(str(schedule.repo))} pull"
    # cron turns an unescaped % into a newline
    action = action.replace("%", "\\%")
    return f"0 */{schedule.every_hours} * * * {action} {schedule.marker}"


def merge_crontab(current: str, schedule: PullSchedule, force: bool = False) -> str:
    """Return crontab text with the schedule's line added or replaced.

    Raises:
        TaskAlreadyExists: if a line with the same marker exists and *force* is off.
    """
    lines = current.splitlines()
    kept = [line for line in lines if not line.rstrip().endswith(schedule.marker)]
    if len(kept) != len(lines) and not force:
        raise TaskAlreadyExists(schedule.name)
    kept.append(cron_line(schedule))
    return "\n".join(kept) + "\n"


def _check(proc: subprocess.CompletedProcess, what: str) -> None:
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()
        raise ScheduleError(f"{what} failed (exit {proc.returncode}): {detail}")


def _register_windows(schedule: PullSchedule, force: bool, run: Runner) -> str:
    query = run(
        ["schtasks", "/Query", "/TN", schedule.name],
        capture_output=True, text=True,
    )
    if query.returncode == 0 and not force:
        raise TaskAlreadyExists(schedule.name)

    cmd = schtasks_command(schedule, force=force or query.returncode == 0)
    _check(run(cmd, capture_output=True, text=True), "schtasks")
    return subprocess.list2cmdline(cmd)


def _register_cron(schedule: PullSchedule, force: bool, run: Runner) -> str:
    listing = run(["crontab", "-l"], capture_output=True, text=True)
    # crontab -l exits non-zero when the user has no crontab yet
    current = listing.stdout if listing.returncode == 0 else ""
    new_tab = merge_crontab(current, schedule, force=force)
    _check(run(["crontab", "-"], input=new_tab, capture_output=True, text=True), "crontab")
    return cron_line(schedule)


def describe(schedule: PullSchedule, force: bool = False, platform: str | None = None) -> str:
    """The command or crontab line that :func:`register` would install."""
    platform = platform or sys.platform
    if platform == "win32":
        return subprocess.list2cmdline(schtasks_command(schedule, force=force))
    return cron_line(schedule)


def register(
    schedule: PullSchedule,
    force: bool = False,
    run: Runner = subprocess.run,
    platform: str | None = None,
) -> str:
    """Install *schedule* with the platform scheduler.

    Returns the registered command (Windows) or crontab line (elsewhere).
    """
    validate_schedule(schedule)
    platform = platform or sys.platform
    if platform == "win32":
        return _register_windows(schedule, force, run)
    return _register_cron(schedule, force, run)
