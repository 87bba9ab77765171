"""Fatal errors raised by the core and reported by the CLI."""

from __future__ import annotations

from pathlib import Path


class LinkerError(Exception):
    """Base class for conditions that abort a link run before any mutation."""


class MissingSourceRoot(LinkerError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Source folder does not exist: {path}")


class MissingDestinationRoot(LinkerError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Destination folder does not exist: {path}")


class CrossVolumeHardLinkUnsupported(LinkerError):
    def __init__(self, source: Path, destination: Path):
        self.source = source
        self.destination = destination
        super().__init__(
            f"Hard links require source and destination on the same volume "
            f"({source} and {destination} are not). Use symbolic links instead."
        )


class ElevationRequiredForSymbolicLink(LinkerError):
    def __init__(self):
        super().__init__(
            "Creating symbolic links requires an elevated (administrator) session. "
            "Re-run elevated or pass --use-hard-links."
        )


class NoCandidatesFound(LinkerError):
    def __init__(self, groups):
        self.groups = list(groups)
        names = ", ".join(g.value for g in self.groups)
        super().__init__(f"No filter files found for filter set: {names}")


class ConfigError(Exception):
    """Invalid or unreadable configuration file."""


class ScheduleError(Exception):
    """Base class for update-scheduler failures."""


class RepositoryNotFound(ScheduleError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class GitNotFound(ScheduleError):
    def __init__(self, executable: str):
        super().__init__(f"git executable not found on PATH: {executable}")


class TaskAlreadyExists(ScheduleError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"A scheduled task named '{name}' already exists. Use --force to replace it."
        )
