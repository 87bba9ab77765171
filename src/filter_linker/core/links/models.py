from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class FilterGroup(str, enum.Enum):
    """Named selections of files to link."""

    DEFAULT = "default"
    DARKMODE = "darkmode"
    CUSTOMSOUNDS = "customsounds"
    ALL = "all"


class LinkKind(str, enum.Enum):
    HARD = "hard"
    SYMBOLIC = "symbolic"


class LinkStatus(str, enum.Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Candidate:
    """A discovered file eligible for linking."""

    name: str
    source: Path  # Always absolute
    group: FilterGroup


@dataclass(frozen=True)
class LinkRequest:
    source: Path
    destination: Path
    kind: LinkKind


@dataclass(frozen=True)
class LinkResult:
    """Outcome of a single link attempt."""

    request: LinkRequest
    status: LinkStatus
    error: str | None = None  # Set only when status is FAILED

    @property
    def name(self) -> str:
        return self.request.destination.name


@dataclass
class LinkSummary:
    """All outcomes of one materializer run, in discovery order."""

    kind: LinkKind
    results: list[LinkResult] = field(default_factory=list)
    missing_groups: list[FilterGroup] = field(default_factory=list)

    def _count(self, status: LinkStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def created(self) -> int:
        return self._count(LinkStatus.CREATED)

    @property
    def skipped(self) -> int:
        return self._count(LinkStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(LinkStatus.FAILED)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "created": self.created,
            "skipped": self.skipped,
            "failed": self.failed,
            "missing_groups": [g.value for g in self.missing_groups],
            "results": [
                {
                    "name": r.name,
                    "source": str(r.request.source),
                    "destination": str(r.request.destination),
                    "status": r.status.value,
                    "error": r.error,
                }
                for r in self.results
            ],
        }
