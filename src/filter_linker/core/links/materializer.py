from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from filter_linker.core import system
from filter_linker.core.errors import (
    CrossVolumeHardLinkUnsupported,
    ElevationRequiredForSymbolicLink,
    MissingDestinationRoot,
    MissingSourceRoot,
    NoCandidatesFound,
)
from filter_linker.core.links.discovery import resolve_candidates
from filter_linker.core.links.models import (
    FilterGroup,
    LinkKind,
    LinkRequest,
    LinkResult,
    LinkStatus,
    LinkSummary,
)


def check_preconditions(
    source_root: Path,
    destination_root: Path,
    kind: LinkKind,
    *,
    is_elevated: Callable[[], bool] = system.symlink_privilege_held,
    same_volume: Callable[[Path, Path], bool] = system.same_volume,
) -> None:
    """Raise the first fatal condition that prevents linking, if any."""
    if not source_root.is_dir():
        raise MissingSourceRoot(source_root)
    if not destination_root.is_dir():
        raise MissingDestinationRoot(destination_root)
    if kind is LinkKind.HARD:
        if not same_volume(source_root, destination_root):
            raise CrossVolumeHardLinkUnsupported(source_root, destination_root)
    elif not is_elevated():
        raise ElevationRequiredForSymbolicLink()


def create_link(request: LinkRequest) -> LinkResult:
    """Create one link, never replacing an existing entry.

    The existence check and the creation are not atomic: a file that appears
    in between makes the creation fail and is reported as such.
    """
    if os.path.lexists(request.destination):
        return LinkResult(request, LinkStatus.SKIPPED)
    try:
        if request.kind is LinkKind.HARD:
            os.link(request.source, request.destination)
        else:
            os.symlink(request.source, request.destination)
    except OSError as e:
        return LinkResult(request, LinkStatus.FAILED, error=e.strerror or str(e))
    return LinkResult(request, LinkStatus.CREATED)


def materialize(
    source_root: Path,
    destination_root: Path,
    groups: Iterable[FilterGroup],
    use_hard_links: bool = False,
    *,
    is_elevated: Callable[[], bool] = system.symlink_privilege_held,
    same_volume: Callable[[Path, Path], bool] = system.same_volume,
    on_result: Callable[[LinkResult], None] | None = None,
    on_missing: Callable[[FilterGroup, Path], None] | None = None,
) -> LinkSummary:
    """Link the files selected by *groups* from *source_root* into *destination_root*.

    All fatal checks (missing folders, volume mismatch, missing privilege,
    nothing to link) run before the first link is attempted. After that each
    candidate is handled independently: existing destinations are skipped
    and a failed link is recorded without stopping the batch.
    """
    source_root = Path(source_root).absolute()
    destination_root = Path(destination_root).absolute()
    groups = list(groups)
    kind = LinkKind.HARD if use_hard_links else LinkKind.SYMBOLIC

    check_preconditions(
        source_root,
        destination_root,
        kind,
        is_elevated=is_elevated,
        same_volume=same_volume,
    )

    summary = LinkSummary(kind=kind)

    def missing(group: FilterGroup, folder: Path) -> None:
        summary.missing_groups.append(group)
        if on_missing:
            on_missing(group, folder)

    candidates = resolve_candidates(source_root, groups, on_missing=missing)
    if not candidates:
        raise NoCandidatesFound(groups)

    for candidate in candidates:
        request = LinkRequest(
            source=candidate.source,
            destination=destination_root / candidate.name,
            kind=kind,
        )
        result = create_link(request)
        summary.results.append(result)
        if on_result:
            on_result(result)

    return summary
