from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from filter_linker.core.links.models import Candidate, FilterGroup

FILTER_EXT = ".filter"
SOUND_EXT = ".mp3"

DARKMODE_DIR = "(STYLE) DARKMODE"
CUSTOMSOUNDS_DIR = "(STYLE) CUSTOMSOUNDS"

# Processing order for accumulated groups, independent of user order
_GROUP_ORDER = (FilterGroup.DEFAULT, FilterGroup.DARKMODE, FilterGroup.CUSTOMSOUNDS)


def group_folder(source_root: Path, group: FilterGroup) -> Path:
    if group is FilterGroup.DARKMODE:
        return source_root / DARKMODE_DIR
    if group is FilterGroup.CUSTOMSOUNDS:
        return source_root / CUSTOMSOUNDS_DIR
    return source_root


def group_extensions(group: FilterGroup) -> tuple[str, ...]:
    if group in (FilterGroup.CUSTOMSOUNDS, FilterGroup.ALL):
        return (FILTER_EXT, SOUND_EXT)
    return (FILTER_EXT,)


def _matches(name: str, extensions: tuple[str, ...]) -> bool:
    return name.lower().endswith(extensions)


def list_folder(folder: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Files directly inside *folder* with one of *extensions*, sorted by name."""
    return sorted(
        (p for p in folder.iterdir() if p.is_file() and _matches(p.name, extensions)),
        key=lambda p: p.name,
    )


def walk_tree(root: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Recursively find matching files under *root*.

    Directories are visited in sorted order so results are stable.
    """
    found: list[Path] = []
    for dirpath, dirs, files in os.walk(root):
        dirs.sort()
        for f in sorted(files):
            if _matches(f, extensions):
                found.append(Path(dirpath) / f)
    return found


def resolve_candidates(
    source_root: Path,
    groups: Iterable[FilterGroup],
    on_missing: Callable[[FilterGroup, Path], None] | None = None,
) -> list[Candidate]:
    """Turn a filter-group selection into the list of files to link.

    ``all`` takes precedence over every other group: when present, only the
    recursive enumeration of ``source_root`` is returned. Otherwise the
    selected groups are scanned in the fixed order default, darkmode,
    customsounds and their files are concatenated. A group whose folder does
    not exist is passed to *on_missing* and contributes nothing.
    """
    source_root = Path(source_root).absolute()
    selected = set(groups)

    if FilterGroup.ALL in selected:
        return [
            Candidate(name=p.name, source=p, group=FilterGroup.ALL)
            for p in walk_tree(source_root, group_extensions(FilterGroup.ALL))
        ]

    candidates: list[Candidate] = []
    for group in _GROUP_ORDER:
        if group not in selected:
            continue
        folder = group_folder(source_root, group)
        if not folder.is_dir():
            if on_missing:
                on_missing(group, folder)
            continue
        candidates.extend(
            Candidate(name=p.name, source=p, group=group)
            for p in list_folder(folder, group_extensions(group))
        )
    return candidates
