"""User configuration: defaults for the link command, read from YAML."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from filter_linker.core.errors import ConfigError
from filter_linker.core.links.models import FilterGroup

APP_NAME = "filter-linker"


def default_destination() -> Path:
    """Game configuration folder inside the user's Documents."""
    return Path.home() / "Documents" / "My Games" / "Path of Exile 2"


def get_user_config_dir() -> Path:
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def default_config_path() -> Path:
    return get_user_config_dir() / "config.yaml"


def parse_filter_set(values: str | list[str] | None) -> list[FilterGroup]:
    """Parse group names given as a comma string and/or a list of strings.

    Empty input yields ``[default]``. Order is preserved, duplicates dropped.

    Raises:
        ValueError: on an unknown group name.
    """
    if values is None:
        return [FilterGroup.DEFAULT]
    if isinstance(values, str):
        values = [values]

    groups: list[FilterGroup] = []
    for value in values:
        for name in str(value).split(","):
            name = name.strip().lower()
            if not name:
                continue
            try:
                group = FilterGroup(name)
            except ValueError:
                valid = ", ".join(g.value for g in FilterGroup)
                raise ValueError(f"Unknown filter set '{name}' (choose from: {valid})")
            if group not in groups:
                groups.append(group)
    return groups or [FilterGroup.DEFAULT]


@dataclass
class LinkerConfig:
    destination: Path = field(default_factory=default_destination)
    use_hard_links: bool = False
    filter_set: list[FilterGroup] = field(default_factory=lambda: [FilterGroup.DEFAULT])


def load_config(path: Path | None = None) -> LinkerConfig:
    """Load configuration from *path* (or the per-user default location).

    A missing file yields the built-in defaults.

    Raises:
        ConfigError: if the file cannot be parsed or holds invalid values.
    """
    path = path if path is not None else default_config_path()
    if not path.exists():
        return LinkerConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if raw is None:
        return LinkerConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = LinkerConfig()

    destination = raw.get("destination")
    if destination is not None:
        if not isinstance(destination, str) or not destination.strip():
            raise ConfigError("'destination' must be a non-empty path string")
        config.destination = Path(destination).expanduser()

    use_hard_links = raw.get("use_hard_links")
    if use_hard_links is not None:
        if not isinstance(use_hard_links, bool):
            raise ConfigError("'use_hard_links' must be true or false")
        config.use_hard_links = use_hard_links

    filter_set = raw.get("filter_set")
    if filter_set is not None:
        if not isinstance(filter_set, (str, list)):
            raise ConfigError("'filter_set' must be a list or a comma-separated string")
        try:
            config.filter_set = parse_filter_set(filter_set)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return config
