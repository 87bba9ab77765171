from __future__ import annotations

from importlib.metadata import version
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from filter_linker.core import system
from filter_linker.core.config import load_config, parse_filter_set
from filter_linker.core.errors import ConfigError, LinkerError, ScheduleError
from filter_linker.core.links import materialize
from filter_linker.core.report import ConsoleSink, summary_json
from filter_linker.core.schedule import (
    DEFAULT_TASK_NAME,
    PullSchedule,
    describe,
    register,
    resolve_git,
    validate_schedule,
)

EXIT_FATAL = 1
EXIT_PARTIAL = 3


def _version_callback(value: bool) -> None:
    if value:
        print(f"filter-linker {version('filter-linker')}")
        raise typer.Exit()


app = typer.Typer(
    name="filter-linker",
    help="Link loot-filter files from a repository into the game folder and keep them updated.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=EXIT_FATAL)


@app.command("link")
def link(
    source_root: Path = typer.Argument(
        ...,
        help="Folder of the filter repository",
    ),
    destination: Path = typer.Option(
        None,
        "--destination",
        "-d",
        help="Folder to create the links in (default: Documents/My Games/Path of Exile 2)",
    ),
    use_hard_links: bool = typer.Option(
        False,
        "--use-hard-links",
        is_flag=True,
        help="Create hard links (same volume only) instead of symbolic links",
    ),
    use_symbolic_links: bool = typer.Option(
        False,
        "--use-symbolic-links",
        is_flag=True,
        help="Create symbolic links even if the config file asks for hard links",
    ),
    filter_set: list[str] = typer.Option(
        None,
        "--filter-set",
        "-s",
        help="Filter sets to link: default, darkmode, customsounds, all (comma-separated or repeated)",
    ),
    config_file: Path = typer.Option(
        None,
        "--config",
        help="Path to a YAML config file (default: per-user config folder)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        is_flag=True,
        help="Print the results as JSON",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        is_flag=True,
        help="Only print the final summary",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        is_flag=True,
        help=f"Exit with code {EXIT_PARTIAL} if any link could not be created",
    ),
):
    """Create links to filter files, skipping files that already exist."""
    if use_hard_links and use_symbolic_links:
        raise typer.BadParameter("--use-hard-links and --use-symbolic-links are mutually exclusive")

    if config_file is not None:
        config_file = config_file.expanduser()
    try:
        config = load_config(config_file)
    except ConfigError as e:
        _fail(str(e))

    if filter_set:
        try:
            groups = parse_filter_set(filter_set)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--filter-set")
    else:
        groups = config.filter_set

    if use_hard_links:
        hard = True
    elif use_symbolic_links:
        hard = False
    else:
        hard = config.use_hard_links

    if destination is None:
        destination = config.destination
    destination = destination.expanduser()
    source_root = source_root.expanduser()

    sink = ConsoleSink(err_console if json_output else console, quiet=quiet or json_output)

    try:
        summary = materialize(
            source_root,
            destination,
            groups,
            use_hard_links=hard,
            is_elevated=system.symlink_privilege_held,
            same_volume=system.same_volume,
            on_result=sink.result,
            on_missing=sink.missing,
        )
    except LinkerError as e:
        _fail(str(e))

    if json_output:
        typer.echo(summary_json(summary))
    else:
        sink.summary(summary)

    if strict and summary.failed:
        raise typer.Exit(code=EXIT_PARTIAL)


@app.command("schedule-update")
def schedule_update(
    repo: Path = typer.Argument(
        ...,
        help="Git checkout of the filter repository",
    ),
    name: str = typer.Option(
        DEFAULT_TASK_NAME,
        "--name",
        "-n",
        help="Name of the scheduled task",
    ),
    every_hours: int = typer.Option(
        1,
        "--every-hours",
        "-e",
        min=1,
        max=23,
        help="Run git pull every N hours",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        is_flag=True,
        help="Replace an existing task with the same name",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        is_flag=True,
        help="Show what would be registered without registering it",
    ),
):
    """Register a scheduled task that runs git pull in the repository."""
    try:
        schedule = PullSchedule(
            repo=repo.expanduser().absolute(),
            name=name,
            every_hours=every_hours,
            git=resolve_git(),
        )
        if dry_run:
            validate_schedule(schedule)
            console.print(escape(describe(schedule, force=force)))
            return
        registered = register(schedule, force=force)
    except ScheduleError as e:
        _fail(str(e))

    console.print(f"[green]Registered[/green] '{escape(name)}': {escape(registered)}")


@app.callback()
def default(
    version_flag: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        is_eager=True,
        callback=_version_callback,
        is_flag=True,
    ),
):
    """Filter repository linking and update scheduling."""
