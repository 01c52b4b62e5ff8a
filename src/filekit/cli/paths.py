"""CLI commands for executable lookup and path resolution."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from rich.console import Console
from rich.table import Table

from filekit.cli.output import fail
from filekit.core.constants import EXIT_CODE_BAD_ARGS
from filekit.core.errors import FileKitError
from filekit.core.settings import load_settings
from filekit.fs.paths import canonicalize, normalize, real_path
from filekit.fs.search import (
    deduplicate_symlinks,
    enumerate_candidates,
    program_absolute_path,
)

app: TyperType = typer.Typer(help="Find executables and resolve paths.")

console = Console()

NameArgument = Annotated[str, typer.Argument(help="Executable name.")]
PathArgument = Annotated[str, typer.Argument(help="Path to resolve.")]
AllFlag = Annotated[
    bool,
    typer.Option("--all", help="List every match instead of the first one."),
]
DedupFlag = Annotated[
    bool,
    typer.Option(
        "--dedup/--no-dedup",
        help="Collapse matches that resolve to the same file.",
    ),
]
TableFlag = Annotated[
    bool,
    typer.Option("--table", help="Render matches as a table."),
]
Argv0Option = Annotated[
    str | None,
    typer.Option("--argv0", help="Invocation string to resolve."),
]


def which(
    name: NameArgument,
    show_all: AllFlag = False,
    dedup: DedupFlag = True,
    table: TableFlag = False,
) -> None:
    """Locate NAME along the search path."""

    settings = load_settings()
    try:
        found = enumerate_candidates(name, var=settings.search_path_var)
        if dedup:
            found = deduplicate_symlinks(found)
    except FileKitError as exc:
        fail(exc)

    if not found.matches:
        typer.secho(
            f"{name} not found in {settings.search_path_var}",
            err=True,
            fg=typer.colors.YELLOW,
        )
        raise typer.Exit(code=EXIT_CODE_BAD_ARGS)

    matches = found.matches if show_all else found.matches[:1]

    if table:
        grid = Table(title=f"{name} ({found.found} found)")
        grid.add_column("#", justify="right")
        grid.add_column("Path", overflow="fold")
        for index, match in enumerate(matches, start=1):
            grid.add_row(str(index), match)
        console.print(grid)
        return

    for match in matches:
        typer.echo(match)


def realpath(path: PathArgument) -> None:
    """Print the symlink-free absolute form of PATH."""

    try:
        typer.echo(real_path(path))
    except FileKitError as exc:
        fail(exc)


def normalize_command(path: PathArgument) -> None:
    """Print the real path of PATH, or PATH itself when it does not exist."""

    try:
        typer.echo(normalize(path))
    except FileKitError as exc:
        fail(exc)


def canonicalize_command(path: PathArgument) -> None:
    """Print PATH with redundant separators and dot segments collapsed."""

    typer.echo(canonicalize(path))


def program_path(argv0: Argv0Option = None) -> None:
    """Print the absolute path of the running program."""

    try:
        typer.echo(program_absolute_path(argv0))
    except FileKitError as exc:
        fail(exc)


app.command("which")(which)
app.command("realpath")(realpath)
app.command("normalize")(normalize_command)
app.command("canonicalize")(canonicalize_command)
app.command("program-path")(program_path)
