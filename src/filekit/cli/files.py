"""CLI commands for reading, writing and moving files."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from filekit.cli.output import fail
from filekit.core.constants import DIR_CREATE_MODE
from filekit.core.errors import FileKitError
from filekit.fs.dirs import ensure_empty_dir
from filekit.fs.file_io import append_whole_file, read_whole_file, write_whole_file
from filekit.fs.fs_ops import duplicate, move
from filekit.fs.schemas import TransferResult

app: TyperType = typer.Typer(help="Read, write, move and copy files.")

PathArgument = Annotated[str, typer.Argument(help="File path.")]
SourceArgument = Annotated[str, typer.Argument(help="Source file.")]
DestinationArgument = Annotated[str, typer.Argument(help="Destination file.")]
TextArgument = Annotated[str, typer.Argument(help="Text to write (UTF-8).")]
ModeOption = Annotated[
    str,
    typer.Option("--mode", help="Octal permission bits for the directory."),
]


def _report(result: TransferResult) -> None:
    error = result.to_error()
    if error is not None:
        fail(error)

    message = f"{result.src} -> {result.dst} ({result.op})"
    if result.reason:
        message += f": {result.reason}"
    typer.secho(message, fg=typer.colors.GREEN)


def read(path: PathArgument) -> None:
    """Print the contents of a file."""

    try:
        buffer = read_whole_file(path)
    except FileKitError as exc:
        fail(exc)
    typer.echo(buffer.contents, nl=False)


def write(path: PathArgument, text: TextArgument) -> None:
    """Replace a file's contents with TEXT."""

    try:
        write_whole_file(path, text.encode())
    except FileKitError as exc:
        fail(exc)


def append(path: PathArgument, text: TextArgument) -> None:
    """Append TEXT to a file."""

    try:
        append_whole_file(path, text.encode())
    except FileKitError as exc:
        fail(exc)


def mv(src: SourceArgument, dst: DestinationArgument) -> None:
    """Move a file, copying across filesystems when needed."""

    _report(move(src, dst))


def cp(src: SourceArgument, dst: DestinationArgument) -> None:
    """Copy a file along with its owner, group and mode."""

    _report(duplicate(src, dst))


def mkdir_empty(
    path: PathArgument,
    mode: ModeOption = f"{DIR_CREATE_MODE:o}",
) -> None:
    """Create PATH as an empty directory, clearing it if it exists."""

    try:
        bits = int(mode, 8)
    except ValueError as exc:
        raise typer.BadParameter(f"not an octal mode: {mode}") from exc

    try:
        ensure_empty_dir(path, bits)
    except FileKitError as exc:
        fail(exc)


app.command("read")(read)
app.command("write")(write)
app.command("append")(append)
app.command("mv")(mv)
app.command("cp")(cp)
app.command("mkdir-empty")(mkdir_empty)
