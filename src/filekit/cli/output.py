"""Error reporting shared by the CLI command groups."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")

from filekit.core.constants import EXIT_CODE_BAD_ARGS
from filekit.core.errors import FileKitError


def fail(exc: FileKitError) -> NoReturn:
    """Print ``exc`` in red on stderr and exit with EXIT_CODE_BAD_ARGS."""
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    raise typer.Exit(code=EXIT_CODE_BAD_ARGS) from exc
