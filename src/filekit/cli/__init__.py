"""CLI entrypoints for filekit."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from filekit.cli.files import app as files_app
from filekit.cli.paths import app as paths_app
from filekit.utils.log import configure_logging

app: TyperType = typer.Typer(
    help="Failure-aware file utilities.",
    no_args_is_help=True,
)

LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Minimum log level (debug .. critical)."),
]
JsonLogsFlag = Annotated[
    bool,
    typer.Option("--json-logs", help="Log JSON lines on stderr."),
]


@app.callback()
def main(log_level: LogLevelOption = None, json_logs: JsonLogsFlag = False) -> None:
    """Configure logging before running a command."""

    try:
        configure_logging(log_level, json=True if json_logs else None)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


app.add_typer(files_app, name="files")
app.add_typer(paths_app, name="path")

__all__ = ["app", "files_app", "paths_app"]
