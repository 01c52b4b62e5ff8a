"""Runtime settings for filekit.

Settings are read from ``FILEKIT_*`` environment variables and validated
with Pydantic v2.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from filekit.core.constants import SEARCH_PATH_VAR

__all__ = ["FileKitSettings", "load_settings"]

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

_TRUTHY = ("1", "true", "yes")


class FileKitSettings(BaseModel):
    """Settings controlling logging and executable search.

    Attributes:
        log_level: Minimum level for emitted log events
        log_json: Render log events as JSON lines instead of console text
        search_path_var: Environment variable searched for executables
        debug: Shortcut forcing ``log_level`` to debug
    """

    log_level: LogLevel = "info"
    log_json: bool = False
    search_path_var: str = Field(default=SEARCH_PATH_VAR, min_length=1)
    debug: bool = False

    model_config = {"frozen": True}

    @field_validator("log_level", mode="before")
    @classmethod
    def lower_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def effective_level(self) -> LogLevel:
        """Log level after applying the debug toggle."""
        return "debug" if self.debug else self.log_level


def load_settings(environ: Mapping[str, str] | None = None) -> FileKitSettings:
    """Build settings from the environment.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Validated FileKitSettings
    """

    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    if env.get("FILEKIT_LOG_LEVEL"):
        values["log_level"] = env["FILEKIT_LOG_LEVEL"]
    if env.get("FILEKIT_SEARCH_PATH_VAR"):
        values["search_path_var"] = env["FILEKIT_SEARCH_PATH_VAR"]
    values["log_json"] = env.get("FILEKIT_LOG_JSON", "").lower() in _TRUTHY
    values["debug"] = env.get("FILEKIT_DEBUG", "").lower() in _TRUTHY

    return FileKitSettings.model_validate(values)
