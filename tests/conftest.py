"""Pytest configuration and fixtures for filekit tests."""

import os
import stat
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Give every test structlog's default configuration.

    CLI tests call configure_logging(), which would otherwise leak a level
    filter into later tests that capture debug events.
    """
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def umask_022() -> Iterator[None]:
    """Run the test with a umask of 022."""
    previous = os.umask(0o022)
    yield
    os.umask(previous)


def make_executable(path: Path, content: str = "#!/bin/sh\nexit 0\n") -> Path:
    """Create an executable script at path, creating parents as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


@pytest.fixture
def pg_tree(tmp_path: Path) -> dict[str, Path]:
    """Create a usr/bin directory holding pg_dump and a bin -> usr/bin link.

    Structure:
        usr/
            bin/
                pg_dump
        bin -> usr/bin
        opt/
            pg/
                bin/
                    pg_dump
    """
    usr_bin = tmp_path / "usr" / "bin"
    make_executable(usr_bin / "pg_dump")

    bin_link = tmp_path / "bin"
    bin_link.symlink_to(usr_bin, target_is_directory=True)

    opt_bin = tmp_path / "opt" / "pg" / "bin"
    make_executable(opt_bin / "pg_dump")

    return {"usr_bin": usr_bin, "bin": bin_link, "opt_bin": opt_bin}
