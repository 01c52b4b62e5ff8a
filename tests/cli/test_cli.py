"""CLI tests for the filekit command groups."""

from __future__ import annotations

import os
from pathlib import Path

from typer.testing import CliRunner

from filekit.cli import app

runner = CliRunner()


def test_write_then_read(tmp_path: Path) -> None:
    path = tmp_path / "note.txt"

    written = runner.invoke(app, ["files", "write", str(path), "hello"])
    appended = runner.invoke(app, ["files", "append", str(path), " world"])
    result = runner.invoke(app, ["files", "read", str(path)])

    assert written.exit_code == 0
    assert appended.exit_code == 0
    assert result.exit_code == 0
    assert "hello world" in result.stdout


def test_read_missing_file_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["files", "read", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1


def test_mv(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_text("content")

    result = runner.invoke(app, ["files", "mv", str(src), str(dst)])

    assert result.exit_code == 0
    assert not src.exists()
    assert dst.read_text() == "content"


def test_mv_onto_existing_destination_fails(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_text("new")
    dst.write_text("old")

    result = runner.invoke(app, ["files", "mv", str(src), str(dst)])

    assert result.exit_code == 1
    assert src.read_text() == "new"
    assert dst.read_text() == "old"


def test_cp(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_text("content")
    src.chmod(0o600)

    result = runner.invoke(app, ["files", "cp", str(src), str(dst)])

    assert result.exit_code == 0
    assert src.exists()
    assert dst.stat().st_mode & 0o777 == 0o600


def test_mkdir_empty(tmp_path: Path) -> None:
    target = tmp_path / "work"
    target.mkdir()
    (target / "stale.txt").write_text("x")

    result = runner.invoke(
        app, ["files", "mkdir-empty", str(target), "--mode", "750"]
    )

    assert result.exit_code == 0
    assert list(target.iterdir()) == []


def test_mkdir_empty_rejects_bad_mode(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["files", "mkdir-empty", str(tmp_path / "work"), "--mode", "rwx"]
    )

    assert result.exit_code == 2
    assert not (tmp_path / "work").exists()


def test_which_deduplicates(tmp_path: Path) -> None:
    usr_bin = tmp_path / "usr" / "bin"
    usr_bin.mkdir(parents=True)
    (usr_bin / "pg_dump").write_text("#!/bin/sh\n")
    bin_link = tmp_path / "bin"
    bin_link.symlink_to(usr_bin, target_is_directory=True)
    search_path = os.pathsep.join([str(usr_bin), str(bin_link)])

    deduped = runner.invoke(
        app, ["path", "which", "pg_dump", "--all"], env={"PATH": search_path}
    )
    raw = runner.invoke(
        app,
        ["path", "which", "pg_dump", "--all", "--no-dedup"],
        env={"PATH": search_path},
    )

    assert deduped.exit_code == 0
    assert deduped.stdout.splitlines() == [
        os.path.realpath(usr_bin / "pg_dump")
    ]
    assert raw.exit_code == 0
    assert raw.stdout.splitlines() == [
        f"{usr_bin}/pg_dump",
        f"{bin_link}/pg_dump",
    ]


def test_which_table(tmp_path: Path) -> None:
    (tmp_path / "tool").write_text("x")

    result = runner.invoke(
        app, ["path", "which", "tool", "--table"], env={"PATH": str(tmp_path)}
    )

    assert result.exit_code == 0
    assert "1 found" in result.stdout


def test_which_not_found(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["path", "which", "pg_dump"], env={"PATH": str(tmp_path)}
    )

    assert result.exit_code == 1


def test_realpath_and_normalize(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x")
    link = tmp_path / "link.txt"
    link.symlink_to(target)
    future = str(tmp_path / "later.json")

    resolved = runner.invoke(app, ["path", "realpath", str(link)])
    missing = runner.invoke(app, ["path", "realpath", future])
    normalized = runner.invoke(app, ["path", "normalize", future])

    assert resolved.exit_code == 0
    assert resolved.stdout.strip() == os.path.realpath(target)
    assert missing.exit_code == 1
    assert normalized.exit_code == 0
    assert normalized.stdout.strip() == future


def test_canonicalize() -> None:
    result = runner.invoke(app, ["path", "canonicalize", "/usr//lib/../bin/"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "/usr/bin"


def test_program_path(tmp_path: Path) -> None:
    absolute = runner.invoke(
        app, ["path", "program-path", "--argv0", "/opt/copydb/bin/copydb"]
    )
    unknown = runner.invoke(
        app,
        ["path", "program-path", "--argv0", "copydb"],
        env={"PATH": str(tmp_path)},
    )

    assert absolute.exit_code == 0
    assert absolute.stdout.strip() == "/opt/copydb/bin/copydb"
    assert unknown.exit_code == 12


def test_unknown_log_level() -> None:
    result = runner.invoke(app, ["--log-level", "chatty", "path", "canonicalize", "/"])

    assert result.exit_code == 2
