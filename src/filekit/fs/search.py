"""Executable lookup along the search path.

Candidate enumeration is purely lexical: each search-path entry is joined
with the file name, canonicalized and kept when it exists, without
following symlinks. ``deduplicate_symlinks`` then resolves real paths so a
directory that links into another one (``/bin -> /usr/bin`` on modern
Debian, for instance) does not report the same executable twice.
"""

import errno
import os
import sys
from collections.abc import Mapping

import structlog

from filekit.core.constants import (
    EXIT_CODE_INTERNAL_ERROR,
    MAXPATHSIZE,
    MAXPGPATH,
    SEARCH_PATH_SEPARATOR,
    SEARCH_PATH_VAR,
)
from filekit.core.errors import (
    CapacityExceeded,
    IOFailure,
    NotFound,
    SearchPathUnavailable,
)
from filekit.fs.file_io import exists
from filekit.fs.paths import canonicalize, join_path_components, real_path
from filekit.fs.schemas import SearchResult
from filekit.utils.log import log_at

logger = structlog.get_logger(__name__)

#: Symlinks to the running executable, by platform (Linux, FreeBSD, Solaris)
PROC_SELF_ENTRIES: tuple[str, ...] = (
    "/proc/self/exe",
    "/proc/curproc/file",
    "/proc/self/path/a.out",
)


def read_search_path(
    var: str = SEARCH_PATH_VAR,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return a private copy of the search-path variable.

    Args:
        var: Environment variable to read
        environ: Mapping to read from (defaults to ``os.environ``)

    Raises:
        SearchPathUnavailable: If the variable is unset
        CapacityExceeded: If the value is longer than MAXPATHSIZE
    """
    env = os.environ if environ is None else environ
    value = env.get(var)

    if value is None:
        logger.error("search.env_unset", var=var)
        raise SearchPathUnavailable(
            f"Failed to get value for environment variable '{var}', which is unset"
        )

    length = len(value.encode())
    if length >= MAXPATHSIZE:
        logger.error("search.env_too_long", var=var, length=length, limit=MAXPATHSIZE)
        raise CapacityExceeded(
            f"Environment variable '{var}' is {length} bytes long, "
            f"values are limited to {MAXPATHSIZE - 1} bytes",
            limit=MAXPATHSIZE,
            actual=length,
        )

    return value


def enumerate_candidates(
    filename: str,
    *,
    environ: Mapping[str, str] | None = None,
    var: str = SEARCH_PATH_VAR,
    max_matches: int | None = None,
) -> SearchResult:
    """Find every search-path entry that contains ``filename``.

    The search path is split naively: empty segments, including the one
    after a trailing separator, are kept and join to the bare file name.

    Args:
        filename: Executable name to look for
        environ: Mapping to read the search path from
        var: Name of the search-path variable
        max_matches: Optional bound on the number of matches

    Returns:
        SearchResult with matches in search-path order

    Raises:
        SearchPathUnavailable: If the search path cannot be read
        CapacityExceeded: If max_matches is exceeded
    """
    pathlist = read_search_path(var, environ)
    result = SearchResult(filename=filename, max_matches=max_matches)

    for directory in pathlist.split(SEARCH_PATH_SEPARATOR):
        candidate = canonicalize(join_path_components(directory, filename))

        if len(candidate.encode()) >= MAXPGPATH:
            logger.warning("search.entry_too_long", directory=directory)
            continue

        if exists(candidate):
            result.append(candidate)

    return result


def search_path_first(
    filename: str,
    *,
    log_level: str = "error",
    environ: Mapping[str, str] | None = None,
    var: str = SEARCH_PATH_VAR,
) -> str:
    """Return the first search-path match for ``filename``.

    Args:
        filename: Executable name to look for
        log_level: Level used to report a miss
        environ: Mapping to read the search path from
        var: Name of the search-path variable

    Raises:
        NotFound: If no entry of the search path contains filename
    """
    paths = enumerate_candidates(filename, environ=environ, var=var)

    if not paths.matches:
        log_at(logger, log_level, "search.not_found", filename=filename, var=var)
        raise NotFound(
            f"Failed to find {filename} command in your {var}", path=filename
        )

    return paths.matches[0]


def deduplicate_symlinks(results: SearchResult) -> SearchResult:
    """Collapse matches that resolve to the same file on disk.

    Each match is replaced by its real path; later matches whose real path
    was already seen are dropped, so the first occurrence keeps its place.
    Nothing is returned on failure.

    Args:
        results: Output of enumerate_candidates

    Returns:
        New SearchResult of unique real paths

    Raises:
        IOFailure: If any match cannot be resolved
        CapacityExceeded: If a real path exceeds MAXPGPATH
    """
    unique: list[str] = []
    seen: set[str] = set()

    for current in results.matches:
        resolved = real_path(current)

        if resolved in seen:
            logger.debug("dedup.skipping", path=current, real_path=resolved)
            continue

        seen.add(resolved)
        unique.append(resolved)

    return SearchResult(
        filename=results.filename,
        matches=unique,
        deduplicated=True,
        max_matches=results.max_matches,
    )


def _introspect_program() -> str | None:
    """Ask the OS for the running executable of a bundled build.

    For an interpreted run the process image is the Python interpreter, so
    only frozen builds can answer this way.
    """
    if not getattr(sys, "frozen", False):
        return None

    for entry in PROC_SELF_ENTRIES:
        try:
            program = os.readlink(entry)
        except OSError as e:
            # try the next platform's entry
            if e.errno in (errno.ENOENT, errno.ENOTDIR, errno.EINVAL):
                continue
            logger.error(
                "program.introspection_failed",
                entry=entry,
                error=e.strerror or str(e),
            )
            raise IOFailure(
                "Failed to get absolute path for the program",
                path=entry,
                detail=e.strerror or str(e),
            ) from e

        logger.debug("program.found", path=program, entry=entry)
        return program

    return sys.executable


def program_absolute_path(
    argv0: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the absolute path of the running program.

    Direct introspection is tried first, then ``argv0`` when it is already
    absolute (or has a directory part), then the search path. When all of
    them fail there is no sane way to continue and the process exits with
    EXIT_CODE_INTERNAL_ERROR.

    Args:
        argv0: Raw invocation string (defaults to ``sys.argv[0]``)
        environ: Mapping to read the search path from
    """
    program = _introspect_program()
    if program is not None:
        return program

    argv0 = sys.argv[0] if argv0 is None else argv0

    if not argv0:
        logger.error("program.no_argv0")
        raise SystemExit(EXIT_CODE_INTERNAL_ERROR)

    if os.path.isabs(argv0):
        return argv0

    if os.sep in argv0:
        return os.path.abspath(argv0)

    try:
        program = search_path_first(argv0, log_level="debug", environ=environ)
    except (NotFound, IOFailure, CapacityExceeded):
        logger.error("program.not_in_path", argv0=argv0)
        raise SystemExit(EXIT_CODE_INTERNAL_ERROR) from None

    logger.debug("program.found_in_path", argv0=argv0, path=program)
    return program
