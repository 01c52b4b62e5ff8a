"""Core constants for filekit.

This module defines constants used throughout the package:
- Path and environment value length limits
- Default permission bits for created files and directories
- Process exit codes
"""

import os

# ============================================================================
# Length Limits
# ============================================================================

#: Longest path (in bytes, including the terminator) the toolkit handles
MAXPGPATH: int = 1024

#: Longest search-path environment value accepted before splitting
MAXPATHSIZE: int = 8192

# ============================================================================
# Permission Bits
# ============================================================================

#: Mode for files created by write_whole_file / append_whole_file
FILE_CREATE_MODE: int = 0o644

#: Default mode for directories created by ensure_empty_dir
DIR_CREATE_MODE: int = 0o700

# ============================================================================
# Search Path
# ============================================================================

#: Environment variable holding the executable search path
SEARCH_PATH_VAR: str = "PATH"

#: Separator between search-path entries (":" on POSIX, ";" on Windows)
SEARCH_PATH_SEPARATOR: str = os.pathsep

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_CODE_QUIT: int = 0
EXIT_CODE_BAD_ARGS: int = 1
EXIT_CODE_INTERNAL_ERROR: int = 12
