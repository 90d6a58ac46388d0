"""File metadata queries used for sizing and verification."""

import os
import stat

from writebench.core.errors import InvariantViolationError


def _fstat(fd: int) -> os.stat_result:
    try:
        return os.fstat(fd)
    except OSError as e:
        raise InvariantViolationError(f"fstat failed on descriptor {fd}: {e}") from e


def is_regular_file(fd: int) -> bool:
    """Return True if ``fd`` refers to a regular file."""
    return stat.S_ISREG(_fstat(fd).st_mode)


def block_size(fd: int) -> int:
    """Preferred I/O transfer size of the filesystem holding ``fd``."""
    try:
        return os.fstatvfs(fd).f_bsize
    except OSError as e:
        raise InvariantViolationError(
            f"fstatvfs failed on descriptor {fd}: {e}"
        ) from e


def file_size(fd: int) -> int:
    """Current byte length of the file behind ``fd``."""
    return _fstat(fd).st_size
