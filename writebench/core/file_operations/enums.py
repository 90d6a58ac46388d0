"""Enums for file operations."""

from enum import Enum


class TransferMethod(Enum):
    """Kernel I/O paths a transfer strategy can take."""

    DRAIN = "drain"
    READ_WRITE = "read_write"
    MMAP_WRITE = "mmap_write"
    PIPE_SPLICE = "pipe_splice"
    SENDFILE = "sendfile"


class AdviceKind(Enum):
    """Pre-transfer hints applied by advice modifiers."""

    READAHEAD = "readahead"
    FALLOCATE = "fallocate"
    TRUNCATE = "truncate"
