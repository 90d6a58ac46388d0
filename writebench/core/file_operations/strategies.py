"""Implementation of file transfer strategies.

Every strategy copies the whole input descriptor to the output descriptor.
``InterruptedError`` is the only condition retried; any other ``OSError``
propagates to the caller and ends the benchmark.
"""

import contextlib
import mmap
import os
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from writebench.core.errors import InvariantViolationError
from writebench.core.structlog_logger import get_struct_logger

from .enums import TransferMethod
from .probe import block_size, file_size


logger = get_struct_logger(__name__)

T = TypeVar("T")


def retry_interrupted(call: Callable[..., T], *args: Any) -> T:
    """Invoke ``call`` until it returns without being interrupted by a signal."""
    while True:
        try:
            return call(*args)
        except InterruptedError:
            continue


@contextlib.contextmanager
def open_pipe() -> Iterator[tuple[int, int]]:
    """Create a pipe and close both ends when the block exits."""
    read_end, write_end = os.pipe()
    try:
        yield read_end, write_end
    finally:
        os.close(read_end)
        os.close(write_end)


def _format_block(size: int) -> str:
    if size % 1024 == 0:
        return f"{size // 1024}k"
    return f"{size}b"


class DrainStrategy:
    """Baseline that only reads the input, isolating read cost."""

    def __init__(self, chunk_size: int = 8192) -> None:
        self.chunk_size = chunk_size

    @property
    def name(self) -> str:
        return "dummy"

    @property
    def description(self) -> str:
        return f"Read the input in {self.chunk_size} byte chunks and discard it"

    @property
    def method(self) -> TransferMethod:
        return TransferMethod.DRAIN

    @property
    def writes_output(self) -> bool:
        return False

    def validate_prerequisites(self) -> list[str]:
        return []

    def transfer(self, in_fd: int, out_fd: int) -> int:
        while retry_interrupted(os.read, in_fd, self.chunk_size):
            pass
        return 0


class ReadWriteStrategy:
    """Plain read(2)/write(2) loop with a fixed block size.

    The block is either a constant byte count or a multiple of the preferred
    block size of the filesystem holding the output.
    """

    def __init__(
        self,
        block_factor: int = 1,
        fixed_block_size: int | None = None,
        min_block_size: int = 1024,
    ) -> None:
        self.block_factor = block_factor
        self.fixed_block_size = fixed_block_size
        self.min_block_size = min_block_size

    @property
    def name(self) -> str:
        if self.fixed_block_size is not None:
            return f"read+write {_format_block(self.fixed_block_size)}"
        if self.block_factor == 1:
            return "read+write bs"
        return f"read+write {self.block_factor}bs"

    @property
    def description(self) -> str:
        if self.fixed_block_size is not None:
            return f"read/write loop with {self.fixed_block_size} byte blocks"
        return (
            f"read/write loop with {self.block_factor}x the output "
            "filesystem's preferred block size"
        )

    @property
    def method(self) -> TransferMethod:
        return TransferMethod.READ_WRITE

    @property
    def writes_output(self) -> bool:
        return True

    def validate_prerequisites(self) -> list[str]:
        return []

    def resolve_block_size(self, out_fd: int) -> int:
        """Bytes requested per read for this output descriptor."""
        if self.fixed_block_size is not None:
            return self.fixed_block_size
        preferred = block_size(out_fd)
        if preferred < self.min_block_size:
            raise InvariantViolationError(
                f"Preferred block size {preferred} is below {self.min_block_size}"
            )
        return self.block_factor * preferred

    def transfer(self, in_fd: int, out_fd: int) -> int:
        bs = self.resolve_block_size(out_fd)
        total = file_size(in_fd)
        read = written = 0

        while read < total:
            chunk = retry_interrupted(os.read, in_fd, bs)
            if not chunk:
                break
            read += len(chunk)

            # Resume short writes from the unwritten tail of the chunk
            view = memoryview(chunk)
            while written < read:
                pending = len(chunk) - (read - written)
                count = retry_interrupted(os.write, out_fd, view[pending:])
                if count == 0:
                    raise InvariantViolationError(
                        f"write made no progress after {written} bytes"
                    )
                written += count

        logger.debug("read_write_complete", block_size=bs, bytes_written=written)
        return written


class MmapWriteStrategy:
    """Map the whole input and write(2) the mapping to the output."""

    @property
    def name(self) -> str:
        return "mmap+write"

    @property
    def description(self) -> str:
        return "Map the input read-only and write the mapped region"

    @property
    def method(self) -> TransferMethod:
        return TransferMethod.MMAP_WRITE

    @property
    def writes_output(self) -> bool:
        return True

    def validate_prerequisites(self) -> list[str]:
        return []

    def transfer(self, in_fd: int, out_fd: int) -> int:
        length = file_size(in_fd)
        if length == 0:
            # Empty files cannot be mapped; nothing to copy
            logger.debug("mmap_skipped_empty_input")
            return 0

        try:
            mapping = mmap.mmap(
                in_fd, length, flags=mmap.MAP_SHARED, prot=mmap.PROT_READ
            )
        except (OSError, ValueError) as e:
            raise InvariantViolationError(
                f"mmap of {length} bytes failed: {e}"
            ) from e

        written = 0
        with mapping, memoryview(mapping) as view:
            while written < length:
                with view[written:] as remaining:
                    try:
                        count = os.write(out_fd, remaining)
                    except InterruptedError:
                        continue
                if count == 0:
                    raise InvariantViolationError(
                        f"write made no progress after {written} bytes"
                    )
                written += count

        return written


class PipeSpliceStrategy:
    """Move data input -> pipe -> output with splice(2), bypassing user space."""

    def __init__(self, chunk_size: int = 65536) -> None:
        self.chunk_size = chunk_size

    @property
    def name(self) -> str:
        return "pipe+splice"

    @property
    def description(self) -> str:
        return f"splice through an intermediate pipe in {self.chunk_size} byte chunks"

    @property
    def method(self) -> TransferMethod:
        return TransferMethod.PIPE_SPLICE

    @property
    def writes_output(self) -> bool:
        return True

    def validate_prerequisites(self) -> list[str]:
        missing = []
        if not hasattr(os, "splice"):
            missing.append("splice system call not available")
        return missing

    def transfer(self, in_fd: int, out_fd: int) -> int:
        total = file_size(in_fd)
        read = written = 0

        with open_pipe() as (pipe_read, pipe_write):
            while read < total:
                count = retry_interrupted(
                    os.splice, in_fd, pipe_write, self.chunk_size
                )
                if count == 0:
                    break
                read += count

                while written < read:
                    moved = retry_interrupted(
                        os.splice, pipe_read, out_fd, self.chunk_size
                    )
                    if moved == 0:
                        raise InvariantViolationError(
                            f"splice out of pipe made no progress after {written} bytes"
                        )
                    written += moved

        return written


class SendfileStrategy:
    """Copy inside the kernel with sendfile(2) and an explicit input offset."""

    @property
    def name(self) -> str:
        return "sendfile"

    @property
    def description(self) -> str:
        return "Kernel-to-kernel copy using the sendfile system call"

    @property
    def method(self) -> TransferMethod:
        return TransferMethod.SENDFILE

    @property
    def writes_output(self) -> bool:
        return True

    def validate_prerequisites(self) -> list[str]:
        missing = []
        if not hasattr(os, "sendfile"):
            missing.append("sendfile system call not available")
        return missing

    def transfer(self, in_fd: int, out_fd: int) -> int:
        total = file_size(in_fd)
        offset = 0

        while offset < total:
            sent = retry_interrupted(
                os.sendfile, out_fd, in_fd, offset, total - offset
            )
            if sent == 0:
                raise InvariantViolationError(
                    f"Input ended at {offset} of {total} bytes during sendfile"
                )
            offset += sent

        return total
