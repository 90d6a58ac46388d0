"""Core test fixtures for the write-bench project."""

import logging
import os
from collections.abc import Callable, Generator

import pytest
import structlog
from typer.testing import CliRunner

from writebench.config.models import BenchmarkSettings
from writebench.core.file_operations import FileDescriptorPair
from writebench.core.logging import configure_structlog


PairFactory = Callable[[int], FileDescriptorPair]


# ---- Base Fixtures ----


@pytest.fixture(autouse=True, scope="session")
def structlog_configured() -> Generator[None, None, None]:
    """Route structlog through stdlib logging for the whole session.

    Module loggers cache their configuration on first use, so this must run
    before any code under test logs.
    """
    configure_structlog(logging.DEBUG)
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fast_settings() -> BenchmarkSettings:
    """Benchmark settings without the settle pause."""
    return BenchmarkSettings(settle_interval_seconds=0)


# ---- Descriptor Fixtures ----


@pytest.fixture
def make_pair(tmp_path) -> Generator[PairFactory, None, None]:
    """Factory for an open (input, output) descriptor pair.

    The input holds ``size`` random bytes, the output starts empty. Every
    descriptor opened through the factory is closed at teardown.

    Usage:
        def test_copy(make_pair):
            pair = make_pair(10000)
            SendfileStrategy().transfer(pair.input_fd, pair.output_fd)
    """
    opened: list[int] = []

    def _make(size: int) -> FileDescriptorPair:
        index = len(opened) // 2
        src = tmp_path / f"input_{index}.bin"
        dst = tmp_path / f"output_{index}.bin"
        src.write_bytes(os.urandom(size))

        in_fd = os.open(src, os.O_RDONLY)
        out_fd = os.open(dst, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o644)
        opened.extend([in_fd, out_fd])
        return FileDescriptorPair(input_fd=in_fd, output_fd=out_fd)

    yield _make

    for fd in opened:
        os.close(fd)


def read_all(fd: int) -> bytes:
    """Read a whole file through ``fd`` without moving its cursor."""
    return os.pread(fd, os.fstat(fd).st_size + 1, 0)


@pytest.fixture
def read_file() -> Callable[[int], bytes]:
    """Return a helper reading a descriptor's full contents."""
    return read_all
