"""Test fixtures for CLI tests."""

import os
from unittest.mock import patch

import pytest

from writebench.core.file_operations import FileDescriptorPair


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from installing handlers bound to the runner's streams."""
    with patch("writebench.cli.app.setup_logging_from_config") as mock_setup:
        yield mock_setup


@pytest.fixture
def use_streams(monkeypatch):
    """Point the CLI's standard stream pair at the given descriptors."""

    def _use(pair: FileDescriptorPair) -> None:
        monkeypatch.setattr(
            FileDescriptorPair, "standard_streams", classmethod(lambda cls: pair)
        )

    return _use


@pytest.fixture
def pipe_pair():
    """A descriptor pair whose input is a pipe rather than a regular file."""
    read_end, write_end = os.pipe()
    yield read_end, write_end
    os.close(read_end)
    os.close(write_end)
