"""Pytest configuration and fixtures."""

import logging
from types import SimpleNamespace

import pytest

# Configure logging for tests
logging.basicConfig(level=logging.DEBUG)


@pytest.fixture
def populated_dir(tmp_path):
    """Directory holding one five-byte file and one subdirectory."""
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "sub").mkdir()
    return tmp_path


@pytest.fixture
def fake_stat():
    """Build stat-like objects without touching the filesystem."""

    def make(mode, size=0, atime_ns=0, mtime_ns=0, ctime_ns=0, **extra):
        return SimpleNamespace(
            st_mode=mode,
            st_size=size,
            st_atime_ns=atime_ns,
            st_mtime_ns=mtime_ns,
            st_ctime_ns=ctime_ns,
            **extra,
        )

    return make
