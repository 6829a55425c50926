"""Shared pytest fixtures for the kvconf test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterator

import pytest

from kvconf.telemetry.logger import ParseLogger


EXAMPLE_CONFIG = (
    "# this is config file example\n"
    'host="mysql.example.com" # this is SQL host\n'
    "user      =       'dba_admin'\n"
    "password = helloworld # test comment\n"
    "database=testdb123\n"
)


@pytest.fixture
def example_config_text() -> str:
    """Provide the four-parameter MySQL example configuration."""

    return EXAMPLE_CONFIG


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes configuration text into a temporary file."""

    def _write(content: str, filename: str = "test.conf") -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def log_buffer() -> io.StringIO:
    """Provide an in-memory sink for diagnostic lines."""

    return io.StringIO()


@pytest.fixture
def parse_logger(log_buffer: io.StringIO) -> Iterator[ParseLogger]:
    """Provide a logger writing only to `log_buffer`, detached after the test."""

    with ParseLogger(sink=log_buffer) as logger:
        yield logger
