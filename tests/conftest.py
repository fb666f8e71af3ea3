"""Shared pytest fixtures for mailer tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from collections.abc import Callable, Coroutine, Iterator
from pathlib import Path
from typing import Any, TypeVar

import pytest
from lib_layered_config import Config

from lib_smtp_mailer.adapters.mailer.sender import Mailer
from lib_smtp_mailer.adapters.memory import TransportSpy

_COVERAGE_BASENAME = ".coverage.lib_smtp_mailer"

T = TypeVar("T")


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a local temp directory.

    Runs before pytest-cov creates its ``Coverage()`` object so the
    ``COVERAGE_FILE`` value is picked up however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()


@pytest.fixture
def run() -> Callable[[Coroutine[Any, Any, T]], T]:
    """Drive a coroutine to completion on a fresh event loop.

    Example:
        def test_send(run, mailer) -> None:
            result = run(mailer.send({"to": "a@example.com", "from": "b@example.com"}))
    """

    def _run(coro: Coroutine[Any, Any, T]) -> T:
        return asyncio.run(coro)

    return _run


@pytest.fixture
def transport_spy() -> TransportSpy:
    """Provide a fresh TransportSpy that reports a canned SMTP result."""
    return TransportSpy(result=({}, "250 2.0.0 OK queued"))


@pytest.fixture
def mailer_factory(transport_spy: TransportSpy) -> Callable[..., Mailer]:
    """Return a factory that builds Mailers wired to the shared transport spy.

    Keyword arguments become mailer options on top of a minimal ``auth``.

    Example:
        def test_default_sender(mailer_factory) -> None:
            mailer = mailer_factory(noreply_address="noreply@example.com")
    """

    def _factory(**options: Any) -> Mailer:
        merged: dict[str, Any] = {"auth": {"user": "mailer", "pass": "secret"}}
        merged.update(options)
        return Mailer(merged, transport_factory=transport_spy.create_transport)

    return _factory


@pytest.fixture
def mailer(mailer_factory: Callable[..., Mailer]) -> Mailer:
    """Provide a Mailer without a default sender."""
    return mailer_factory()


@pytest.fixture
def callback_recorder() -> tuple[list[tuple[BaseException | None, Any]], Callable[[BaseException | None, Any], None]]:
    """Return ``(calls, callback)``; every callback invocation is appended to calls."""
    calls: list[tuple[BaseException | None, Any]] = []

    def _callback(error: BaseException | None, result: Any) -> None:
        calls.append((error, result))

    return calls, _callback


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test."""
    from lib_smtp_mailer.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield
