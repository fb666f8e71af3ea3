"""Application ports: Protocol definitions for adapter functions and handles.

Each callable Protocol defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``MailerOptions``) are imported under ``TYPE_CHECKING`` only so the
    application layer stays free of adapter imports at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.mailer.config import MailerOptions


class Transport(Protocol):
    """Transport handle owned by a Mailer; sends one merged message per call."""

    async def send_mail(self, message: Mapping[str, Any]) -> Any: ...


class TransportFactory(Protocol):
    """Create a transport handle from validated mailer options."""

    def __call__(self, options: MailerOptions) -> Transport: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class LoadMailerOptionsFromDict(Protocol):
    """Load MailerOptions from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailerOptions: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailerOptionsFromDict",
    "Transport",
    "TransportFactory",
]
