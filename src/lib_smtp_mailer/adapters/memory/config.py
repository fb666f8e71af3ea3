"""In-memory configuration adapters for testing.

Provides configuration functions that satisfy the same Protocols as
production adapters but never touch the filesystem.
"""

from __future__ import annotations

import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from lib_layered_config import Config

from ..mailer.config import MailerOptions, configure


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def get_default_config_path_in_memory() -> Path:
    """Return a synthetic path (not a real file)."""
    return Path(tempfile.gettempdir()) / "lib_smtp_mailer" / "defaultconfig.toml"


def load_mailer_options_from_dict_in_memory(config_dict: Mapping[str, Any]) -> MailerOptions:
    """Parse the mailer section with the real model, defaulting to empty auth."""
    mailer_raw = config_dict.get("mailer") or {"auth": {}}
    return configure(mailer_raw)


__all__ = [
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "load_mailer_options_from_dict_in_memory",
]
