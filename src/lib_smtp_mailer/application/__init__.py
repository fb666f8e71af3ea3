"""Application layer - port definitions.

Contents:
    * :mod:`.ports` - Protocol definitions for adapter functions and handles
"""

from __future__ import annotations

from .ports import (
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadMailerOptionsFromDict,
    Transport,
    TransportFactory,
)

__all__ = [
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailerOptionsFromDict",
    "Transport",
    "TransportFactory",
]
