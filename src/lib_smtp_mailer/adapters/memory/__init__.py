"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.transport` - In-memory transport (TransportSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    get_config_in_memory,
    get_default_config_path_in_memory,
    load_mailer_options_from_dict_in_memory,
)
from .logging import init_logging_in_memory
from .transport import TransportSpy

# Static conformance assertions
if TYPE_CHECKING:
    from lib_smtp_mailer.application.ports import (
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailerOptionsFromDict,
        Transport,
        TransportFactory,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_load_mailer_options: LoadMailerOptionsFromDict = load_mailer_options_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport_factory: TransportFactory = TransportSpy().create_transport
    _assert_transport: Transport = TransportSpy()

__all__ = [
    "TransportSpy",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_mailer_options_from_dict_in_memory",
]
