"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# Mailer services
from ..adapters.mailer.config import load_mailer_options_from_dict
from ..adapters.mailer.sender import Mailer
from ..adapters.mailer.transport import create_transport

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.transport import TransportSpy
    from ..application.ports import (
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailerOptionsFromDict,
        TransportFactory,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_load_mailer_options_from_dict: LoadMailerOptionsFromDict = load_mailer_options_from_dict
    _assert_create_transport: TransportFactory = create_transport
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    load_mailer_options_from_dict: LoadMailerOptionsFromDict
    create_transport: TransportFactory
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        load_mailer_options_from_dict=load_mailer_options_from_dict,
        create_transport=create_transport,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransportSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional TransportSpy for capturing sent messages. When None, a
            fresh TransportSpy is created.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        TransportSpy,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_mailer_options_from_dict_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        load_mailer_options_from_dict=load_mailer_options_from_dict_in_memory,
        create_transport=transport_spy.create_transport,
        init_logging=init_logging_in_memory,
    )


def create_mailer(
    *,
    services: AppServices | None = None,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Mailer:
    """Build a Mailer from the layered configuration.

    Loads configuration through *services* (production wiring by default),
    initializes logging, reads the ``[mailer]`` section and constructs the
    Mailer with the services' transport factory.

    Production wiring reads configuration through the cached
    :func:`get_config`; call ``get_config.cache_clear()`` before building a
    new Mailer when the configuration sources changed at runtime.

    Raises:
        ConfigurationError: The [mailer] section is missing or empty.
        ValidationError: A mailer option is malformed.

    Example:
        >>> mailer = create_mailer(services=build_testing())
        >>> mailer.options.hostname
        'localhost'
    """
    wiring = services if services is not None else build_production()
    config = wiring.get_config(profile=profile, start_dir=start_dir)
    wiring.init_logging(config)
    options = wiring.load_mailer_options_from_dict(config.as_dict())
    return Mailer(options, transport_factory=wiring.create_transport)


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    # Mailer
    "load_mailer_options_from_dict",
    "create_transport",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
    "create_mailer",
]
