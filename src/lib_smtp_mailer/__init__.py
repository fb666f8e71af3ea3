"""Public package surface: the Mailer, its options, and domain errors.

Routes imports through the architectural layers:
- Domain exports: errors, message shapes, validation
- Adapter exports: options model, transport, Mailer
- Composition exports: configuration-driven construction
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.mailer import (
    Mailer,
    MailerConfig,
    MailerOptions,
    SendCallback,
    SmtpTransport,
    configure,
    create_transport,
    load_mailer_options_from_dict,
)

# Composition exports (wired adapters)
from .composition import create_mailer, get_config

# Domain exports
from .domain import (
    Attachment,
    ConfigurationError,
    OutboundMessage,
    ValidationError,
)

__all__ = [
    "Attachment",
    "ConfigurationError",
    "Mailer",
    "MailerConfig",
    "MailerOptions",
    "OutboundMessage",
    "SendCallback",
    "SmtpTransport",
    "ValidationError",
    "configure",
    "create_mailer",
    "create_transport",
    "get_config",
    "load_mailer_options_from_dict",
    "print_info",
]
