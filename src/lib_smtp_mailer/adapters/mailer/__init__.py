"""Mailer adapter - options, SMTP transport, and sending.

Structure:
    * :mod:`.config` - Mailer options model, write-once holder, and loader
    * :mod:`.transport` - aiosmtplib-backed transport handle
    * :mod:`.sender` - The Mailer class

Contents:
    * :class:`.config.MailerOptions` - Validated options container
    * :class:`.config.MailerConfig` - Write-once options holder
    * :func:`.config.configure` - One-shot options validation
    * :func:`.config.load_mailer_options_from_dict` - Config dict loader
    * :func:`.transport.create_transport` - Transport factory
    * :class:`.sender.Mailer` - Primary sending interface
"""

from __future__ import annotations

from .config import MailerConfig, MailerOptions, configure, load_mailer_options_from_dict
from .sender import Mailer, SendCallback
from .transport import SmtpTransport, build_email_message, create_transport

__all__ = [
    "Mailer",
    "MailerConfig",
    "MailerOptions",
    "SendCallback",
    "SmtpTransport",
    "build_email_message",
    "configure",
    "create_transport",
    "load_mailer_options_from_dict",
]
