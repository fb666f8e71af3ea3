"""Domain layer - pure message rules with no I/O or framework dependencies.

Contents:
    * :mod:`.errors` - Domain exception types
    * :mod:`.models` - Message and attachment shapes
    * :mod:`.validation` - Message and attachment validation
"""

from __future__ import annotations

from .errors import ConfigurationError, ValidationError
from .models import Attachment, OutboundMessage
from .validation import resolve_sender, validate_attachments, validate_mail

__all__ = [
    # Errors
    "ConfigurationError",
    "ValidationError",
    # Models
    "Attachment",
    "OutboundMessage",
    # Validation
    "resolve_sender",
    "validate_attachments",
    "validate_mail",
]
