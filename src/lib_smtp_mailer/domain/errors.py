"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ValidationError(ValueError):
    """Input-shape violation in mailer options, a message, or attachments.

    Carries the offending ``field`` path (``"auth"``, ``"mail.to"``,
    ``"attachments[0].filename"``) and the ``expected`` type name so callers
    can react without parsing the message. Inherits from ValueError so plain
    ``except ValueError`` handlers keep working.

    Example:
        >>> from lib_smtp_mailer.domain.errors import ValidationError
        >>> err = ValidationError("mail.to", "str")
        >>> str(err)
        '"mail.to" must be str.'
        >>> err.field, err.expected
        ('mail.to', 'str')
        >>> isinstance(err, ValueError)
        True
    """

    def __init__(self, field: str, expected: str) -> None:
        self.field = field
        self.expected = expected
        super().__init__(f'"{field}" must be {expected}.')

    def __reduce__(self) -> tuple[type[ValidationError], tuple[str, str]]:
        return (type(self), (self.field, self.expected))


class ConfigurationError(Exception):
    """Missing or incomplete configuration.

    Raised when mailer options are read before anything was configured, or
    when the layered configuration carries no usable ``[mailer]`` section.

    Example:
        >>> from lib_smtp_mailer.domain.errors import ConfigurationError
        >>> err = ConfigurationError("Mailer options have not been configured")
        >>> str(err)
        'Mailer options have not been configured'
    """


__all__ = [
    "ConfigurationError",
    "ValidationError",
]
