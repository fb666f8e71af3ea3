"""Message and attachment validation for outbound mail.

Pure functions with no I/O. Checks run in a fixed order and the first
violation raises :class:`~lib_smtp_mailer.domain.errors.ValidationError`,
so a caller always learns about exactly one field.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .errors import ValidationError
from .models import OPTIONAL_STRING_FIELDS


def _is_non_empty_string(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_stream(value: object) -> bool:
    return callable(getattr(value, "read", None))


def resolve_sender(mail: Mapping[str, Any], default_sender: str | None) -> str:
    """Return the sender for *mail*, falling back to *default_sender*.

    A missing, None, or blank ``from`` is replaced by the default sender
    when one is configured. A ``from`` of any other non-string type is
    never replaced.

    Raises:
        ValidationError: ``mail.from`` is unusable and no default applies.

    Example:
        >>> resolve_sender({"from": "a@example.com"}, None)
        'a@example.com'
        >>> resolve_sender({}, "noreply@example.com")
        'noreply@example.com'
    """
    sender = mail.get("from")
    if _is_non_empty_string(sender):
        return sender
    missing = sender is None or isinstance(sender, str)
    if missing and default_sender:
        return default_sender
    raise ValidationError("mail.from", "str")


def validate_mail(mail: object, *, default_sender: str | None = None) -> dict[str, Any]:
    """Validate an outbound message and return a copy with ``from`` resolved.

    Order: the message itself, ``to``, ``from``, then the optional string
    fields ``cc``, ``bcc``, ``html``, ``text``, ``subject``.

    Args:
        mail: Candidate message mapping.
        default_sender: Configured fallback for a missing ``from``.

    Returns:
        A new dict holding every key of *mail* with ``from`` filled in.

    Raises:
        ValidationError: On the first field that violates its contract.

    Example:
        >>> validate_mail({"to": "x@example.com"}, default_sender="n@example.com")["from"]
        'n@example.com'
        >>> validate_mail({"to": ""})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: "mail.to" must be str.
    """
    if not isinstance(mail, Mapping):
        raise ValidationError("mail", "Mapping")
    if not _is_non_empty_string(mail.get("to")):
        raise ValidationError("mail.to", "str")
    sender = resolve_sender(mail, default_sender)
    for key in OPTIONAL_STRING_FIELDS:
        value = mail.get(key)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"mail.{key}", "str")
    validated = dict(mail)
    validated["from"] = sender
    return validated


def _validate_attachment(index: int, attachment: object) -> dict[str, Any]:
    path = f"attachments[{index}]"
    if not isinstance(attachment, Mapping):
        raise ValidationError(path, "Mapping")
    if not _is_non_empty_string(attachment.get("filename")):
        raise ValidationError(f"{path}.filename", "str")
    href = attachment.get("href")
    if href is not None and not isinstance(href, str):
        raise ValidationError(f"{path}.href", "str")
    content = attachment.get("content")
    if content is None:
        if href is None:
            raise ValidationError(f"{path}.content", "str | bytes | stream")
    elif not isinstance(content, (str, bytes, bytearray)) and not _is_stream(content):
        raise ValidationError(f"{path}.content", "str | bytes | stream")
    return dict(attachment)


def validate_attachments(attachments: object) -> list[dict[str, Any]] | None:
    """Validate the optional attachment list.

    Strings and bytes are rejected even though they are sequences; only a
    list or tuple of mappings is accepted.

    Returns:
        None when *attachments* is None, otherwise a list of copied entries.

    Raises:
        ValidationError: ``attachments`` is not a sequence, or one entry is
            malformed (``attachments[<i>]`` names the first offender).
    """
    if attachments is None:
        return None
    if isinstance(attachments, (str, bytes, bytearray)) or not isinstance(attachments, Sequence):
        raise ValidationError("attachments", "Sequence")
    return [_validate_attachment(index, entry) for index, entry in enumerate(attachments)]


__all__ = [
    "resolve_sender",
    "validate_attachments",
    "validate_mail",
]
