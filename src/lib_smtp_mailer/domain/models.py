"""Shapes of the payloads accepted by :meth:`Mailer.send`.

Messages and attachments travel as plain mappings so callers can pass
dictionaries straight from JSON or templates. These TypedDicts document
the recognised keys for type checkers; runtime checks live in
:mod:`.validation`.
"""

from __future__ import annotations

from typing import IO, TypedDict

AttachmentContent = str | bytes | bytearray | IO[bytes]

# Keys that, when present and not None, must hold strings
OPTIONAL_STRING_FIELDS: tuple[str, ...] = ("cc", "bcc", "html", "text", "subject")

OutboundMessage = TypedDict(
    "OutboundMessage",
    {
        "to": str,
        "from": str,
        "cc": str,
        "bcc": str,
        "html": str,
        "text": str,
        "subject": str,
    },
    total=False,
)


class Attachment(TypedDict, total=False):
    """One attachment entry; ``href`` is fetched when ``content`` is absent."""

    content: AttachmentContent
    filename: str
    href: str


__all__ = [
    "OPTIONAL_STRING_FIELDS",
    "Attachment",
    "AttachmentContent",
    "OutboundMessage",
]
