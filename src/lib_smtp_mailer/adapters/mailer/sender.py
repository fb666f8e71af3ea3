"""Mailer: validated sending through one owned transport handle.

Contents:
    * :class:`Mailer` - Owns configuration and transport; exposes ``send``.
    * :data:`SendCallback` - ``(error, result)`` callback signature.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from lib_smtp_mailer.domain.errors import ValidationError
from lib_smtp_mailer.domain.validation import validate_attachments, validate_mail

from .config import MailerConfig, MailerOptions
from .transport import create_transport

if TYPE_CHECKING:
    from lib_smtp_mailer.application.ports import Transport, TransportFactory

logger = logging.getLogger(__name__)

SendCallback = Callable[[BaseException | None, Any], None]


class Mailer:
    """Send validated mail through a single transport handle.

    The options are validated once at construction and the transport is
    created right after; exceptions from the transport factory propagate to
    the caller unchanged. Every :meth:`send` is independent of the others.

    Example:
        >>> import asyncio
        >>> from lib_smtp_mailer.adapters.memory import TransportSpy
        >>> spy = TransportSpy(result="250 OK")
        >>> mailer = Mailer({"auth": {"user": "a", "pass": "b"}}, transport_factory=spy.create_transport)
        >>> asyncio.run(mailer.send({"to": "x@example.com", "from": "y@example.com"}))
        '250 OK'
    """

    def __init__(
        self,
        options: Mapping[str, Any] | MailerOptions,
        *,
        transport_factory: TransportFactory = create_transport,
    ) -> None:
        self._config = MailerConfig(options)
        self._transport: Transport = transport_factory(self._config.options)

    @property
    def options(self) -> MailerOptions:
        return self._config.options

    @property
    def transport(self) -> Transport:
        return self._transport

    def prepare(self, mail: object, attachments: object = None) -> dict[str, Any]:
        """Validate *mail* and *attachments* and return the merged payload.

        Raises:
            ValidationError: On the first malformed field.
        """
        payload = validate_mail(mail, default_sender=self.options.noreply_address)
        payload["attachments"] = validate_attachments(attachments)
        return payload

    async def send(
        self,
        mail: object,
        attachments: object = None,
        callback: SendCallback | None = None,
    ) -> Any:
        """Validate and send one message.

        Args:
            mail: Message mapping with ``to``, ``from`` (optional when a
                default sender is configured), and optional ``cc``, ``bcc``,
                ``html``, ``text``, ``subject``.
            attachments: Optional list of ``{content, filename, href}`` mappings.
            callback: Optional ``callback(error, result)``. When given it is
                invoked exactly once and ``send`` returns None without raising
                validation or transport errors.

        Returns:
            The transport result, unmodified, when no callback is given.

        Raises:
            ValidationError: Malformed input, before any transport contact
                (only without a callback).
            Exception: Whatever the transport raised, unmodified (only
                without a callback).
        """
        try:
            payload = self.prepare(mail, attachments)
        except ValidationError as exc:
            logger.debug("Mail rejected by validation", extra={"field": exc.field, "expected": exc.expected})
            if callback is None:
                raise
            callback(exc, None)
            return None

        recipients = {"to": payload["to"], "cc": payload.get("cc"), "bcc": payload.get("bcc")}
        logger.info(
            "Sending mail",
            extra={
                "sender": payload["from"],
                "recipients": recipients,
                "has_html": payload.get("html") is not None,
                "attachment_count": len(payload["attachments"] or ()),
            },
        )

        try:
            result = await self._transport.send_mail(payload)
        except Exception as exc:
            logger.warning(
                "Mail transport failed",
                extra={"sender": payload["from"], "recipients": recipients, "error": type(exc).__name__},
            )
            logger.debug("Mail transport failure detail", exc_info=True)
            if callback is None:
                raise
            callback(exc, None)
            return None

        logger.info("Mail sent", extra={"sender": payload["from"], "recipients": recipients})
        if callback is None:
            return result
        callback(None, result)
        return None


__all__ = [
    "Mailer",
    "SendCallback",
]
