"""SMTP transport built on aiosmtplib.

The transport is the collaborator the Mailer delegates to: it turns a
validated message mapping into an :class:`email.message.EmailMessage` and
hands it to :func:`aiosmtplib.send`. Connection handling, TLS negotiation
and SMTP errors all stay with aiosmtplib; nothing here retries or wraps
exceptions.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from collections.abc import Mapping, Sequence
from email.message import EmailMessage
from typing import Any

import aiosmtplib
import httpx

from .config import MailerOptions

logger = logging.getLogger(__name__)

_DEFAULT_MIME_TYPE = "application/octet-stream"
_HREF_TIMEOUT_SECONDS = 30.0

SendResult = tuple[dict[str, aiosmtplib.SMTPResponse], str]


def _first_present(mapping: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def _split_mime_type(mime_type: str | None, filename: str) -> tuple[str, str]:
    """Return (maintype, subtype), guessing from *filename* when needed.

    Example:
        >>> _split_mime_type(None, "report.pdf")
        ('application', 'pdf')
        >>> _split_mime_type("text/csv; charset=utf-8", "data")
        ('text', 'csv')
        >>> _split_mime_type(None, "blob")
        ('application', 'octet-stream')
    """
    if not mime_type:
        mime_type = mimetypes.guess_type(filename)[0] or _DEFAULT_MIME_TYPE
    maintype, _, subtype = mime_type.split(";", 1)[0].strip().partition("/")
    if not maintype or not subtype:
        maintype, _, subtype = _DEFAULT_MIME_TYPE.partition("/")
    return maintype, subtype


async def _fetch_href(href: str) -> tuple[bytes, str | None]:
    async with httpx.AsyncClient(follow_redirects=True, timeout=_HREF_TIMEOUT_SECONDS) as client:
        response = await client.get(href)
        response.raise_for_status()
    return response.content, response.headers.get("content-type")


async def _resolve_content(attachment: Mapping[str, Any]) -> tuple[str | bytes, str | None]:
    """Return attachment payload and an optional MIME type hint.

    Streams are read in a worker thread so file-backed content does not
    block the event loop.
    """
    content = attachment.get("content")
    if content is None:
        return await _fetch_href(attachment["href"])
    if isinstance(content, (str, bytes)):
        return content, None
    if isinstance(content, bytearray):
        return bytes(content), None
    data = await asyncio.to_thread(content.read)
    return (data if isinstance(data, (str, bytes)) else bytes(data)), None


async def _add_attachment(email_message: EmailMessage, attachment: Mapping[str, Any]) -> None:
    filename: str = attachment["filename"]
    payload, mime_hint = await _resolve_content(attachment)
    maintype, subtype = _split_mime_type(mime_hint, filename)
    if isinstance(payload, str):
        if maintype == "text":
            email_message.add_attachment(payload, subtype=subtype, filename=filename)
            return
        payload = payload.encode("utf-8")
    email_message.add_attachment(payload, maintype=maintype, subtype=subtype, filename=filename)


async def build_email_message(message: Mapping[str, Any]) -> EmailMessage:
    """Render a validated message mapping into an EmailMessage.

    ``text`` and ``html`` become a multipart/alternative body when both
    are given. ``bcc`` is written as a header so aiosmtplib can take it
    into the envelope; aiosmtplib strips it before transmission.

    Example:
        >>> import asyncio
        >>> msg = asyncio.run(build_email_message(
        ...     {"from": "a@example.com", "to": "b@example.com", "subject": "Hi", "text": "Hello"}
        ... ))
        >>> msg["To"], msg["Subject"], msg.get_content().strip()
        ('b@example.com', 'Hi', 'Hello')
    """
    email_message = EmailMessage()
    email_message["From"] = message["from"]
    email_message["To"] = message["to"]
    for key, header in (("cc", "Cc"), ("bcc", "Bcc"), ("subject", "Subject")):
        if message.get(key):
            email_message[header] = message[key]

    text: str | None = message.get("text")
    html: str | None = message.get("html")
    if text is not None:
        email_message.set_content(text)
        if html is not None:
            email_message.add_alternative(html, subtype="html")
    elif html is not None:
        email_message.set_content(html, subtype="html")
    else:
        email_message.set_content("")

    attachments: Sequence[Mapping[str, Any]] | None = message.get("attachments")
    for attachment in attachments or ():
        await _add_attachment(email_message, attachment)
    return email_message


class SmtpTransport:
    """Transport handle bound to one set of mailer options.

    Created once per Mailer. Each :meth:`send_mail` opens its own
    connection through :func:`aiosmtplib.send`.
    """

    def __init__(self, options: MailerOptions) -> None:
        self.options = options
        self._connection_kwargs = self._build_connection_kwargs(options)

    @staticmethod
    def _build_connection_kwargs(options: MailerOptions) -> dict[str, Any]:
        """Map mailer options onto aiosmtplib.send keyword arguments.

        Example:
            >>> opts = MailerOptions(auth={"user": "u", "pass": "p"}, port=465, secure=True)
            >>> kwargs = SmtpTransport._build_connection_kwargs(opts)
            >>> kwargs["hostname"], kwargs["port"], kwargs["use_tls"], kwargs["start_tls"]
            ('localhost', 465, True, False)
            >>> kwargs["username"], kwargs["password"]
            ('u', 'p')
        """
        tls = options.tls
        kwargs: dict[str, Any] = {
            "hostname": options.hostname,
            "use_tls": options.secure,
            # Implicit TLS and STARTTLS are mutually exclusive in aiosmtplib
            "start_tls": False if options.secure else tls.get("starttls"),
        }
        if options.port is not None:
            kwargs["port"] = options.port
        if options.name is not None:
            kwargs["local_hostname"] = options.name
        if options.timeout is not None:
            kwargs["timeout"] = options.timeout
        if options.username is not None and options.password is not None:
            kwargs["username"] = options.username
            kwargs["password"] = options.password

        validate_certs = _first_present(tls, "reject_unauthorized", "rejectUnauthorized")
        if validate_certs is not None:
            kwargs["validate_certs"] = bool(validate_certs)
        for target, keys in (
            ("cert_bundle", ("cafile", "ca")),
            ("client_cert", ("certfile", "cert")),
            ("client_key", ("keyfile", "key")),
        ):
            value = _first_present(tls, *keys)
            if value is not None:
                kwargs[target] = value
        return kwargs

    async def send_mail(self, message: Mapping[str, Any]) -> SendResult:
        """Send one message and return aiosmtplib's ``(errors, response)`` tuple.

        Raises:
            aiosmtplib.SMTPException: Any SMTP-level failure, unchanged.
            httpx.HTTPError: An ``href`` attachment could not be fetched.
            OSError: Socket-level failures, unchanged.
        """
        email_message = await build_email_message(message)
        logger.debug(
            "Handing message to SMTP server",
            extra={"hostname": self.options.hostname, "port": self.options.port, "secure": self.options.secure},
        )
        return await aiosmtplib.send(email_message, **self._connection_kwargs)


def create_transport(options: MailerOptions) -> SmtpTransport:
    """Create the SMTP transport handle for *options*."""
    return SmtpTransport(options)


__all__ = [
    "SendResult",
    "SmtpTransport",
    "build_email_message",
    "create_transport",
]
