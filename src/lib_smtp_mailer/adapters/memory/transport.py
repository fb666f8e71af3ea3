"""In-memory transport adapter for testing.

Provides a transport that satisfies the same Protocols as the SMTP
transport but never opens a connection.

Contents:
    * :class:`TransportSpy` - Captures transport use for test assertions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..mailer.config import MailerOptions


def _empty_message_list() -> list[dict[str, Any]]:
    """Create an empty typed list for message records."""
    return []


def _empty_options_list() -> list[MailerOptions]:
    return []


@dataclass
class TransportSpy:
    """Captures transport operations for test assertions.

    Each test should create its own TransportSpy to avoid cross-test pollution.
    :meth:`create_transport` matches the TransportFactory Protocol and returns
    the spy itself as the handle.

    Attributes:
        created_with: Options passed to each create_transport call.
        sent_messages: Payloads handed to send_mail, in call order.
        result: Value returned by send_mail on success.
        raise_exception: When set, send_mail raises this exception.

    Example:
        >>> import asyncio
        >>> spy = TransportSpy(result="250 OK")
        >>> asyncio.run(spy.send_mail({"to": "a@example.com"}))
        '250 OK'
        >>> len(spy.sent_messages)
        1
    """

    created_with: list[MailerOptions] = field(default_factory=_empty_options_list)
    sent_messages: list[dict[str, Any]] = field(default_factory=_empty_message_list)
    result: Any = None
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.created_with.clear()
        self.sent_messages.clear()
        self.raise_exception = None

    def create_transport(self, options: MailerOptions) -> TransportSpy:
        """Record the options and hand out this spy as the transport handle."""
        self.created_with.append(options)
        return self

    async def send_mail(self, message: Mapping[str, Any]) -> Any:
        """Record the payload, then raise or return the configured result.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent_messages.append(dict(message))
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.result

    @property
    def send_count(self) -> int:
        return len(self.sent_messages)


__all__ = ["TransportSpy"]
