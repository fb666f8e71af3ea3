"""Mailer.send stories: validation, default sender, and exactly-once results."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any

import aiosmtplib
import pytest

from lib_smtp_mailer.adapters.mailer.config import MailerOptions
from lib_smtp_mailer.adapters.mailer.sender import Mailer
from lib_smtp_mailer.adapters.memory import TransportSpy
from lib_smtp_mailer.domain.errors import ValidationError

Run = Callable[[Coroutine[Any, Any, Any]], Any]
Calls = list[tuple[BaseException | None, Any]]
Recorder = tuple[Calls, Callable[[BaseException | None, Any], None]]

# ======================== Construction ========================


@pytest.mark.os_agnostic
def test_construction_creates_one_transport_from_normalized_options(transport_spy: TransportSpy) -> None:
    mailer = Mailer({"auth": {"user": "a", "pass": "b"}}, transport_factory=transport_spy.create_transport)

    assert len(transport_spy.created_with) == 1
    assert isinstance(transport_spy.created_with[0], MailerOptions)
    assert transport_spy.created_with[0].hostname == "localhost"
    assert mailer.transport is transport_spy


@pytest.mark.os_agnostic
def test_construction_rejects_invalid_options(transport_spy: TransportSpy) -> None:
    """Invalid options fail before the transport factory is called."""
    with pytest.raises(ValidationError) as info:
        Mailer({"hostname": "smtp.example.com"}, transport_factory=transport_spy.create_transport)

    assert info.value.field == "auth"
    assert transport_spy.created_with == []


@pytest.mark.os_agnostic
def test_transport_factory_errors_propagate() -> None:
    """Whatever the factory raises reaches the caller unchanged."""

    def _broken_factory(options: MailerOptions) -> Any:
        raise OSError("no route to host")

    with pytest.raises(OSError, match="no route to host"):
        Mailer({"auth": {}}, transport_factory=_broken_factory)


# ======================== Callback style ========================


@pytest.mark.os_agnostic
def test_successful_send_calls_back_once_with_transport_result(
    run: Run, mailer: Mailer, transport_spy: TransportSpy, callback_recorder: Recorder
) -> None:
    calls, callback = callback_recorder

    returned = run(mailer.send({"to": "x@example.com", "from": "y@example.com"}, None, callback))

    assert returned is None
    assert calls == [(None, transport_spy.result)]
    assert transport_spy.send_count == 1


@pytest.mark.os_agnostic
def test_empty_recipient_calls_back_with_error_and_skips_transport(
    run: Run, mailer: Mailer, transport_spy: TransportSpy, callback_recorder: Recorder
) -> None:
    calls, callback = callback_recorder

    run(mailer.send({"to": ""}, None, callback))

    assert len(calls) == 1
    error, result = calls[0]
    assert isinstance(error, ValidationError)
    assert error.field == "mail.to"
    assert result is None
    assert transport_spy.send_count == 0


@pytest.mark.os_agnostic
def test_transport_error_is_relayed_verbatim_to_callback(
    run: Run, mailer: Mailer, transport_spy: TransportSpy, callback_recorder: Recorder
) -> None:
    calls, callback = callback_recorder
    failure = aiosmtplib.SMTPRecipientsRefused([])
    transport_spy.raise_exception = failure

    run(mailer.send({"to": "x@example.com", "from": "y@example.com"}, callback=callback))

    assert calls == [(failure, None)]


@pytest.mark.os_agnostic
def test_callback_raising_is_not_called_again(run: Run, mailer: Mailer) -> None:
    """A failing callback propagates and is never invoked a second time."""
    calls: list[Any] = []

    def _exploding_callback(error: BaseException | None, result: Any) -> None:
        calls.append((error, result))
        raise RuntimeError("callback bug")

    with pytest.raises(RuntimeError, match="callback bug"):
        run(mailer.send({"to": "x@example.com", "from": "y@example.com"}, callback=_exploding_callback))

    assert len(calls) == 1


# ======================== Awaitable style ========================


@pytest.mark.os_agnostic
def test_send_without_callback_returns_transport_result(
    run: Run, mailer: Mailer, transport_spy: TransportSpy
) -> None:
    assert run(mailer.send({"to": "x@example.com", "from": "y@example.com"})) == transport_spy.result


@pytest.mark.os_agnostic
def test_send_without_callback_raises_validation_error(run: Run, mailer: Mailer) -> None:
    with pytest.raises(ValidationError, match=r"mail\.from"):
        run(mailer.send({"to": "x@example.com"}))


@pytest.mark.os_agnostic
def test_send_without_callback_raises_transport_error(
    run: Run, mailer: Mailer, transport_spy: TransportSpy
) -> None:
    transport_spy.raise_exception = aiosmtplib.SMTPServerDisconnected("gone")

    with pytest.raises(aiosmtplib.SMTPServerDisconnected, match="gone"):
        run(mailer.send({"to": "x@example.com", "from": "y@example.com"}))


# ======================== Payload ========================


@pytest.mark.os_agnostic
def test_missing_sender_is_filled_from_default(
    run: Run, mailer_factory: Callable[..., Mailer], transport_spy: TransportSpy
) -> None:
    mailer = mailer_factory(noreplyAddress="noreply@example.com")

    run(mailer.send({"to": "x@example.com", "text": "hi"}))

    assert transport_spy.sent_messages[0]["from"] == "noreply@example.com"


@pytest.mark.os_agnostic
def test_missing_sender_without_default_never_reaches_transport(
    run: Run, mailer: Mailer, transport_spy: TransportSpy, callback_recorder: Recorder
) -> None:
    calls, callback = callback_recorder

    run(mailer.send({"to": "x@example.com"}, callback=callback))

    error = calls[0][0]
    assert isinstance(error, ValidationError)
    assert error.field == "mail.from"
    assert transport_spy.send_count == 0


@pytest.mark.os_agnostic
def test_attachments_are_merged_into_payload(run: Run, mailer: Mailer, transport_spy: TransportSpy) -> None:
    attachments = [{"filename": "a.txt", "content": "alpha"}, {"filename": "b.txt", "content": "beta"}]

    run(mailer.send({"to": "x@example.com", "from": "y@example.com", "cc": "c@example.com"}, attachments))

    payload = transport_spy.sent_messages[0]
    assert payload["cc"] == "c@example.com"
    assert [entry["filename"] for entry in payload["attachments"]] == ["a.txt", "b.txt"]


@pytest.mark.os_agnostic
def test_payload_without_attachments_carries_none(run: Run, mailer: Mailer, transport_spy: TransportSpy) -> None:
    run(mailer.send({"to": "x@example.com", "from": "y@example.com"}))

    assert transport_spy.sent_messages[0]["attachments"] is None


@pytest.mark.os_agnostic
def test_malformed_attachments_are_rejected_before_transport(
    run: Run, mailer: Mailer, transport_spy: TransportSpy, callback_recorder: Recorder
) -> None:
    calls, callback = callback_recorder

    run(mailer.send({"to": "x@example.com", "from": "y@example.com"}, "not-a-list", callback))

    error = calls[0][0]
    assert isinstance(error, ValidationError)
    assert error.field == "attachments"
    assert transport_spy.send_count == 0


@pytest.mark.os_agnostic
def test_caller_message_is_not_mutated(run: Run, mailer_factory: Callable[..., Mailer]) -> None:
    mailer = mailer_factory(noreply_address="noreply@example.com")
    mail = {"to": "x@example.com"}

    run(mailer.send(mail, [{"filename": "a.txt", "content": "x"}]))

    assert mail == {"to": "x@example.com"}


@pytest.mark.os_agnostic
def test_sends_are_independent(run: Run, mailer: Mailer, transport_spy: TransportSpy) -> None:
    """A rejected send leaves the next one unaffected."""
    with pytest.raises(ValidationError):
        run(mailer.send({"to": ""}))

    run(mailer.send({"to": "x@example.com", "from": "y@example.com"}))

    assert transport_spy.send_count == 1
