"""Mailer options model, write-once holder, and config loader.

Provides the MailerOptions Pydantic model for validated, immutable mailer
settings, the MailerConfig holder with first-write-wins semantics, and the
loader that builds options from the layered configuration dictionary.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from typing import Annotated, Any, cast

from btx_lib_mail import validate_email_address, validate_smtp_host
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from lib_smtp_mailer.domain.errors import ConfigurationError, ValidationError

DEFAULT_HOSTNAME = "localhost"
_HOSTNAME_EXPECTED = "a hostname or IP address without port"

# Field order decides which error wins when several fields are malformed
_EXPECTED_TYPES: dict[str, str] = {
    "auth": "Mapping",
    "hostname": "str",
    "name": "str",
    "noreply_address": "str",
    "port": "int in 1..65535",
    "tls": "Mapping",
    "secure": "bool",
    "timeout": "positive float",
}

_FIELD_ALIASES: dict[str, str] = {
    "noreplyAddress": "noreply_address",
    "noreply": "noreply_address",
}


class MailerOptions(BaseModel):
    """Validated, immutable mailer options.

    Example:
        >>> options = MailerOptions(auth={"user": "a", "pass": "b"})
        >>> options.hostname, options.secure, options.tls
        ('localhost', False, {})
        >>> MailerOptions(auth={}, noreplyAddress="noreply@example.com").noreply_address
        'noreply@example.com'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    auth: dict[str, Any]
    hostname: StrictStr = DEFAULT_HOSTNAME
    name: StrictStr | None = None
    noreply_address: StrictStr | None = Field(
        default=None,
        validation_alias=AliasChoices("noreply_address", "noreplyAddress", "noreply"),
    )
    port: Annotated[StrictInt, Field(ge=1, le=65535)] | None = None
    tls: dict[str, Any] = Field(default_factory=dict)
    secure: bool = False
    timeout: Annotated[float, Field(gt=0)] | None = None

    @field_validator("hostname", mode="before")
    @classmethod
    def _default_blank_hostname(cls, v: Any) -> Any:
        """Fall back to localhost for None or blank host names."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_HOSTNAME
        return v

    @field_validator("name", "noreply_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only strings as "not configured"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("port", "timeout", mode="before")
    @classmethod
    def _zero_means_unset(cls, v: Any) -> Any:
        """Treat 0 as "not configured"; TOML has no null."""
        if v == 0 and not isinstance(v, bool):
            return None
        return v

    @field_validator("tls", mode="before")
    @classmethod
    def _coerce_none_tls(cls, v: Any) -> Any:
        if v is None:
            return {}
        return v

    @field_validator("secure", mode="before")
    @classmethod
    def _coerce_truthiness(cls, v: Any) -> bool:
        """Any supplied value counts by truthiness, as the TLS flag did historically."""
        return bool(v)

    @field_validator("hostname")
    @classmethod
    def _validate_hostname(cls, v: str) -> str:
        """Accept a bare host name or IP literal; the port belongs in ``port``.

        Example:
            >>> MailerOptions(auth={}, hostname="::1").hostname
            '::1'
        """
        try:
            ipaddress.ip_address(v)
        except ValueError:
            pass
        else:
            return v
        if ":" in v or "[" in v or "]" in v:
            raise ValidationError("hostname", _HOSTNAME_EXPECTED)
        try:
            validate_smtp_host(v)
        except ValueError as exc:
            raise ValidationError("hostname", _HOSTNAME_EXPECTED) from exc
        return v

    @field_validator("noreply_address")
    @classmethod
    def _validate_noreply_address(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            validate_email_address(v)
        except ValueError as exc:
            raise ValidationError("noreply_address", "a valid email address") from exc
        return v

    @property
    def username(self) -> str | None:
        """Login name from ``auth`` (``user`` or ``username``); empty means none."""
        value = self.auth.get("user", self.auth.get("username"))
        return value if isinstance(value, str) and value else None

    @property
    def password(self) -> str | None:
        """Login secret from ``auth`` (``pass`` or ``password``); empty means none."""
        value = self.auth.get("pass", self.auth.get("password"))
        return value if isinstance(value, str) and value else None

    def __repr__(self) -> str:
        """Return string representation with auth secrets redacted.

        Example:
            >>> options = MailerOptions(auth={"user": "a", "pass": "secret123"})
            >>> "secret123" in repr(options)
            False
            >>> "[REDACTED]" in repr(options)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "auth":
                redacted = {k: ("[REDACTED]" if k in ("pass", "password") else v) for k, v in value.items()}
                fields.append(f"{name}={redacted!r}")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailerOptions({', '.join(fields)})"


def _first_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Pick the error for the earliest field and turn it into a domain error."""
    candidates: list[tuple[int, ValidationError]] = []
    order = list(_EXPECTED_TYPES)
    for detail in exc.errors():
        loc = detail.get("loc", ())
        field = _FIELD_ALIASES.get(str(loc[0]), str(loc[0])) if loc else "options"
        original = detail.get("ctx", {}).get("error")
        if isinstance(original, ValidationError):
            error = original
        else:
            error = ValidationError(field, _EXPECTED_TYPES.get(field, "valid"))
        rank = order.index(field) if field in order else len(order)
        candidates.append((rank, error))
    if not candidates:
        return ValidationError("options", "Mapping")
    return min(candidates, key=lambda item: item[0])[1]


def configure(options: Mapping[str, Any] | MailerOptions) -> MailerOptions:
    """Validate and normalize mailer options once.

    Args:
        options: Raw options mapping (``auth``, ``hostname``, ``name``,
            ``noreply_address``/``noreplyAddress``/``noreply``, ``port``,
            ``tls``, ``secure``, ``timeout``) or an existing MailerOptions.

    Returns:
        Frozen options with defaults applied.

    Raises:
        ValidationError: Naming the first malformed field and its expected type.

    Example:
        >>> options = configure({"auth": {"user": "a", "pass": "b"}})
        >>> options.hostname
        'localhost'
        >>> configure({})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: "auth" must be Mapping.
    """
    if isinstance(options, MailerOptions):
        return options
    if not isinstance(options, Mapping):
        raise ValidationError("options", "Mapping")
    try:
        return MailerOptions.model_validate(dict(options))
    except PydanticValidationError as exc:
        raise _first_validation_error(exc) from exc


class MailerConfig:
    """Holder of mailer options with write-once fields.

    Once a field holds a value other than None, later :meth:`configure`
    calls leave it untouched; they only fill fields still unset. Every call
    validates its input in full before anything is stored.

    Example:
        >>> config = MailerConfig()
        >>> _ = config.configure({"auth": {"user": "a"}, "hostname": "smtp.one.test"})
        >>> _ = config.configure({"auth": {"user": "b"}, "hostname": "smtp.two.test", "port": 2525})
        >>> config.options.hostname, config.options.port, config.options.auth
        ('smtp.one.test', 2525, {'user': 'a'})
    """

    def __init__(self, options: Mapping[str, Any] | MailerOptions | None = None) -> None:
        self._fields: dict[str, Any] = {}
        self._options: MailerOptions | None = None
        if options is not None:
            self.configure(options)

    def configure(self, options: Mapping[str, Any] | MailerOptions) -> MailerOptions:
        """Validate *options* and store each field not already set.

        Raises:
            ValidationError: Naming the first malformed field.
        """
        parsed = configure(options)
        for name in MailerOptions.model_fields:
            if self._fields.get(name) is None:
                self._fields[name] = getattr(parsed, name)
        self._options = MailerOptions.model_validate(self._fields)
        return self._options

    @property
    def is_configured(self) -> bool:
        return self._options is not None

    @property
    def options(self) -> MailerOptions:
        """Current frozen options.

        Raises:
            ConfigurationError: Nothing has been configured yet.
        """
        if self._options is None:
            raise ConfigurationError("Mailer options have not been configured")
        return self._options


def load_mailer_options_from_dict(config_dict: Mapping[str, Any]) -> MailerOptions:
    """Load MailerOptions from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailerOptions model. The bundled defaults use ``0`` and ``""`` for
    unset fields, which MailerOptions reads as None.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'mailer' section.

    Returns:
        Validated mailer options.

    Raises:
        ConfigurationError: The 'mailer' section is missing or empty.
        ValidationError: A field in the section is malformed.

    Example:
        >>> options = load_mailer_options_from_dict(
        ...     {"mailer": {"auth": {"user": "a", "pass": "b"}, "hostname": "smtp.example.com", "port": 0}}
        ... )
        >>> options.hostname, options.port
        ('smtp.example.com', None)
    """
    section: Any = config_dict.get("mailer")
    if not section:
        raise ConfigurationError("No mailer options configured (the [mailer] section is empty)")
    if not isinstance(section, Mapping):
        raise ValidationError("mailer", "Mapping")

    return configure(dict(cast(Mapping[str, Any], section)))


__all__ = [
    "DEFAULT_HOSTNAME",
    "MailerConfig",
    "MailerOptions",
    "configure",
    "load_mailer_options_from_dict",
]
