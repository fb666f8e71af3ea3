"""Static package metadata shared by logging, configuration, and tests.

Kept free of imports so every layer can read it without cycles.
"""

from __future__ import annotations

name = "lib_smtp_mailer"
title = "Validated SMTP mailer configuration and sending on top of aiosmtplib"
version = "1.0.0"
homepage = "https://github.com/bitranox/lib_smtp_mailer"
author = "bitranox"
author_email = "bitranox@gmail.com"

# Identifiers used by lib_layered_config to resolve platform config paths
LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "SMTP Mailer"
LAYEREDCONF_SLUG = "lib-smtp-mailer"


def print_info() -> None:
    """Print the package metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for lib_smtp_mailer:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "title",
    "version",
]
