"""Adapters layer - infrastructure integrations.

Contents:
    * :mod:`.config` - Layered configuration loading
    * :mod:`.mailer` - Mailer options, SMTP transport, and sending
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
"""

from __future__ import annotations

__all__: list[str] = []
