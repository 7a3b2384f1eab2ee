"""Helpers for safe debug logging.

Hold records carry the holder's e-mail address.  This module masks
personal fields before records are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_PERSONAL_KEYS: frozenset[str] = frozenset({"holderemail", "holder_email", "email"})


def mask_email(value: str) -> str:
    """Keep the first character and the domain: ``a***@x.com``."""
    local, sep, domain = value.partition("@")
    if not sep or not local:
        return "<redacted>"
    return f"{local[0]}***@{domain}"


def redact_for_log(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a record payload with e-mail fields masked.

    Nested mappings (e.g. a result wrapping a record) are masked too.
    """
    redacted: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, Mapping):
            redacted[key] = redact_for_log(value)
        elif str(key).lower() in _PERSONAL_KEYS and value is not None:
            redacted[key] = mask_email(value) if isinstance(value, str) else "<redacted>"
        else:
            redacted[key] = value
    return redacted
