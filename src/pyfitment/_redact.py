"""Redaction of Storefront request details for DEBUG logs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyfitment._constants import ACCESS_TOKEN_HEADER

_SECRET_HEADERS: frozenset[str] = frozenset({ACCESS_TOKEN_HEADER.lower(), "authorization", "cookie"})


def redact_for_log(request: Mapping[str, Any], *, max_string: int = 512) -> dict[str, Any]:
    """Flat copy of a header or variables mapping with secrets masked.

    String values longer than *max_string* are cut short.
    """
    redacted: dict[str, Any] = {}
    for key, value in request.items():
        if key.lower() in _SECRET_HEADERS:
            redacted[key] = "<redacted>"
        elif isinstance(value, str) and len(value) > max_string:
            redacted[key] = f"{value[:max_string]}...<truncated>"
        else:
            redacted[key] = value
    return redacted
