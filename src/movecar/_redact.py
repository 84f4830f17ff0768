"""Helpers for safe debug logging.

The Bark device URL embeds the device key, and requester/owner positions are
personal data. Both are masked before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

_REDACTED = "<redacted>"

# Fields of a stored location record that reveal where someone is.
_LOCATION_FIELDS: frozenset[str] = frozenset({"lat", "lng", "amapUrl", "appleUrl"})


def redact_url(url: str) -> str:
    """Keep scheme and host of *url*, hiding the path and query."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return _REDACTED
    return f"{parts.scheme}://{parts.netloc}/{_REDACTED}"


def redact_location_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Mask coordinates and map links in a flat location record."""
    return {key: _REDACTED if key in _LOCATION_FIELDS else value for key, value in payload.items()}
