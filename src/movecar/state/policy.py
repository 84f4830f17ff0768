"""Expiry policy shared by store implementations."""

from __future__ import annotations

from datetime import datetime, timedelta


def expires_at(now: datetime, ttl_seconds: float) -> datetime:
    if ttl_seconds <= 0:
        raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
    return now + timedelta(seconds=ttl_seconds)


def is_expired(now: datetime, expires_at: datetime) -> bool:
    return now >= expires_at
