"""Custom exception hierarchy for movecar."""

from __future__ import annotations


class MoveCarError(Exception):
    """Base exception for all movecar errors."""


class MoveCarConfigError(MoveCarError):
    """Invalid or missing configuration."""


class StoreError(MoveCarError):
    """The key-value store failed to read or write a key, or holds garbage."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class LocationNotFoundError(MoveCarError):
    """No location record is stored, or it has expired."""

    def __init__(self, message: str = "No location", *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class DeliveryFailedError(MoveCarError):
    """Push delivery failed (network error or non-success response)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message)
