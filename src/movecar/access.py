"""Region access gate applied before any request-facing operation."""

from __future__ import annotations

from collections.abc import Iterable


class RegionGate:
    """Admit requests by ISO country code.

    Requests without country information are admitted; only a known,
    disallowed country is rejected. An empty allow-list disables the gate.
    """

    def __init__(self, allowed_countries: Iterable[str]) -> None:
        self._allowed = frozenset(code.strip().upper() for code in allowed_countries if code.strip())

    @property
    def enabled(self) -> bool:
        return bool(self._allowed)

    def is_allowed(self, country: str | None) -> bool:
        if not self._allowed:
            return True
        if country is None or not country.strip():
            return True
        return country.strip().upper() in self._allowed
