"""Service configuration for movecar."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from movecar._constants import (
    DEFAULT_MESSAGE,
    LOCATION_TTL_SECONDS,
    NOTIFY_DELAY_SECONDS,
    OWNER_CONFIRM_PATH,
    STATUS_TTL_SECONDS,
)


def _env_countries(value: str) -> frozenset[str]:
    return frozenset(part.strip().upper() for part in value.split(",") if part.strip())


@dataclasses.dataclass(frozen=True)
class MoveCarConfig:
    """Service configuration.

    Parameters
    ----------
    bark_url : str
        Bark device endpoint, e.g. ``"https://api.day.app/<device-key>"``.
        Treated as a secret and never logged.
    public_base_url : str
        Origin the owner's confirmation link points at.
    location_ttl : int
        Seconds a requester/owner location record stays readable.
    status_ttl : int
        Seconds the shared notify status stays readable.
    notify_delay : float
        Debounce in seconds applied to delayed notifications.
    allowed_countries : frozenset of str
        ISO country codes admitted by the region gate. Empty disables it.
    country_header : str
        Request header carrying the client's country code.
    default_message : str
        Message used when the requester leaves the message empty.
    """

    bark_url: str = ""
    public_base_url: str = "http://localhost:8080"
    location_ttl: int = LOCATION_TTL_SECONDS
    status_ttl: int = STATUS_TTL_SECONDS
    notify_delay: float = NOTIFY_DELAY_SECONDS
    allowed_countries: frozenset[str] = frozenset({"CN"})
    country_header: str = "CF-IPCountry"
    default_message: str = DEFAULT_MESSAGE

    @property
    def confirm_url(self) -> str:
        """Absolute URL of the owner confirmation page."""
        return f"{self.public_base_url.rstrip('/')}{OWNER_CONFIRM_PATH}"

    @classmethod
    def from_env(cls, **overrides: Any) -> MoveCarConfig:
        """Create configuration from ``MOVECAR_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MOVECAR_BARK_URL": "bark_url",
            "MOVECAR_PUBLIC_BASE_URL": "public_base_url",
            "MOVECAR_COUNTRY_HEADER": "country_header",
            "MOVECAR_DEFAULT_MESSAGE": "default_message",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric fields, handled separately
        location_ttl = env.get("MOVECAR_LOCATION_TTL")
        if location_ttl is not None and "location_ttl" not in overrides:
            config_kwargs["location_ttl"] = int(location_ttl)

        status_ttl = env.get("MOVECAR_STATUS_TTL")
        if status_ttl is not None and "status_ttl" not in overrides:
            config_kwargs["status_ttl"] = int(status_ttl)

        delay = env.get("MOVECAR_NOTIFY_DELAY")
        if delay is not None and "notify_delay" not in overrides:
            config_kwargs["notify_delay"] = float(delay)

        countries = env.get("MOVECAR_ALLOWED_COUNTRIES")
        if countries is not None and "allowed_countries" not in overrides:
            config_kwargs["allowed_countries"] = _env_countries(countries)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
