"""Push delivery to the vehicle owner's phone via a Bark endpoint."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote, urlencode

import aiohttp

from movecar._constants import BARK_GROUP, BARK_ICON, BARK_LEVEL, BARK_SOUND, BARK_TITLE
from movecar._redact import redact_url
from movecar.exceptions import DeliveryFailedError, MoveCarConfigError, MoveCarError

_logger = logging.getLogger(__name__)


class DeliveryGateway(Protocol):
    """Structural delivery interface used by the workflow.

    Implementations raise :class:`DeliveryFailedError` for any failure,
    transport-level or a non-success response alike.
    """

    async def deliver(self, body: str, confirm_url: str) -> None:
        ...


def build_bark_url(bark_url: str, body: str, confirm_url: str) -> str:
    """Build the Bark push URL.

    Title and body travel as path segments; the owner confirmation page is
    attached as the tap-through ``url`` parameter.
    """
    query = urlencode(
        {
            "group": BARK_GROUP,
            "level": BARK_LEVEL,
            "call": "1",
            "sound": BARK_SOUND,
            "icon": BARK_ICON,
            "url": confirm_url,
        },
        quote_via=quote,
        safe="",
    )
    return f"{bark_url.rstrip('/')}/{quote(BARK_TITLE, safe='')}/{quote(body, safe='')}?{query}"


class BarkGateway:
    """Deliver notifications through a Bark device endpoint.

    Usage::

        async with BarkGateway(config.bark_url) as gateway:
            await gateway.deliver(body, config.confirm_url)

    Pass *session* to share an existing ``aiohttp.ClientSession``; it is
    then left open on exit.
    """

    def __init__(self, bark_url: str, session: aiohttp.ClientSession | None = None) -> None:
        if not bark_url:
            raise MoveCarConfigError("bark_url is required to deliver notifications")
        self._bark_url = bark_url
        self._external_session = session is not None
        self._http = session

    async def __aenter__(self) -> BarkGateway:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http is not None:
            await self._http.close()
            self._http = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None:
            raise MoveCarError("Gateway not initialized. Use 'async with BarkGateway(...) as gateway:'")
        return self._http

    async def deliver(self, body: str, confirm_url: str) -> None:
        http = self._require_session()
        url = build_bark_url(self._bark_url, body, confirm_url)
        _logger.debug("GET %s", redact_url(url))

        try:
            async with http.get(url) as resp:
                if resp.status < 200 or resp.status >= 300:
                    text = await resp.text()
                    raise DeliveryFailedError(
                        f"Bark API Error: HTTP {resp.status}: {text[:200]}",
                        status_code=resp.status,
                    )
        except DeliveryFailedError:
            raise
        except aiohttp.ClientError as exc:
            raise DeliveryFailedError(f"Bark API Error: {exc}") from exc

        _logger.debug("Bark push delivered")
