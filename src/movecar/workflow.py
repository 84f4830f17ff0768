"""Notify/confirm workflow.

One active notify cycle at a time, shared by every requester::

    idle --notify--> waiting --confirm--> confirmed
      ^                 |                     |
      +---- TTL expiry -+---------------------+

The status and both location records live under fixed store keys, so a
second requester's ``notify`` overwrites the first one's state, including
while the first is still inside its debounce window. This is accepted
last-write-wins behavior, not isolated sessions.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from pydantic import ValidationError

from movecar._constants import (
    LOCATION_ATTACHED,
    LOCATION_MISSING,
    MESSAGE_PREFIX,
    NOTIFY_HEADER,
    NOTIFY_STATUS_KEY,
    OWNER_LOCATION_KEY,
    REQUESTER_LOCATION_KEY,
)
from movecar._redact import redact_location_payload
from movecar.config import MoveCarConfig
from movecar.coords import build_map_links
from movecar.delivery import DeliveryGateway
from movecar.exceptions import DeliveryFailedError, LocationNotFoundError, StoreError
from movecar.models.location import GeoPoint, LocationRecord
from movecar.models.notify import (
    NotifyRequest,
    NotifyResult,
    NotifyStatus,
    OwnerConfirmation,
    StatusSnapshot,
)
from movecar.state.store import KeyValueStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_notify_body(request: NotifyRequest, *, default_message: str) -> str:
    """Render the push body shown on the owner's phone."""
    lines = [NOTIFY_HEADER, f"{MESSAGE_PREFIX}{request.message or default_message}"]
    lines.append(LOCATION_ATTACHED if request.location is not None else LOCATION_MISSING)
    return "\n".join(lines)


class NotificationWorkflow:
    """Coordinate requester notifications and owner confirmations.

    Parameters
    ----------
    store : KeyValueStore
        Shared TTL store holding status and location records.
    gateway : DeliveryGateway
        Push delivery collaborator.
    config : MoveCarConfig
        TTLs, debounce window and confirmation URL.
    sleep : callable
        Awaitable sleep used for the delayed-notify debounce. Defaults to
        :func:`asyncio.sleep`, which is cancelled along with the calling task.
    clock : callable
        Source of capture timestamps for owner locations.
    """

    def __init__(
        self,
        store: KeyValueStore,
        gateway: DeliveryGateway,
        config: MoveCarConfig,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._config = config
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # Requester side
    # ------------------------------------------------------------------

    async def notify(self, request: NotifyRequest) -> NotifyResult:
        """Record a notify attempt and push it to the owner.

        The ``waiting`` status and any requester location are written before
        delivery and stay written if delivery fails.

        Raises
        ------
        DeliveryFailedError
            The push could not be delivered.
        """
        body = build_notify_body(request, default_message=self._config.default_message)

        if request.location is not None:
            record = self._make_record(request.location)
            await self._put_record(REQUESTER_LOCATION_KEY, record)

        await self._put_status(NotifyStatus.WAITING)

        if request.delayed:
            _logger.debug("Delaying notification by %ss", self._config.notify_delay)
            await self._sleep(self._config.notify_delay)

        try:
            await self._gateway.deliver(body, self._config.confirm_url)
        except DeliveryFailedError:
            _logger.warning("Notification delivery failed; status stays %s", NotifyStatus.WAITING.value)
            raise

        _logger.info("Notification delivered (location=%s)", request.location is not None)
        return NotifyResult(delivered=True)

    async def get_requester_location(self) -> LocationRecord:
        """Return the requester's stored location.

        Raises
        ------
        LocationNotFoundError
            Nothing stored, or the record expired.
        """
        record = await self._get_record(REQUESTER_LOCATION_KEY)
        if record is None:
            raise LocationNotFoundError(key=REQUESTER_LOCATION_KEY)
        return record

    async def get_status(self) -> StatusSnapshot:
        """Poll the shared status; absent status reads as ``waiting``."""
        raw_status = await self._store.get(NOTIFY_STATUS_KEY)
        status = NotifyStatus(raw_status) if raw_status else NotifyStatus.WAITING
        owner_location = await self._get_record(OWNER_LOCATION_KEY)
        return StatusSnapshot(status=status, owner_location=owner_location)

    # ------------------------------------------------------------------
    # Owner side
    # ------------------------------------------------------------------

    async def confirm(self, confirmation: OwnerConfirmation) -> None:
        """Mark the notify cycle confirmed.

        Never raises. A failure while recording the owner's location is
        logged and ignored; the status is set to ``confirmed`` regardless.
        """
        if confirmation.location is not None:
            try:
                record = self._make_record(confirmation.location, recorded_at=self._clock())
                await self._put_record(OWNER_LOCATION_KEY, record)
            except Exception:
                _logger.warning("Could not store owner location; confirming anyway", exc_info=True)

        try:
            await self._put_status(NotifyStatus.CONFIRMED)
        except Exception:
            _logger.error("Could not store confirmed status", exc_info=True)
            return
        _logger.info("Notification confirmed by owner")

    # ------------------------------------------------------------------
    # Store helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _make_record(point: GeoPoint, *, recorded_at: datetime | None = None) -> LocationRecord:
        return LocationRecord(point=point, links=build_map_links(point), recorded_at=recorded_at)

    async def _put_record(self, key: str, record: LocationRecord) -> None:
        payload = record.to_payload()
        _logger.debug("Writing %s %s", key, redact_location_payload(payload))
        await self._store.put(key, json.dumps(payload, ensure_ascii=False), ttl_seconds=self._config.location_ttl)

    async def _put_status(self, status: NotifyStatus) -> None:
        await self._store.put(NOTIFY_STATUS_KEY, status.value, ttl_seconds=self._config.status_ttl)

    async def _get_record(self, key: str) -> LocationRecord | None:
        raw = await self._store.get(key)
        if raw is None:
            return None
        try:
            return LocationRecord.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise StoreError(f"Stored value for {key} is not a location record", key=key) from exc
