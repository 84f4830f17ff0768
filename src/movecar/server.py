"""JSON HTTP surface for the notify/confirm workflow.

Routes:
  - POST /api/notify          requester sends a notification
  - GET  /api/get-location    owner reads the requester's position
  - POST /api/owner-confirm   owner confirms (always succeeds)
  - GET  /api/check-status    requester polls status and owner position
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from aiohttp import web

from movecar.access import RegionGate
from movecar.config import MoveCarConfig
from movecar.delivery import BarkGateway, DeliveryGateway
from movecar.exceptions import LocationNotFoundError
from movecar.models.notify import NotifyRequest, OwnerConfirmation
from movecar.state.store import KeyValueStore, MemoryStore
from movecar.workflow import NotificationWorkflow

_logger = logging.getLogger(__name__)

WORKFLOW_KEY = web.AppKey("workflow", NotificationWorkflow)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def _read_json(request: web.Request) -> Any:
    """Parse the request body, treating anything unparseable as empty."""
    if not request.can_read_body:
        return {}
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        _logger.debug("Ignoring malformed JSON body on %s", request.path)
        return {}


def _region_middleware(gate: RegionGate, header: str) -> Any:
    @web.middleware
    async def region_gate(request: web.Request, handler: Handler) -> web.StreamResponse:
        country = request.headers.get(header)
        if not gate.is_allowed(country):
            _logger.info("Rejected request from country=%s", country)
            return web.Response(status=403, text="Access Denied")
        return await handler(request)

    return region_gate


async def handle_notify(request: web.Request) -> web.Response:
    workflow = request.app[WORKFLOW_KEY]
    notify_request = NotifyRequest.from_payload(await _read_json(request))
    try:
        await workflow.notify(notify_request)
    except Exception as exc:
        _logger.warning("Notify failed: %s", exc)
        return web.json_response({"success": False, "error": str(exc)}, status=500)
    return web.json_response({"success": True})


async def handle_get_location(request: web.Request) -> web.Response:
    workflow = request.app[WORKFLOW_KEY]
    try:
        record = await workflow.get_requester_location()
    except LocationNotFoundError:
        return web.json_response({"error": "No location"}, status=404)
    return web.json_response(record.to_payload())


async def handle_owner_confirm(request: web.Request) -> web.Response:
    workflow = request.app[WORKFLOW_KEY]
    confirmation = OwnerConfirmation.from_payload(await _read_json(request))
    await workflow.confirm(confirmation)
    return web.json_response({"success": True})


async def handle_check_status(request: web.Request) -> web.Response:
    workflow = request.app[WORKFLOW_KEY]
    snapshot = await workflow.get_status()
    return web.json_response(snapshot.to_payload())


def create_app(
    config: MoveCarConfig,
    *,
    store: KeyValueStore | None = None,
    gateway: DeliveryGateway | None = None,
) -> web.Application:
    """Build the aiohttp application.

    Without an explicit *gateway*, a :class:`BarkGateway` is built from
    *config*; its HTTP session opens on startup and closes on cleanup.

    Raises
    ------
    MoveCarConfigError
        No gateway was given and ``config.bark_url`` is empty.
    """
    gate = RegionGate(config.allowed_countries)
    middlewares = [_region_middleware(gate, config.country_header)] if gate.enabled else []
    app = web.Application(middlewares=middlewares)
    kv_store: KeyValueStore = store if store is not None else MemoryStore()

    if gateway is None:
        bark = BarkGateway(config.bark_url)

        async def _bark_session(_app: web.Application) -> AsyncIterator[None]:
            async with bark:
                yield

        app.cleanup_ctx.append(_bark_session)
        gateway = bark

    app[WORKFLOW_KEY] = NotificationWorkflow(kv_store, gateway, config)

    app.router.add_post("/api/notify", handle_notify)
    app.router.add_get("/api/get-location", handle_get_location)
    app.router.add_post("/api/owner-confirm", handle_owner_confirm)
    app.router.add_get("/api/check-status", handle_check_status)
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the move-car notification service.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = MoveCarConfig.from_env()
    web.run_app(create_app(config), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
