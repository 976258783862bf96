"""
Webhook Server - HTTP entry point for IPAM change notifications

Routes:
    POST /       IPAM webhook; 200 on success, 400 on bad input,
                 500 when planning or the DNS API fails
    GET  /hello  health check

Each event runs synchronously in a worker thread, under a deadline. When
the deadline expires the remaining steps of the plan are abandoned.
"""

import asyncio
import functools
import logging
import threading
from typing import Optional, Tuple

from aiohttp import web

from ..core.exceptions import (
    DNSSyncError,
    InvalidAddressError,
    SignatureError,
    WebhookParseError,
)
from ..core.sync_manager import SyncManager
from ..parsers.webhook import WebhookParser
from ..utils.config import AppConfig
from ..utils.signature import SIGNATURE_HEADER, check_signature

logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", AppConfig)
MANAGER_KEY = web.AppKey("manager", SyncManager)


async def handle_hello(request: web.Request) -> web.Response:
    """Used for health checks."""
    return web.json_response({"Hello": "World!"})


async def handle_webhook(request: web.Request) -> web.Response:
    """Verify, decode and process one webhook delivery."""
    config = request.app[CONFIG_KEY]
    manager = request.app[MANAGER_KEY]

    body = await request.read()

    try:
        check_signature(request.headers.get(SIGNATURE_HEADER), body, config.secret)
    except SignatureError as e:
        logger.warning(str(e))
        raise web.HTTPBadRequest(text=str(e))

    try:
        event = WebhookParser(body).parse()
    except (WebhookParseError, InvalidAddressError) as e:
        logger.warning(f"Rejected webhook: {e}")
        raise web.HTTPBadRequest(text=str(e))

    loop = asyncio.get_running_loop()
    cancel_event = threading.Event()
    work = functools.partial(manager.process_event, event, cancel_event=cancel_event)
    try:
        await asyncio.wait_for(
            loop.run_in_executor(None, work), timeout=config.event_timeout
        )
    except asyncio.TimeoutError:
        # The running step finishes; no further step is started
        cancel_event.set()
        logger.error(
            f"{event.request_id or '-'} Processing did not finish within "
            f"{config.event_timeout}s, reporting failure"
        )
        raise web.HTTPInternalServerError()
    except DNSSyncError as e:
        logger.error(f"{event.request_id or '-'} {e}")
        raise web.HTTPInternalServerError()

    return web.Response(status=200)


def create_app(config: AppConfig, manager: Optional[SyncManager] = None) -> web.Application:
    """Build the aiohttp application."""
    app = web.Application()
    app[CONFIG_KEY] = config
    app[MANAGER_KEY] = manager or SyncManager(config)
    app.router.add_post("/", handle_webhook)
    app.router.add_get("/hello", handle_hello)
    return app


def parse_listen_address(listen_address: str) -> Tuple[Optional[str], int]:
    """Split "host:port" (or ":port") into its parts."""
    host, _, port = listen_address.rpartition(":")
    host = host.strip("[]") or None
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"Invalid listen address: {listen_address}") from None


def run_server(config: AppConfig, manager: Optional[SyncManager] = None):
    """Serve webhooks until interrupted."""
    host, port = parse_listen_address(config.listen_address)
    logger.info(f"Listening on {config.listen_address}...")
    web.run_app(create_app(config, manager), host=host, port=port, print=None)
