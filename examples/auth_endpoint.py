#!/usr/bin/env python3
"""
Channel authorization endpoint.

Serves POST /pusher/auth for browser clients subscribing to private and
presence channels. The client library posts socket_id and channel_name as
form data; the JSON response is handed back to the subscription.

Required environment variables:
    PUSHER_APP_ID
    PUSHER_KEY
    PUSHER_SECRET
"""

from __future__ import annotations

import logging

from aiohttp import web

from pusher_http import InvalidArgument, PusherClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("pusher-auth")

PUSHER_KEY = web.AppKey("pusher", PusherClient)


def current_user(request: web.Request) -> dict[str, object]:
    """Replace with the application's session lookup."""
    return {"user_id": request.headers.get("X-User-Id", "guest"), "user_info": {"name": "Guest"}}


async def authorize(request: web.Request) -> web.Response:
    pusher = request.app[PUSHER_KEY]
    form = await request.post()
    socket_id = str(form.get("socket_id", ""))
    channel = str(form.get("channel_name", ""))

    try:
        if channel.startswith("presence-"):
            token = await pusher.authenticate_presence_channel(
                socket_id, channel, current_user(request)
            )
        else:
            token = await pusher.authorize_channel(socket_id, channel)
    except InvalidArgument as e:
        logger.warning("rejected auth request channel=%s: %s", channel, e)
        raise web.HTTPForbidden(text=str(e)) from e

    logger.info("authorized socket_id=%s channel=%s", socket_id, channel)
    return web.json_response(token)


async def on_cleanup(app: web.Application) -> None:
    await app[PUSHER_KEY].close()


def create_app() -> web.Application:
    app = web.Application()
    app[PUSHER_KEY] = PusherClient()
    app.router.add_post("/pusher/auth", authorize)
    app.on_cleanup.append(on_cleanup)
    return app


if __name__ == "__main__":
    web.run_app(create_app(), port=8080)
