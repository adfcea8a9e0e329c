#!/usr/bin/env python3
"""
Basic usage example.

Publishes an event, then reports which presence channels are occupied.

Required environment variables:
    PUSHER_APP_ID
    PUSHER_KEY
    PUSHER_SECRET
    PUSHER_CLUSTER (optional, default: mt1)
"""

import asyncio
import logging

from pusher_http import PusherClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    async with PusherClient() as pusher:
        result = await pusher.trigger("notifications", "alert", {"message": "disk almost full"})
        if not result.success:
            logger.error("trigger failed status=%s error=%s", result.status, result.error)
            return
        if result.body_md5_omitted:
            logger.warning("event sent without body_md5")

        channels = await pusher.get_channels(prefix="presence-", info=["user_count"])
        for name, info in channels.get("channels", {}).items():
            logger.info("channel=%s users=%s", name, info.get("user_count"))


if __name__ == "__main__":
    asyncio.run(main())
