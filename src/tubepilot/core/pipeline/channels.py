"""Channel discovery and subscription for a topic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tubepilot.core.models.entities import ChannelCandidate

if TYPE_CHECKING:
    from tubepilot.core.interfaces.platform import IVideoPlatform

logger = structlog.get_logger(__name__)


async def find_best_channels(
    platform: IVideoPlatform,
    topic: str,
    max_channels: int = 5,
) -> list[ChannelCandidate]:
    """Search for the most relevant channels for a topic.

    Results without a channel identifier are dropped. Search failures
    propagate to the caller.
    """
    if max_channels <= 0:
        return []

    logger.info("[CHANNELS] Searching for best channels", topic=topic, max_channels=max_channels)
    items = await platform.search(
        topic,
        kind="channel",
        max_results=max_channels,
        order="relevance",
    )

    channels = []
    for item in items:
        candidate = ChannelCandidate.from_search_item(item)
        if candidate is not None:
            channels.append(candidate)

    logger.info("[CHANNELS] Found top channels", topic=topic, count=len(channels))
    return channels


async def subscribe_to_channel(platform: IVideoPlatform, channel: ChannelCandidate) -> bool:
    """Subscribe to a single channel, logging instead of raising on failure."""
    try:
        await platform.insert_subscription(channel.channel_id)
    except Exception as e:
        logger.error(
            "[CHANNELS] Error subscribing to channel",
            channel_id=channel.channel_id,
            error=str(e),
        )
        return False
    logger.info("[CHANNELS] Subscribed to channel", channel_id=channel.channel_id)
    return True


async def subscribe_to_top_channels(
    platform: IVideoPlatform,
    topic: str,
    max_channels: int = 5,
) -> list[str]:
    """Discover the top channels for a topic and subscribe to each.

    Args:
        platform: Authenticated platform client
        topic: Search topic
        max_channels: Maximum number of channels to subscribe to

    Returns:
        Identifiers of the channels successfully subscribed to
    """
    channels = await find_best_channels(platform, topic, max_channels)

    subscribed = []
    for channel in channels:
        if await subscribe_to_channel(platform, channel):
            subscribed.append(channel.channel_id)

    logger.info(
        "[CHANNELS] Channel subscription finished",
        topic=topic,
        subscribed=subscribed,
        failed=len(channels) - len(subscribed),
    )
    return subscribed
