"""
Domain events published to Redis pub/sub.

Publishing is best effort: routers schedule `publish_event` through
FastAPI BackgroundTasks so it runs after the response, and every failure
is logged and swallowed.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..config import settings
from ..redis_client import redis_client

logger = logging.getLogger(__name__)

EPISODE_WATCHED = "episode.watched"
REVIEW_CREATED = "review.created"
USER_CREATED = "user.created"
SERIES_UPDATED = "series.updated"
ACTOR_CREATED = "actor.created"


def channel_for(event_type: str) -> str:
    return f"{settings.EVENTS_CHANNEL_PREFIX}.{event_type}"


async def publish_event(event_type: str, payload: Dict[str, Any]) -> bool:
    """
    Publish one event, retrying EVENT_PUBLISH_RETRIES times.
    Returns True when delivered to Redis, False otherwise. Never raises.
    """
    if not settings.EVENTS_ENABLED:
        logger.debug(f"Events disabled, dropping {event_type}")
        return False

    message = {
        "event_type": event_type,
        "occurred_at": datetime.utcnow().isoformat(),
        "payload": payload,
    }
    channel = channel_for(event_type)
    attempts = max(settings.EVENT_PUBLISH_RETRIES, 0) + 1

    for attempt in range(1, attempts + 1):
        try:
            await asyncio.wait_for(
                redis_client.publish(channel, message),
                timeout=settings.EVENT_PUBLISH_TIMEOUT,
            )
            logger.info(f"📣 Published {event_type} on {channel}")
            return True
        except Exception as e:
            logger.warning(f"⚠️ Publish {event_type} failed (attempt {attempt}/{attempts}): {e}")

    logger.error(f"❌ Giving up on {event_type} after {attempts} attempts")
    return False


# ==================== PAYLOAD BUILDERS ====================

def episode_watched_payload(user, episode, is_completed: bool, watched_at: Optional[datetime] = None) -> dict:
    season = episode.season
    series = season.series if season else None
    return {
        "episode_id": episode.id,
        "episode_number": episode.episode_number,
        "season_id": episode.season_id,
        "season_number": season.season_number if season else None,
        "series_id": series.id if series else None,
        "series_title": series.title if series else "",
        "user_id": user.id,
        "user_name": user.username,
        "is_completed": is_completed,
        "watched_at": (watched_at or datetime.utcnow()).isoformat(),
    }


def review_created_payload(user, series, rating) -> dict:
    return {
        "rating_id": rating.id,
        "user_id": user.id,
        "user_name": user.username,
        "series_id": series.id,
        "series_title": series.title,
        "score": rating.score,
        "comment": rating.comment,
        "created_at": rating.created_at.isoformat() if rating.created_at else None,
    }


def user_created_payload(user) -> dict:
    return {
        "user_id": user.id,
        "user_name": user.username,
        "email": user.email,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def series_updated_payload(series) -> dict:
    return {
        "series_id": series.id,
        "title": series.title,
        "updated_at": (series.updated_at or datetime.utcnow()).isoformat(),
    }


def actor_created_payload(actor) -> dict:
    return {
        "actor_id": actor.id,
        "first_name": actor.first_name,
        "last_name": actor.last_name,
        "created_at": actor.created_at.isoformat() if actor.created_at else None,
    }
