"""
Completion gate: has the user watched every episode of a series?
"""
import logging
from sqlalchemy.orm import Session

from ..models import Episode, EpisodeProgress, Season, Series

logger = logging.getLogger(__name__)


def series_episode_ids(db: Session, series_id: int) -> set:
    rows = (
        db.query(Episode.id)
        .join(Season, Episode.season_id == Season.id)
        .filter(Season.series_id == series_id)
        .all()
    )
    return {row[0] for row in rows}


def completed_episode_ids(db: Session, user_id: int, episode_ids) -> set:
    """Distinct episode ids among `episode_ids` the user has completed"""
    if not episode_ids:
        return set()
    rows = (
        db.query(EpisodeProgress.episode_id)
        .filter(
            EpisodeProgress.user_id == user_id,
            EpisodeProgress.is_completed == True,  # noqa: E712
            EpisodeProgress.episode_id.in_(list(episode_ids)),
        )
        .distinct()
        .all()
    )
    return {row[0] for row in rows}


def has_completed(db: Session, user_id: int, series_id: int) -> bool:
    """
    True iff every episode of the series has a completed progress row.
    A series without episodes counts as completed; an unknown series does not.
    """
    if db.query(Series.id).filter(Series.id == series_id).first() is None:
        return False

    all_ids = series_episode_ids(db, series_id)
    if not all_ids:
        return True

    watched = completed_episode_ids(db, user_id, all_ids)
    completed = len(watched) == len(all_ids)
    logger.debug(f"Completion gate user={user_id} series={series_id}: {len(watched)}/{len(all_ids)}")
    return completed
