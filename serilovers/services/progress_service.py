"""
SeriLovers Progress Service
Episode progress ledger and the per-series / per-season aggregates built on it
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..exceptions import NotFoundError, ValidationFailedError
from ..models import Episode, EpisodeProgress, Season, Series
from .challenge_service import challenge_service
from .completion import completed_episode_ids, series_episode_ids
from .watching_status import calculate_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_WATCHED_MESSAGE = "All episodes watched"
NONE_WATCHED_MESSAGE = "No episodes watched yet"


class ProgressService:
    """
    Aggregates are recomputed from the ledger on every read.
    """

    # ============================================================
    # Helpers
    # ============================================================

    def _get_series(self, db: Session, series_id: int) -> Series:
        series = db.query(Series).filter(Series.id == series_id).first()
        if not series:
            raise NotFoundError("Series", series_id)
        return series

    def _get_season(self, db: Session, season_id: int) -> Season:
        season = db.query(Season).filter(Season.id == season_id).first()
        if not season:
            raise NotFoundError("Season", season_id)
        return season

    def _ordered_series_episodes(self, db: Session, series_id: int) -> List[Episode]:
        return (
            db.query(Episode)
            .join(Season, Episode.season_id == Season.id)
            .filter(Season.series_id == series_id)
            .order_by(Season.season_number, Episode.episode_number)
            .all()
        )

    def _ordered_season_episodes(self, db: Session, season_id: int) -> List[Episode]:
        return (
            db.query(Episode)
            .filter(Episode.season_id == season_id)
            .order_by(Episode.episode_number)
            .all()
        )

    def _latest_completed(self, db: Session, user_id: int, series_id: int):
        """Most recently watched completed (progress, episode) in the series, or None"""
        return (
            db.query(EpisodeProgress, Episode)
            .join(Episode, Episode.id == EpisodeProgress.episode_id)
            .join(Season, Season.id == Episode.season_id)
            .filter(
                EpisodeProgress.user_id == user_id,
                EpisodeProgress.is_completed == True,  # noqa: E712
                Season.series_id == series_id,
            )
            .order_by(EpisodeProgress.watched_at.desc(), EpisodeProgress.id.desc())
            .first()
        )

    def _find_progress(self, db: Session, user_id: int, episode_id: int) -> Optional[EpisodeProgress]:
        return db.query(EpisodeProgress).filter(
            EpisodeProgress.user_id == user_id,
            EpisodeProgress.episode_id == episode_id,
        ).first()

    def _upsert(self, db: Session, user_id: int, episode_id: int, is_completed: bool,
                watched_at: datetime) -> EpisodeProgress:
        progress = self._find_progress(db, user_id, episode_id)

        if progress:
            progress.is_completed = is_completed
            progress.watched_at = watched_at
        else:
            progress = EpisodeProgress(
                user_id=user_id,
                episode_id=episode_id,
                is_completed=is_completed,
                watched_at=watched_at,
            )
            db.add(progress)
        return progress

    def _write_and_commit(self, db: Session, write: Callable[[], T]) -> T:
        """
        Run `write` and commit. A unique-key clash means a concurrent request
        inserted the same (user, episode) first; roll back and replay once,
        which then finds the row and updates it.
        """
        try:
            result = write()
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("⚠️ Concurrent progress insert detected, replaying as update")
            result = write()
            db.commit()
        return result

    # ============================================================
    # Aggregates
    # ============================================================

    def series_progress(self, db: Session, user_id: int, series_id: int) -> Dict[str, Any]:
        series = self._get_series(db, series_id)

        episode_ids = series_episode_ids(db, series_id)
        total = len(episode_ids)
        watched = len(completed_episode_ids(db, user_id, episode_ids))
        percentage = (watched * 100.0 / total) if total > 0 else 0.0

        current_episode_number = 0
        current_season_number = 0
        latest = self._latest_completed(db, user_id, series_id)
        if latest:
            _, episode = latest
            current_episode_number = episode.episode_number
            current_season_number = episode.season.season_number

        return {
            "series_id": series.id,
            "series_title": series.title,
            "total_episodes": total,
            "watched_episodes": watched,
            "progress_percentage": percentage,
            "current_episode_number": current_episode_number,
            "current_season_number": current_season_number,
            "status": calculate_status(total, watched),
        }

    def season_current_episode(self, db: Session, user_id: int, season_id: int) -> int:
        """
        Length of the unbroken watched run starting at episode 1.

        Stops at the first unwatched episode or at a numbering gap, so
        watched {1, 2, 4} gives 2.
        """
        self._get_season(db, season_id)
        episodes = self._ordered_season_episodes(db, season_id)
        watched = completed_episode_ids(db, user_id, [e.id for e in episodes])

        counter = 0
        for episode in episodes:
            if episode.id not in watched or episode.episode_number != counter + 1:
                break
            counter += 1
        return counter

    def next_episode(self, db: Session, user_id: int, series_id: int) -> Dict[str, Any]:
        self._get_series(db, series_id)
        episodes = self._ordered_series_episodes(db, series_id)
        watched = completed_episode_ids(db, user_id, [e.id for e in episodes])

        for episode in episodes:
            if episode.id not in watched:
                return {
                    "series_id": series_id,
                    "episode_id": episode.id,
                    "episode_number": episode.episode_number,
                    "season_number": episode.season.season_number,
                    "title": episode.title,
                }

        return {"series_id": series_id, "episode_id": None, "message": ALL_WATCHED_MESSAGE}

    def last_watched_episode(self, db: Session, user_id: int, series_id: int) -> Dict[str, Any]:
        self._get_series(db, series_id)
        latest = self._latest_completed(db, user_id, series_id)
        if not latest:
            return {"series_id": series_id, "episode_id": None, "message": NONE_WATCHED_MESSAGE}

        progress, episode = latest
        return {
            "series_id": series_id,
            "episode_id": episode.id,
            "episode_number": episode.episode_number,
            "season_number": episode.season.season_number,
            "title": episode.title,
            "watched_at": progress.watched_at,
        }

    def series_statuses(self, db: Session, user_id: int) -> List[Dict[str, Any]]:
        """Progress of every series the user has started, by series id"""
        rows = (
            db.query(Season.series_id)
            .join(Episode, Episode.season_id == Season.id)
            .join(EpisodeProgress, EpisodeProgress.episode_id == Episode.id)
            .filter(
                EpisodeProgress.user_id == user_id,
                EpisodeProgress.is_completed == True,  # noqa: E712
            )
            .distinct()
            .all()
        )
        statuses = [self.series_progress(db, user_id, row[0]) for row in rows]
        return sorted(statuses, key=lambda s: s["series_id"])

    # ============================================================
    # Ledger writes
    # ============================================================

    def record_progress(self, db: Session, user_id: int, episode_id: int,
                        is_completed: bool = True) -> Tuple[EpisodeProgress, Episode]:
        episode = (
            db.query(Episode)
            .options(joinedload(Episode.season).joinedload(Season.series))
            .filter(Episode.id == episode_id)
            .first()
        )
        if not episode:
            raise NotFoundError("Episode", episode_id)

        watched_at = datetime.utcnow()
        progress = self._write_and_commit(
            db, lambda: self._upsert(db, user_id, episode_id, is_completed, watched_at)
        )
        db.refresh(progress)
        logger.info(f"✅ User {user_id} marked episode {episode_id} (completed={is_completed})")

        challenge_service.recalculate_quietly(db, user_id)
        return progress, episode

    def mark_episodes_up_to(self, db: Session, user_id: int, season_id: int,
                            episode_count: int) -> List[EpisodeProgress]:
        """
        Mark the first `episode_count` episodes of the season as watched,
        all with the same watched_at. Counts above the season size are capped.
        """
        if episode_count < 0:
            raise ValidationFailedError(
                "Episode count must be zero or greater.",
                context={"episode_count": episode_count},
            )

        self._get_season(db, season_id)
        episodes = self._ordered_season_episodes(db, season_id)
        selected = episodes[:min(episode_count, len(episodes))]

        watched_at = datetime.utcnow()
        episode_ids = [episode.id for episode in selected]
        rows = self._write_and_commit(
            db, lambda: [self._upsert(db, user_id, episode_id, True, watched_at) for episode_id in episode_ids]
        )
        logger.info(f"✅ User {user_id} marked {len(rows)} episodes of season {season_id}")

        if rows:
            challenge_service.recalculate_quietly(db, user_id)
        return rows

    def remove_progress(self, db: Session, user_id: int, episode_id: int) -> None:
        progress = db.query(EpisodeProgress).filter(
            EpisodeProgress.user_id == user_id,
            EpisodeProgress.episode_id == episode_id,
        ).first()
        if not progress:
            raise NotFoundError("EpisodeProgress", episode_id)

        db.delete(progress)
        db.commit()
        logger.info(f"🗑️ User {user_id} removed progress for episode {episode_id}")

        challenge_service.recalculate_quietly(db, user_id)

    def list_user_progress(self, db: Session, user_id: int) -> List[EpisodeProgress]:
        return (
            db.query(EpisodeProgress)
            .filter(EpisodeProgress.user_id == user_id)
            .order_by(EpisodeProgress.watched_at.desc(), EpisodeProgress.id.desc())
            .all()
        )


# Singleton instance
progress_service = ProgressService()
