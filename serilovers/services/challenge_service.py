"""
SeriLovers Challenge Service
Keeps "watch N series" challenge progress in step with the progress ledger
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..exceptions import NotFoundError, PreconditionFailedError
from ..models import (
    Challenge,
    ChallengeProgress,
    ChallengeProgressStatus,
    Episode,
    EpisodeProgress,
    Season,
)

logger = logging.getLogger(__name__)


class ChallengeService:
    """
    Challenge progress is recalculated from scratch after every progress or
    rating write; nothing is incremented in place.
    """

    def completed_series_count(self, db: Session, user_id: int) -> int:
        """Series with at least one episode where every episode is completed"""
        totals = dict(
            db.query(Season.series_id, func.count(Episode.id))
            .join(Episode, Episode.season_id == Season.id)
            .group_by(Season.series_id)
            .all()
        )

        watched = dict(
            db.query(Season.series_id, func.count(func.distinct(EpisodeProgress.episode_id)))
            .join(Episode, Episode.id == EpisodeProgress.episode_id)
            .join(Season, Season.id == Episode.season_id)
            .filter(
                EpisodeProgress.user_id == user_id,
                EpisodeProgress.is_completed == True,  # noqa: E712
            )
            .group_by(Season.series_id)
            .all()
        )

        return sum(
            1 for series_id, total in totals.items()
            if total > 0 and watched.get(series_id, 0) >= total
        )

    @staticmethod
    def _is_series_challenge(challenge: Challenge) -> bool:
        return "Series" in (challenge.name or "") or "series" in (challenge.description or "")

    def update_challenge_progress(self, db: Session, user_id: int) -> None:
        """Recalculate the user's progress on every series challenge and commit"""
        count = self.completed_series_count(db, user_id)
        challenges = db.query(Challenge).all()

        for challenge in challenges:
            if not self._is_series_challenge(challenge):
                continue

            progress = db.query(ChallengeProgress).filter(
                ChallengeProgress.challenge_id == challenge.id,
                ChallengeProgress.user_id == user_id,
            ).first()

            if progress is None:
                # Only start tracking once the user has finished something
                if count <= 0:
                    continue
                progress = ChallengeProgress(
                    challenge_id=challenge.id,
                    user_id=user_id,
                    progress_count=count,
                    status=ChallengeProgressStatus.IN_PROGRESS,
                )
                if count >= challenge.target_count:
                    progress.status = ChallengeProgressStatus.COMPLETED
                    progress.completed_at = datetime.utcnow()
                db.add(progress)
                continue

            progress.progress_count = count
            if count >= challenge.target_count and progress.status != ChallengeProgressStatus.COMPLETED:
                progress.status = ChallengeProgressStatus.COMPLETED
                progress.completed_at = datetime.utcnow()
                logger.info(f"🏆 User {user_id} completed challenge {challenge.id}")
            elif count < challenge.target_count and progress.status == ChallengeProgressStatus.COMPLETED:
                progress.status = ChallengeProgressStatus.IN_PROGRESS
                progress.completed_at = None

        db.flush()
        self.refresh_participants(db, challenges)
        db.commit()

    def refresh_participants(self, db: Session, challenges: List[Challenge]) -> None:
        counts = dict(
            db.query(ChallengeProgress.challenge_id, func.count(ChallengeProgress.id))
            .group_by(ChallengeProgress.challenge_id)
            .all()
        )
        for challenge in challenges:
            challenge.participants_count = counts.get(challenge.id, 0)

    def recalculate_quietly(self, db: Session, user_id: int) -> None:
        """Best-effort recalculation; failures roll back and are logged only"""
        try:
            self.update_challenge_progress(db, user_id)
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Challenge recalculation failed for user {user_id}: {e}")

    def start_challenge(self, db: Session, user_id: int, challenge_id: int) -> ChallengeProgress:
        challenge = db.query(Challenge).filter(Challenge.id == challenge_id).first()
        if not challenge:
            raise NotFoundError("Challenge", challenge_id)

        existing = db.query(ChallengeProgress).filter(
            ChallengeProgress.challenge_id == challenge_id,
            ChallengeProgress.user_id == user_id,
        ).first()
        if existing:
            raise PreconditionFailedError(
                "You have already started this challenge.",
                context={"challenge_id": challenge_id, "user_id": user_id},
            )

        progress = ChallengeProgress(
            challenge_id=challenge_id,
            user_id=user_id,
            progress_count=0,
            status=ChallengeProgressStatus.IN_PROGRESS,
        )
        db.add(progress)
        db.flush()
        challenge.participants_count = db.query(ChallengeProgress).filter(
            ChallengeProgress.challenge_id == challenge_id
        ).count()
        db.commit()
        db.refresh(progress)

        logger.info(f"✅ User {user_id} started challenge {challenge_id}")
        return progress

    def my_progress(self, db: Session, user_id: int) -> List[ChallengeProgress]:
        return (
            db.query(ChallengeProgress)
            .filter(ChallengeProgress.user_id == user_id)
            .order_by(ChallengeProgress.id)
            .all()
        )


# Singleton instance
challenge_service = ChallengeService()
