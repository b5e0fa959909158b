"""
SeriLovers Rating Service
Completion-gated ratings and the denormalised Series.rating aggregate
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import NotFoundError, PermissionDeniedError, SeriesNotCompletedError
from ..models import Rating, Series, User
from .challenge_service import challenge_service
from .completion import has_completed

logger = logging.getLogger(__name__)


class RatingService:

    def _get_series(self, db: Session, series_id: int) -> Series:
        series = db.query(Series).filter(Series.id == series_id).first()
        if not series:
            raise NotFoundError("Series", series_id)
        return series

    def _check_gate(self, db: Session, user_id: int, series_id: int) -> None:
        if not has_completed(db, user_id, series_id):
            logger.info(f"⛔ User {user_id} tried to rate unfinished series {series_id}")
            raise SeriesNotCompletedError(user_id, series_id)

    def _get_owned(self, db: Session, rating_id: int, user: User) -> Rating:
        rating = db.query(Rating).filter(Rating.id == rating_id).first()
        if not rating:
            raise NotFoundError("Rating", rating_id)
        if rating.user_id != user.id and not user.is_admin():
            raise PermissionDeniedError(
                "You can only modify your own ratings.",
                context={"rating_id": rating_id, "user_id": user.id},
            )
        return rating

    def _find_rating(self, db: Session, user_id: int, series_id: int) -> Optional[Rating]:
        return db.query(Rating).filter(
            Rating.user_id == user_id,
            Rating.series_id == series_id,
        ).first()

    def recalculate_series_rating(self, db: Session, series_id: int) -> float:
        """
        Mean score rounded to 2 decimals, 0 when there are no ratings.
        Written onto Series.rating; the caller commits.
        """
        db.flush()
        average = db.query(func.avg(Rating.score)).filter(Rating.series_id == series_id).scalar()
        value = round(float(average), 2) if average is not None else 0.0

        series = db.query(Series).filter(Series.id == series_id).first()
        if series:
            series.rating = value
        return value

    def upsert_rating(self, db: Session, user_id: int, series_id: int, score: int,
                      comment: Optional[str] = None) -> Tuple[Rating, bool]:
        """
        Create the user's rating for a series, or overwrite the existing one.
        Returns (rating, created).
        """
        self._get_series(db, series_id)
        self._check_gate(db, user_id, series_id)

        def write() -> Tuple[Rating, bool]:
            existing = self._find_rating(db, user_id, series_id)
            if existing is None:
                created_rating = Rating(user_id=user_id, series_id=series_id, score=score, comment=comment)
                db.add(created_rating)
                self.recalculate_series_rating(db, series_id)
                return created_rating, True

            existing.score = score
            existing.comment = comment
            existing.created_at = datetime.utcnow()
            self.recalculate_series_rating(db, series_id)
            return existing, False

        # A concurrent first rating for the same pair wins the unique key;
        # replay once as an overwrite
        try:
            rating, created = write()
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"⚠️ Concurrent rating insert for user {user_id} series {series_id}, replaying as update")
            rating, created = write()
            db.commit()
        db.refresh(rating)
        logger.info(f"⭐ User {user_id} {'created' if created else 'updated'} rating for series {series_id}: {score}")

        challenge_service.recalculate_quietly(db, user_id)
        return rating, created

    def update_rating(self, db: Session, rating_id: int, user: User, score: int,
                      comment: Optional[str] = None) -> Rating:
        rating = self._get_owned(db, rating_id, user)
        self._check_gate(db, rating.user_id, rating.series_id)

        rating.score = score
        rating.comment = comment
        self.recalculate_series_rating(db, rating.series_id)
        db.commit()
        db.refresh(rating)
        logger.info(f"⭐ Rating {rating_id} updated: {score}")

        challenge_service.recalculate_quietly(db, rating.user_id)
        return rating

    def delete_rating(self, db: Session, rating_id: int, user: User) -> None:
        rating = self._get_owned(db, rating_id, user)
        series_id = rating.series_id

        db.delete(rating)
        self.recalculate_series_rating(db, series_id)
        db.commit()
        logger.info(f"🗑️ Rating {rating_id} deleted")

    # ============================================================
    # Reads
    # ============================================================

    def get_rating(self, db: Session, rating_id: int) -> Rating:
        rating = db.query(Rating).filter(Rating.id == rating_id).first()
        if not rating:
            raise NotFoundError("Rating", rating_id)
        return rating

    def list_for_series(self, db: Session, series_id: int) -> List[Rating]:
        self._get_series(db, series_id)
        return (
            db.query(Rating)
            .filter(Rating.series_id == series_id)
            .order_by(Rating.created_at.desc())
            .all()
        )

    def list_for_user(self, db: Session, user_id: int) -> List[Rating]:
        return (
            db.query(Rating)
            .filter(Rating.user_id == user_id)
            .order_by(Rating.created_at.desc())
            .all()
        )

    def list_all(self, db: Session, skip: int = 0, limit: int = 100) -> List[Rating]:
        return db.query(Rating).order_by(Rating.id).offset(skip).limit(limit).all()


# Singleton instance
rating_service = RatingService()
