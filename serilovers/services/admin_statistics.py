"""
SeriLovers Admin Statistics
Catalogue totals, top series, genre shares and monthly activity for the admin dashboard
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Actor, Genre, Rating, Series, User, Watchlist, series_genres

logger = logging.getLogger(__name__)

TOP_SERIES_LIMIT = 5
MONTHS_TRACKED = 12


def month_start(now: datetime, months_back: int) -> datetime:
    """First instant of the month `months_back` months before `now`"""
    index = now.year * 12 + (now.month - 1) - months_back
    return datetime(index // 12, index % 12 + 1, 1)


class AdminStatisticsService:
    """
    Views of a series are its rating count plus its watchlist count.
    """

    def totals(self, db: Session) -> Dict[str, int]:
        return {
            "users": db.query(func.count(User.id)).scalar() or 0,
            "series": db.query(func.count(Series.id)).scalar() or 0,
            "actors": db.query(func.count(Actor.id)).scalar() or 0,
            "watchlist_items": db.query(func.count(Watchlist.id)).scalar() or 0,
        }

    def top_series(self, db: Session, limit: int = TOP_SERIES_LIMIT) -> List[Dict[str, Any]]:
        """
        Series with at least one rating or watchlist entry, best average first,
        then most views. Average is over all ratings, 0 when only watchlisted.
        """
        ratings = {
            series_id: (average, count)
            for series_id, average, count in db.query(
                Rating.series_id, func.avg(Rating.score), func.count(Rating.id)
            ).group_by(Rating.series_id).all()
        }
        watchlisted = dict(
            db.query(Watchlist.series_id, func.count(Watchlist.id)).group_by(Watchlist.series_id).all()
        )

        active_ids = set(ratings) | set(watchlisted)
        if not active_ids:
            return []

        rows = []
        for series in db.query(Series).filter(Series.id.in_(active_ids)).all():
            average, rating_count = ratings.get(series.id, (None, 0))
            rows.append({
                "id": series.id,
                "title": series.title,
                "avg_rating": round(float(average), 2) if average is not None else 0.0,
                "views": rating_count + watchlisted.get(series.id, 0),
                "image_url": series.image_url,
            })

        rows.sort(key=lambda row: (-row["avg_rating"], -row["views"], row["id"]))
        return rows[:limit]

    def genre_distribution(self, db: Session, total_series: Optional[int] = None) -> List[Dict[str, Any]]:
        """Share of all series tagged with each genre, most common first"""
        if total_series is None:
            total_series = db.query(func.count(Series.id)).scalar() or 0
        if total_series == 0:
            return []

        counts = (
            db.query(Genre.name, func.count(series_genres.c.series_id))
            .join(series_genres, series_genres.c.genre_id == Genre.id)
            .group_by(Genre.id, Genre.name)
            .order_by(func.count(series_genres.c.series_id).desc(), Genre.name)
            .all()
        )
        return [
            {"genre": name, "count": count, "percentage": round(count * 100.0 / total_series, 2)}
            for name, count in counts
        ]

    def monthly_watching(self, db: Session, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Ratings and watchlist additions per calendar month over the last
        twelve months, oldest first. Months without activity are omitted.
        """
        since = month_start(now or datetime.utcnow(), MONTHS_TRACKED - 1)

        stamps = [row[0] for row in db.query(Rating.created_at).filter(Rating.created_at >= since).all()]
        stamps += [row[0] for row in db.query(Watchlist.added_at).filter(Watchlist.added_at >= since).all()]

        per_month = Counter(stamp.strftime("%Y-%m") for stamp in stamps if stamp is not None)
        return [{"month": month, "views": per_month[month]} for month in sorted(per_month)]

    def get_statistics(self, db: Session) -> Dict[str, Any]:
        totals = self.totals(db)
        stats = {
            "totals": totals,
            "top_series": self.top_series(db),
            "genre_distribution": self.genre_distribution(db, totals["series"]),
            "monthly_watching": self.monthly_watching(db),
        }
        logger.info(
            f"📊 Admin statistics computed - Users: {totals['users']}, Series: {totals['series']}, "
            f"Watchlist items: {totals['watchlist_items']}"
        )
        return stats


# Singleton instance
admin_statistics_service = AdminStatisticsService()
