"""Unit tests for the completion gate and the rating aggregate."""

import pytest
from pydantic import ValidationError

from serilovers.config import settings
from serilovers.exceptions import NotFoundError, PermissionDeniedError, SeriesNotCompletedError
from serilovers.models import Rating
from serilovers.schemas.rating import RatingCreate
from serilovers.services.completion import has_completed
from serilovers.services.rating_service import rating_service


class TestCompletionGate:
    """Tests for has_completed."""

    def test_all_watched(self, db, user, make_series, episodes_of, watch):
        """Test a fully watched series passes."""
        series = make_series("Dark", (2, 2))
        watch(user, episodes_of(series))

        assert has_completed(db, user.id, series.id) is True

    def test_one_missing(self, db, user, make_series, episodes_of, watch):
        """Test one unwatched episode fails the gate."""
        series = make_series("Dark", (2, 2))
        watch(user, episodes_of(series)[:-1])

        assert has_completed(db, user.id, series.id) is False

    def test_empty_series_counts_as_completed(self, db, user, make_series):
        """Test a series without episodes passes."""
        series = make_series("Empty", ())

        assert has_completed(db, user.id, series.id) is True

    def test_unknown_series(self, db, user):
        """Test an unknown series never passes."""
        assert has_completed(db, user.id, 999) is False

    def test_other_series_progress_ignored(self, db, user, make_series, episodes_of, watch):
        """Test episodes from another series do not count."""
        target = make_series("Target", (2,))
        other = make_series("Other", (2,))
        watch(user, episodes_of(other))

        assert has_completed(db, user.id, target.id) is False


class TestUpsertRating:
    """Tests for upsert_rating and the aggregate."""

    def test_rating_requires_completion(self, db, user, make_series):
        """Test an unfinished series cannot be rated."""
        series = make_series("Dark", (2,))

        with pytest.raises(SeriesNotCompletedError) as exc_info:
            rating_service.upsert_rating(db, user.id, series.id, 8)

        assert exc_info.value.message == "You must finish the series before leaving a review or rating."
        assert db.query(Rating).count() == 0

    def test_zero_episode_series_can_be_rated(self, db, user, make_series):
        """Test the empty-series rule lets a rating through."""
        series = make_series("Empty", ())

        rating, created = rating_service.upsert_rating(db, user.id, series.id, 7)

        assert created is True
        assert series.rating == 7.0

    def test_second_rating_overwrites(self, db, user, make_series, episodes_of, watch):
        """Test rating 5 then 8 leaves one row with 8."""
        series = make_series("Dark", (2,))
        watch(user, episodes_of(series))

        first, created_first = rating_service.upsert_rating(db, user.id, series.id, 5, "ok")
        first_created_at = first.created_at
        second, created_second = rating_service.upsert_rating(db, user.id, series.id, 8, "great")

        assert created_first is True
        assert created_second is False
        assert first.id == second.id
        assert second.score == 8
        assert second.comment == "great"
        assert second.created_at >= first_created_at
        assert db.query(Rating).filter(Rating.series_id == series.id).count() == 1
        assert series.rating == 8.0

    def test_aggregate_is_rounded_mean(self, db, user, other_user, admin, make_series, episodes_of, watch):
        """Test the aggregate is the 2-decimal mean of all scores."""
        series = make_series("Dark", (1,))
        for viewer in (user, other_user, admin):
            watch(viewer, episodes_of(series))

        rating_service.upsert_rating(db, user.id, series.id, 7)
        rating_service.upsert_rating(db, other_user.id, series.id, 8)
        rating_service.upsert_rating(db, admin.id, series.id, 8)

        assert series.rating == 7.67

    def test_unknown_series(self, db, user):
        """Test unknown series raises NotFound before the gate."""
        with pytest.raises(NotFoundError):
            rating_service.upsert_rating(db, user.id, 999, 5)


class TestUpdateAndDeleteRating:
    """Tests for update_rating and delete_rating."""

    def test_delete_last_rating_resets_aggregate(self, db, user, make_series, episodes_of, watch):
        """Test removing the only rating brings the aggregate back to 0."""
        series = make_series("Dark", (1,))
        watch(user, episodes_of(series))
        rating, _ = rating_service.upsert_rating(db, user.id, series.id, 9)

        rating_service.delete_rating(db, rating.id, user)

        assert series.rating == 0.0
        assert db.query(Rating).count() == 0

    def test_update_keeps_created_at(self, db, user, make_series, episodes_of, watch):
        """Test update by id changes the score but not created_at."""
        series = make_series("Dark", (1,))
        watch(user, episodes_of(series))
        rating, _ = rating_service.upsert_rating(db, user.id, series.id, 4)
        created_at = rating.created_at

        updated = rating_service.update_rating(db, rating.id, user, 6, "better on rewatch")

        assert updated.score == 6
        assert updated.created_at == created_at
        assert series.rating == 6.0

    def test_update_rechecks_gate(self, db, user, make_series, episodes_of, watch):
        """Test a new episode added after rating blocks further updates."""
        series = make_series("Dark", (1,))
        watch(user, episodes_of(series))
        rating, _ = rating_service.upsert_rating(db, user.id, series.id, 4)

        from serilovers.models import Episode
        db.add(Episode(season_id=series.seasons[0].id, episode_number=2, title="Bonus"))
        db.commit()

        with pytest.raises(SeriesNotCompletedError):
            rating_service.update_rating(db, rating.id, user, 9)

    def test_only_owner_or_admin(self, db, user, other_user, admin, make_series, episodes_of, watch):
        """Test ownership rules on delete."""
        series = make_series("Dark", (1,))
        watch(user, episodes_of(series))
        rating, _ = rating_service.upsert_rating(db, user.id, series.id, 4)

        with pytest.raises(PermissionDeniedError):
            rating_service.delete_rating(db, rating.id, other_user)

        rating_service.delete_rating(db, rating.id, admin)
        assert db.query(Rating).count() == 0


class TestConcurrentFirstRating:
    """Tests for two requests creating the same rating."""

    def test_clash_replays_as_overwrite(self, db, user, make_series, monkeypatch):
        """Test a unique-key clash overwrites the row that won."""
        series = make_series("Empty", ())
        db.add(Rating(user_id=user.id, series_id=series.id, score=4, comment="meh"))
        db.commit()

        real_find = rating_service._find_rating
        calls = []

        def find(db, user_id, series_id):
            calls.append(series_id)
            if len(calls) == 1:
                return None
            return real_find(db, user_id, series_id)

        monkeypatch.setattr(rating_service, "_find_rating", find)

        rating, created = rating_service.upsert_rating(db, user.id, series.id, 9, "great")

        assert created is False
        assert rating.score == 9
        assert db.query(Rating).filter(Rating.series_id == series.id).count() == 1
        db.expire_all()
        assert series.rating == 9.0


class TestScoreRange:
    """Tests for the configured score bounds."""

    def test_bounds_accepted(self):
        """Test both configured ends of the range are valid."""
        assert RatingCreate(series_id=1, score=settings.MIN_RATING_SCORE).score == settings.MIN_RATING_SCORE
        assert RatingCreate(series_id=1, score=settings.MAX_RATING_SCORE).score == settings.MAX_RATING_SCORE

    def test_outside_bounds_rejected(self):
        """Test one past either end fails validation."""
        with pytest.raises(ValidationError):
            RatingCreate(series_id=1, score=settings.MIN_RATING_SCORE - 1)
        with pytest.raises(ValidationError):
            RatingCreate(series_id=1, score=settings.MAX_RATING_SCORE + 1)
