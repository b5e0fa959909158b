"""Unit tests for the progress ledger and its aggregates."""

from datetime import datetime, timedelta

import pytest

from serilovers.exceptions import NotFoundError, ValidationFailedError
from serilovers.models import EpisodeProgress
from serilovers.services.progress_service import ALL_WATCHED_MESSAGE, progress_service
from serilovers.services.watching_status import SeriesWatchingStatus


class TestSeriesProgress:
    """Tests for series_progress."""

    def test_two_seasons_seven_watched(self, db, user, make_series, episodes_of, watch):
        """Test 2x5 series with 7 episodes watched."""
        series = make_series("Dark", (5, 5))
        watch(user, episodes_of(series)[:7])

        result = progress_service.series_progress(db, user.id, series.id)

        assert result["series_title"] == "Dark"
        assert result["total_episodes"] == 10
        assert result["watched_episodes"] == 7
        assert result["progress_percentage"] == 70.0
        assert result["status"] == SeriesWatchingStatus.IN_PROGRESS

    def test_current_episode_is_most_recent(self, db, user, make_series, episodes_of, watch):
        """Test current episode follows watched_at, not episode order."""
        series = make_series("Dark", (5, 5))
        episodes = episodes_of(series)
        base = datetime.utcnow() - timedelta(days=1)
        watch(user, [episodes[6]], start=base + timedelta(hours=2))
        watch(user, [episodes[0]], start=base)

        result = progress_service.series_progress(db, user.id, series.id)

        assert result["current_season_number"] == 2
        assert result["current_episode_number"] == 2

    def test_nothing_watched(self, db, user, make_series):
        """Test a fresh series reports zeros and ToDo."""
        series = make_series("Dark", (3,))

        result = progress_service.series_progress(db, user.id, series.id)

        assert result["watched_episodes"] == 0
        assert result["progress_percentage"] == 0.0
        assert result["current_episode_number"] == 0
        assert result["current_season_number"] == 0
        assert result["status"] == SeriesWatchingStatus.TODO

    def test_empty_series(self, db, user, make_series):
        """Test a series without episodes has 0% and ToDo."""
        series = make_series("Empty", ())

        result = progress_service.series_progress(db, user.id, series.id)

        assert result["total_episodes"] == 0
        assert result["progress_percentage"] == 0.0
        assert result["status"] == SeriesWatchingStatus.TODO

    def test_other_users_progress_ignored(self, db, user, other_user, make_series, episodes_of, watch):
        """Test aggregates are per user."""
        series = make_series("Dark", (4,))
        watch(other_user, episodes_of(series))

        result = progress_service.series_progress(db, user.id, series.id)

        assert result["watched_episodes"] == 0

    def test_unknown_series(self, db, user):
        """Test unknown series raises NotFound."""
        with pytest.raises(NotFoundError):
            progress_service.series_progress(db, user.id, 999)


class TestSeasonCurrentEpisode:
    """Tests for the consecutive-run current episode."""

    def test_gap_stops_the_run(self, db, user, make_series, episodes_of, watch):
        """Test watched {1, 2, 4} gives 2."""
        series = make_series("Dark", (4,))
        episodes = episodes_of(series)
        watch(user, [episodes[0], episodes[1], episodes[3]])

        assert progress_service.season_current_episode(db, user.id, series.seasons[0].id) == 2

    def test_full_run(self, db, user, make_series, episodes_of, watch):
        """Test watched {1, 2, 3} gives 3."""
        series = make_series("Dark", (3,))
        watch(user, episodes_of(series))

        assert progress_service.season_current_episode(db, user.id, series.seasons[0].id) == 3

    def test_numbering_gap_stops_the_run(self, db, user, make_series, episodes_of, watch):
        """Test a season numbered 1, 2, 4 stops at 2 even when all are watched."""
        series = make_series("Dark", (3,), episode_numbers=[1, 2, 4])
        watch(user, episodes_of(series))

        assert progress_service.season_current_episode(db, user.id, series.seasons[0].id) == 2

    def test_first_episode_unwatched(self, db, user, make_series, episodes_of, watch):
        """Test nothing counts before episode 1 is watched."""
        series = make_series("Dark", (3,))
        watch(user, episodes_of(series)[1:])

        assert progress_service.season_current_episode(db, user.id, series.seasons[0].id) == 0

    def test_unknown_season(self, db, user):
        """Test unknown season raises NotFound."""
        with pytest.raises(NotFoundError):
            progress_service.season_current_episode(db, user.id, 999)


class TestNextAndLastEpisode:
    """Tests for next_episode and last_watched_episode."""

    def test_next_skips_watched(self, db, user, make_series, episodes_of, watch):
        """Test the next episode crosses into the following season."""
        series = make_series("Dark", (2, 2))
        episodes = episodes_of(series)
        watch(user, episodes[:2])

        result = progress_service.next_episode(db, user.id, series.id)

        assert result["episode_id"] == episodes[2].id
        assert result["season_number"] == 2
        assert result["episode_number"] == 1

    def test_next_fills_holes_first(self, db, user, make_series, episodes_of, watch):
        """Test an earlier unwatched episode wins over later ones."""
        series = make_series("Dark", (3,))
        episodes = episodes_of(series)
        watch(user, [episodes[0], episodes[2]])

        assert progress_service.next_episode(db, user.id, series.id)["episode_id"] == episodes[1].id

    def test_all_watched_sentinel(self, db, user, make_series, episodes_of, watch):
        """Test the sentinel once everything is watched."""
        series = make_series("Dark", (2,))
        watch(user, episodes_of(series))

        result = progress_service.next_episode(db, user.id, series.id)

        assert result["episode_id"] is None
        assert result["message"] == ALL_WATCHED_MESSAGE

    def test_last_watched(self, db, user, make_series, episodes_of, watch):
        """Test last watched returns the newest completed episode."""
        series = make_series("Dark", (3,))
        episodes = episodes_of(series)
        watch(user, [episodes[2], episodes[0]])

        result = progress_service.last_watched_episode(db, user.id, series.id)

        assert result["episode_id"] == episodes[0].id

    def test_last_watched_none(self, db, user, make_series):
        """Test the sentinel when nothing was watched."""
        series = make_series("Dark", (3,))

        result = progress_service.last_watched_episode(db, user.id, series.id)

        assert result["episode_id"] is None
        assert result["message"]


class TestLedgerWrites:
    """Tests for record/mark-up-to/remove."""

    def test_record_is_idempotent(self, db, user, make_series, episodes_of):
        """Test marking twice leaves one row and the same counts."""
        series = make_series("Dark", (3,))
        episode = episodes_of(series)[0]

        progress_service.record_progress(db, user.id, episode.id)
        first = progress_service.series_progress(db, user.id, series.id)
        progress_service.record_progress(db, user.id, episode.id)
        second = progress_service.series_progress(db, user.id, series.id)

        rows = db.query(EpisodeProgress).filter(EpisodeProgress.user_id == user.id).count()
        assert rows == 1
        assert first["watched_episodes"] == second["watched_episodes"] == 1

    def test_record_not_completed_does_not_count(self, db, user, make_series, episodes_of):
        """Test an incomplete row is not counted as watched."""
        series = make_series("Dark", (3,))
        episode = episodes_of(series)[0]

        progress_service.record_progress(db, user.id, episode.id, is_completed=False)

        assert progress_service.series_progress(db, user.id, series.id)["watched_episodes"] == 0

    def test_record_unknown_episode(self, db, user):
        """Test unknown episode raises NotFound."""
        with pytest.raises(NotFoundError):
            progress_service.record_progress(db, user.id, 999)

    def test_mark_up_to_caps_at_season_size(self, db, user, make_series):
        """Test N larger than the season marks every episode."""
        series = make_series("Dark", (5,))
        season_id = series.seasons[0].id

        rows = progress_service.mark_episodes_up_to(db, user.id, season_id, 8)

        assert len(rows) == 5
        assert len({row.watched_at for row in rows}) == 1
        assert progress_service.season_current_episode(db, user.id, season_id) == 5

    def test_mark_up_to_is_idempotent(self, db, user, make_series):
        """Test repeating mark-up-to does not duplicate rows."""
        series = make_series("Dark", (5,))
        season_id = series.seasons[0].id

        progress_service.mark_episodes_up_to(db, user.id, season_id, 3)
        progress_service.mark_episodes_up_to(db, user.id, season_id, 3)

        assert db.query(EpisodeProgress).filter(EpisodeProgress.user_id == user.id).count() == 3

    def test_mark_up_to_zero(self, db, user, make_series):
        """Test zero marks nothing."""
        series = make_series("Dark", (5,))

        assert progress_service.mark_episodes_up_to(db, user.id, series.seasons[0].id, 0) == []

    def test_mark_up_to_negative(self, db, user, make_series):
        """Test a negative count is rejected."""
        series = make_series("Dark", (5,))

        with pytest.raises(ValidationFailedError):
            progress_service.mark_episodes_up_to(db, user.id, series.seasons[0].id, -1)

    def test_remove_progress(self, db, user, make_series, episodes_of, watch):
        """Test removing a row and removing it again."""
        series = make_series("Dark", (2,))
        episode = episodes_of(series)[0]
        watch(user, [episode])

        progress_service.remove_progress(db, user.id, episode.id)

        assert progress_service.series_progress(db, user.id, series.id)["watched_episodes"] == 0
        with pytest.raises(NotFoundError):
            progress_service.remove_progress(db, user.id, episode.id)

    def test_series_statuses(self, db, user, make_series, episodes_of, watch):
        """Test the status list only includes started series."""
        finished = make_series("Finished", (2,))
        started = make_series("Started", (4,))
        make_series("Untouched", (3,))
        watch(user, episodes_of(finished))
        watch(user, episodes_of(started)[:1])

        statuses = {s["series_title"]: s["status"] for s in progress_service.series_statuses(db, user.id)}

        assert statuses == {
            "Finished": SeriesWatchingStatus.FINISHED,
            "Started": SeriesWatchingStatus.IN_PROGRESS,
        }


class TestConcurrentFirstWrite:
    """Tests for two requests inserting the same progress row."""

    def _miss_once(self, monkeypatch):
        """The first lookup misses the row, as if a concurrent insert landed after it."""
        real_find = progress_service._find_progress
        calls = []

        def find(db, user_id, episode_id):
            calls.append(episode_id)
            if len(calls) == 1:
                return None
            return real_find(db, user_id, episode_id)

        monkeypatch.setattr(progress_service, "_find_progress", find)
        return calls

    def test_record_replays_as_update(self, db, user, make_series, episodes_of, monkeypatch):
        """Test a unique-key clash ends with one updated row, not an error."""
        series = make_series("Dark", (2,))
        episode = episodes_of(series)[0]
        db.add(EpisodeProgress(user_id=user.id, episode_id=episode.id, is_completed=False,
                               watched_at=datetime.utcnow() - timedelta(days=1)))
        db.commit()
        calls = self._miss_once(monkeypatch)

        progress, _ = progress_service.record_progress(db, user.id, episode.id)

        assert len(calls) == 2
        assert progress.is_completed is True
        assert db.query(EpisodeProgress).filter(EpisodeProgress.user_id == user.id).count() == 1

    def test_mark_up_to_replays_as_update(self, db, user, make_series, episodes_of, watch, monkeypatch):
        """Test bulk marking survives a clash on its first episode."""
        series = make_series("Dark", (3,))
        watch(user, episodes_of(series)[:1])
        self._miss_once(monkeypatch)

        rows = progress_service.mark_episodes_up_to(db, user.id, series.seasons[0].id, 3)

        assert len(rows) == 3
        assert db.query(EpisodeProgress).filter(EpisodeProgress.user_id == user.id).count() == 3
