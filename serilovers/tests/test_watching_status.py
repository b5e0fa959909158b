"""Unit tests for the series watching status."""

import pytest

from serilovers.services.watching_status import SeriesWatchingStatus, calculate_status


class TestCalculateStatus:
    """Tests for calculate_status."""

    @pytest.mark.parametrize(
        "total, watched, expected",
        [
            (10, 0, SeriesWatchingStatus.TODO),
            (0, 0, SeriesWatchingStatus.TODO),
            (0, 3, SeriesWatchingStatus.TODO),
            (10, 7, SeriesWatchingStatus.IN_PROGRESS),
            (10, 1, SeriesWatchingStatus.IN_PROGRESS),
            (10, 10, SeriesWatchingStatus.FINISHED),
            (10, 12, SeriesWatchingStatus.FINISHED),
        ],
    )
    def test_status_table(self, total, watched, expected):
        """Test every branch of the status function."""
        assert calculate_status(total, watched) == expected

    def test_values_are_wire_strings(self):
        """Test enum values match the names clients display."""
        assert SeriesWatchingStatus.TODO.value == "ToDo"
        assert SeriesWatchingStatus.IN_PROGRESS.value == "InProgress"
        assert SeriesWatchingStatus.FINISHED.value == "Finished"
