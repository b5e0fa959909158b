"""
Series watching status.

Derived on every read from (total episodes, watched episodes); never stored.
"""
from enum import Enum


class SeriesWatchingStatus(str, Enum):
    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    FINISHED = "Finished"


def calculate_status(total_episodes: int, watched_episodes: int) -> SeriesWatchingStatus:
    """
    ToDo       - nothing watched, or the series has no episodes
    Finished   - watched >= total (total > 0)
    InProgress - anything in between
    """
    if watched_episodes <= 0 or total_episodes <= 0:
        return SeriesWatchingStatus.TODO
    if watched_episodes >= total_episodes:
        return SeriesWatchingStatus.FINISHED
    return SeriesWatchingStatus.IN_PROGRESS
