from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from ..services.watching_status import SeriesWatchingStatus


class EpisodeProgressCreate(BaseModel):
    episode_id: int
    is_completed: bool = True

class EpisodeProgress(BaseModel):
    id: int
    user_id: int
    episode_id: int
    is_completed: bool
    watched_at: datetime

    class Config:
        from_attributes = True

class MarkUpToRequest(BaseModel):
    # validated in the service so a negative count maps to a 400
    episode_count: int


class SeriesProgress(BaseModel):
    """Aggregated per-series progress for one user"""
    series_id: int
    series_title: str
    total_episodes: int
    watched_episodes: int
    progress_percentage: float
    current_episode_number: int
    current_season_number: int
    status: SeriesWatchingStatus


class SeasonCurrentEpisode(BaseModel):
    season_id: int
    current_episode_number: int


class EpisodePointer(BaseModel):
    """Next / last watched episode, or a sentinel message when there is none"""
    series_id: int
    episode_id: Optional[int] = None
    episode_number: Optional[int] = None
    season_number: Optional[int] = None
    title: Optional[str] = None
    watched_at: Optional[datetime] = None
    message: Optional[str] = None


class MarkUpToResult(BaseModel):
    season_id: int
    marked_count: int
    episode_ids: List[int]
