from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from .episodes import Episode
from .genre import Genre
from .actor import ActorSummary


# ==================== SEASON ====================

class SeasonBase(BaseModel):
    season_number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None

class SeasonCreate(SeasonBase):
    series_id: int

class SeasonUpdate(BaseModel):
    season_number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None

class SeasonInDBBase(SeasonBase):
    id: int
    series_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class Season(SeasonInDBBase):
    pass

class SeasonWithEpisodes(SeasonInDBBase):
    episodes: List[Episode] = []


# ==================== SERIES ====================

class SeriesBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None
    image_url: Optional[str] = Field(None, max_length=500)

class SeriesCreate(SeriesBase):
    genre_ids: List[int] = []
    actor_ids: List[int] = []

class SeriesUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None
    image_url: Optional[str] = Field(None, max_length=500)
    genre_ids: Optional[List[int]] = None
    actor_ids: Optional[List[int]] = None

class SeriesInDBBase(SeriesBase):
    id: int
    rating: float
    total_episodes: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class Series(SeriesInDBBase):
    genres: List[Genre] = []

class SeriesDetail(SeriesInDBBase):
    genres: List[Genre] = []
    actors: List[ActorSummary] = []
    seasons: List[SeasonWithEpisodes] = []
