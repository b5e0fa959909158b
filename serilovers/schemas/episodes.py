from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

class EpisodeBase(BaseModel):
    episode_number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    air_date: Optional[date] = None
    duration_minutes: Optional[int] = Field(None, ge=1)

class EpisodeCreate(EpisodeBase):
    season_id: int

class EpisodeUpdate(BaseModel):
    episode_number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    air_date: Optional[date] = None
    duration_minutes: Optional[int] = Field(None, ge=1)

class EpisodeInDBBase(EpisodeBase):
    id: int
    season_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class Episode(EpisodeInDBBase):
    pass
