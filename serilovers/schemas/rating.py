from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ..config import settings

class RatingBase(BaseModel):
    score: int = Field(..., ge=settings.MIN_RATING_SCORE, le=settings.MAX_RATING_SCORE)
    comment: Optional[str] = Field(None, max_length=2000)

class RatingCreate(RatingBase):
    series_id: int

class RatingUpdate(RatingBase):
    pass

class Rating(RatingBase):
    id: int
    user_id: int
    series_id: int
    created_at: datetime

    class Config:
        from_attributes = True
