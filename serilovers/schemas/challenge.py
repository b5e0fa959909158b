from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ..models.challenge import ChallengeDifficulty, ChallengeProgressStatus

class ChallengeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    difficulty: ChallengeDifficulty = ChallengeDifficulty.EASY
    target_count: int = Field(..., ge=1)

class ChallengeCreate(ChallengeBase):
    pass

class ChallengeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    difficulty: Optional[ChallengeDifficulty] = None
    target_count: Optional[int] = Field(None, ge=1)

class Challenge(ChallengeBase):
    id: int
    participants_count: int
    created_at: datetime

    class Config:
        from_attributes = True

class ChallengeProgress(BaseModel):
    id: int
    challenge_id: int
    user_id: int
    progress_count: int
    status: ChallengeProgressStatus
    completed_at: Optional[datetime] = None
    challenge: Optional[Challenge] = None

    class Config:
        from_attributes = True
