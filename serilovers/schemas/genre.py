from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class GenreBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class GenreCreate(GenreBase):
    pass

class GenreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class Genre(GenreBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
