from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

class ActorBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    biography: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)

class ActorCreate(ActorBase):
    pass

class ActorUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    biography: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)

class ActorSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str

    class Config:
        from_attributes = True

class Actor(ActorBase):
    id: int
    full_name: str
    created_at: datetime

    class Config:
        from_attributes = True
