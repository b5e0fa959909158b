from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


# ==================== WATCHLIST ENTRY ====================

class WatchlistCreate(BaseModel):
    series_id: int
    collection_id: Optional[int] = None

class Watchlist(BaseModel):
    id: int
    user_id: int
    series_id: int
    collection_id: Optional[int] = None
    added_at: datetime

    class Config:
        from_attributes = True


# ==================== COLLECTION ====================

class WatchlistCollectionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class WatchlistCollectionCreate(WatchlistCollectionBase):
    pass

class WatchlistCollectionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

class WatchlistCollection(WatchlistCollectionBase):
    id: int
    user_id: int
    created_at: datetime
    entries: List[Watchlist] = []

    class Config:
        from_attributes = True
