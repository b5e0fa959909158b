from pydantic import BaseModel
from typing import List, Optional

class Totals(BaseModel):
    users: int
    series: int
    actors: int
    watchlist_items: int

class TopSeries(BaseModel):
    id: int
    title: str
    avg_rating: float
    views: int
    image_url: Optional[str] = None

class GenreShare(BaseModel):
    genre: str
    count: int
    percentage: float

class MonthlyViews(BaseModel):
    month: str  # YYYY-MM
    views: int

class AdminStatistics(BaseModel):
    totals: Totals
    top_series: List[TopSeries]
    genre_distribution: List[GenreShare]
    monthly_watching: List[MonthlyViews]
