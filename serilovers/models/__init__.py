from ..database import Base
from .user import User, UserRole
from .genre import Genre
from .actor import Actor
from .series import Series, Season, Episode, series_genres, series_actors
from .watch_progress import EpisodeProgress
from .rating import Rating
from .watchlist import WatchlistCollection, Watchlist
from .challenge import Challenge, ChallengeProgress, ChallengeDifficulty, ChallengeProgressStatus

# This ensures all models are registered with Base.metadata
__all__ = [
    "Base", "User", "UserRole", "Genre", "Actor", "Series", "Season",
    "Episode", "series_genres", "series_actors", "EpisodeProgress", "Rating",
    "WatchlistCollection", "Watchlist", "Challenge", "ChallengeProgress",
    "ChallengeDifficulty", "ChallengeProgressStatus",
]
