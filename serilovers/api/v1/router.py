from fastapi import APIRouter
from . import (
    actors,
    admin_statistics,
    challenges,
    episode_progress,
    episodes,
    genres,
    ratings,
    seasons,
    series,
    users,
    watchlist,
    watchlist_collections,
)
from .auth import router as auth_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Catalogue
api_router.include_router(series.router, prefix="/series", tags=["series"])
api_router.include_router(seasons.router, prefix="/seasons", tags=["seasons"])
api_router.include_router(episodes.router, prefix="/episodes", tags=["episodes"])
api_router.include_router(genres.router, prefix="/genres", tags=["genres"])
api_router.include_router(actors.router, prefix="/actors", tags=["actors"])

# User activity
api_router.include_router(ratings.router, prefix="/ratings", tags=["ratings"])
api_router.include_router(episode_progress.router, prefix="/episode-progress", tags=["episode-progress"])
api_router.include_router(watchlist.router, prefix="/watchlist", tags=["watchlist"])
api_router.include_router(
    watchlist_collections.router, prefix="/watchlist-collections", tags=["watchlist-collections"]
)
api_router.include_router(challenges.router, prefix="/challenges", tags=["challenges"])

# Admin
api_router.include_router(
    admin_statistics.router, prefix="/admin/statistics", tags=["admin-statistics"]
)

__all__ = ["api_router"]
