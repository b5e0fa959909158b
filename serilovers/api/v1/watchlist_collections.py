# serilovers/api/v1/watchlist_collections.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...models.user import User
from ...schemas.watchlist import (
    Watchlist,
    WatchlistCollection,
    WatchlistCollectionCreate,
    WatchlistCollectionUpdate,
)
from ...services.watchlist_service import watchlist_service
from ..deps import get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[WatchlistCollection])
def list_collections(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List my collections. Repairs the Favorites collection on the way."""
    return watchlist_service.list_collections(db, current_user.id)


@router.get("/{collection_id}", response_model=WatchlistCollection)
def get_collection(
    collection_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.get_collection(db, collection_id, current_user)


@router.post("", response_model=WatchlistCollection, status_code=status.HTTP_201_CREATED)
def create_collection(
    payload: WatchlistCollectionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.create_collection(db, current_user.id, payload.name, payload.description)


@router.put("/{collection_id}", response_model=WatchlistCollection)
def update_collection(
    collection_id: int,
    payload: WatchlistCollectionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.update_collection(
        db, collection_id, current_user, name=payload.name, description=payload.description
    )


@router.delete("/{collection_id}")
def delete_collection(
    collection_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    watchlist_service.delete_collection(db, collection_id, current_user)
    return {"message": "Collection deleted successfully"}


@router.post("/{collection_id}/series/{series_id}", response_model=Watchlist)
def add_series(
    collection_id: int,
    series_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.add_series_to_collection(db, collection_id, series_id, current_user)


@router.delete("/{collection_id}/series/{series_id}")
def remove_series(
    collection_id: int,
    series_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    watchlist_service.remove_series_from_collection(db, collection_id, series_id, current_user)
    return {"message": "Series removed from collection"}
