# serilovers/api/v1/watchlist.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...database import get_db
from ...models.user import User
from ...schemas.watchlist import Watchlist, WatchlistCreate
from ...services.watchlist_service import watchlist_service
from ..deps import get_current_user

router = APIRouter()


@router.get("", response_model=List[Watchlist])
def list_watchlist(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.list_watchlist(db, current_user.id)


@router.post("", response_model=Watchlist, status_code=status.HTTP_201_CREATED)
def add_to_watchlist(
    payload: WatchlistCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return watchlist_service.add_to_watchlist(db, current_user.id, payload.series_id, payload.collection_id)


@router.delete("/{entry_id}")
def remove_from_watchlist(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    watchlist_service.remove_from_watchlist(db, entry_id, current_user)
    return {"message": "Removed from watchlist"}
