# serilovers/api/v1/ratings.py
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...exceptions import PermissionDeniedError
from ...models import Series
from ...models.user import User
from ...schemas.rating import Rating, RatingCreate, RatingUpdate
from ...services.events import REVIEW_CREATED, publish_event, review_created_payload
from ...services.rating_service import rating_service
from ..deps import get_current_admin, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Rating, status_code=status.HTTP_201_CREATED)
def rate_series(
    payload: RatingCreate,
    response: Response,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Rate a finished series. A second rating from the same user overwrites
    the first (200 instead of 201).
    """
    rating, created = rating_service.upsert_rating(
        db, current_user.id, payload.series_id, payload.score, payload.comment
    )
    if created:
        series = db.query(Series).filter(Series.id == rating.series_id).first()
        background_tasks.add_task(
            publish_event, REVIEW_CREATED, review_created_payload(current_user, series, rating)
        )
    else:
        response.status_code = status.HTTP_200_OK
    return rating


@router.get("", response_model=List[Rating])
def list_all_ratings(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return rating_service.list_all(db, skip=skip, limit=limit)


@router.get("/me", response_model=List[Rating])
def list_my_ratings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return rating_service.list_for_user(db, current_user.id)


@router.get("/series/{series_id}", response_model=List[Rating])
def list_series_ratings(series_id: int, db: Session = Depends(get_db)):
    return rating_service.list_for_series(db, series_id)


@router.get("/user/{user_id}", response_model=List[Rating])
def list_user_ratings(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if user_id != current_user.id and not current_user.is_admin():
        raise PermissionDeniedError("You can only view your own ratings.", context={"user_id": user_id})
    return rating_service.list_for_user(db, user_id)


@router.get("/{rating_id}", response_model=Rating)
def get_rating(rating_id: int, db: Session = Depends(get_db)):
    return rating_service.get_rating(db, rating_id)


@router.put("/{rating_id}", response_model=Rating)
def update_rating(
    rating_id: int,
    payload: RatingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return rating_service.update_rating(db, rating_id, current_user, payload.score, payload.comment)


@router.delete("/{rating_id}")
def delete_rating(
    rating_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rating_service.delete_rating(db, rating_id, current_user)
    return {"message": "Rating deleted successfully"}
