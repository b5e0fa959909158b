# serilovers/api/v1/genres.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ...crud.genre import genre as crud_genre
from ...database import get_db
from ...models.user import User
from ...schemas.genre import Genre, GenreCreate, GenreUpdate
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Genre])
def list_genres(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Get all genres ordered by name"""
    return crud_genre.get_multi(db, skip=skip, limit=limit)


@router.get("/{genre_id}", response_model=Genre)
def get_genre(genre_id: int, db: Session = Depends(get_db)):
    return crud_genre.get_or_404(db, genre_id)


@router.post("", response_model=Genre, status_code=status.HTTP_201_CREATED)
def create_genre(
    payload: GenreCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    genre = crud_genre.create(db, obj_in=payload)
    logger.info(f"Genre created: {genre.name}")
    return genre


@router.put("/{genre_id}", response_model=Genre)
def update_genre(
    genre_id: int,
    payload: GenreUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    genre = crud_genre.get_or_404(db, genre_id)
    return crud_genre.update(db, db_obj=genre, obj_in=payload)


@router.delete("/{genre_id}")
def delete_genre(
    genre_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    crud_genre.remove(db, id=genre_id)
    logger.info(f"Genre deleted: {genre_id}")
    return {"message": "Genre deleted successfully"}
