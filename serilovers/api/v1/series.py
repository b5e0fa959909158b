# serilovers/api/v1/series.py
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
import logging

from ...crud.season import season as crud_season
from ...crud.series import series as crud_series
from ...database import get_db
from ...exceptions import SeriLoversError
from ...models.user import User
from ...schemas.series import Season, Series, SeriesCreate, SeriesDetail, SeriesUpdate
from ...services.events import SERIES_UPDATED, publish_event, series_updated_payload
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


class SeriesListResponse(BaseModel):
    total: int
    items: List[Series]


@router.get("", response_model=SeriesListResponse)
def list_series(
    search: Optional[str] = None,
    genre_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 20,
    db: Session = Depends(get_db),
):
    """List series, optionally filtered by title search and genre"""
    total, items = crud_series.search(db, query=search, genre_id=genre_id, skip=skip, limit=limit)
    logger.info(f"list_series search={search!r} genre_id={genre_id}: {len(items)}/{total}")
    return {"total": total, "items": items}


@router.get("/{series_id}", response_model=SeriesDetail)
def get_series(series_id: int, db: Session = Depends(get_db)):
    """Series detail with seasons, episodes, genres and actors"""
    return crud_series.get_or_404(db, series_id)


@router.get("/{series_id}/seasons", response_model=List[Season])
def list_series_seasons(series_id: int, db: Session = Depends(get_db)):
    crud_series.get_or_404(db, series_id)
    return crud_season.get_by_series(db, series_id=series_id)


@router.post("", response_model=SeriesDetail, status_code=status.HTTP_201_CREATED)
def create_series(
    payload: SeriesCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        series = crud_series.create(db, obj_in=payload)
        logger.info(f"✅ Series created: {series.title} (id={series.id})")
        return series
    except (HTTPException, SeriLoversError):
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error creating series: {e}")
        raise HTTPException(status_code=500, detail="Failed to create series")


@router.put("/{series_id}", response_model=SeriesDetail)
def update_series(
    series_id: int,
    payload: SeriesUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        series = crud_series.get_or_404(db, series_id)
        series = crud_series.update(db, db_obj=series, obj_in=payload)
        background_tasks.add_task(publish_event, SERIES_UPDATED, series_updated_payload(series))
        logger.info(f"✅ Series updated: {series.id}")
        return series
    except (HTTPException, SeriLoversError):
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error updating series {series_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update series")


@router.delete("/{series_id}")
def delete_series(
    series_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Delete a series with its seasons, episodes, progress and ratings"""
    crud_series.remove(db, id=series_id)
    logger.info(f"🗑️ Series deleted: {series_id}")
    return {"message": "Series deleted successfully"}
