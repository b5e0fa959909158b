# serilovers/api/v1/seasons.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from ...crud.episode import episode as crud_episode
from ...crud.season import season as crud_season
from ...database import get_db
from ...exceptions import SeriLoversError
from ...models.user import User
from ...schemas.episodes import Episode
from ...schemas.series import Season, SeasonCreate, SeasonUpdate, SeasonWithEpisodes
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{season_id}", response_model=SeasonWithEpisodes)
def get_season(season_id: int, db: Session = Depends(get_db)):
    return crud_season.get_or_404(db, season_id)


@router.get("/{season_id}/episodes", response_model=List[Episode])
def list_season_episodes(season_id: int, db: Session = Depends(get_db)):
    crud_season.get_or_404(db, season_id)
    return crud_episode.get_by_season(db, season_id=season_id)


@router.post("", response_model=Season, status_code=status.HTTP_201_CREATED)
def create_season(
    payload: SeasonCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        season = crud_season.create(db, obj_in=payload)
        logger.info(f"✅ Season {season.season_number} created for series {season.series_id}")
        return season
    except (HTTPException, SeriLoversError):
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error creating season: {e}")
        raise HTTPException(status_code=500, detail="Failed to create season")


@router.put("/{season_id}", response_model=Season)
def update_season(
    season_id: int,
    payload: SeasonUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    season = crud_season.get_or_404(db, season_id)
    return crud_season.update(db, db_obj=season, obj_in=payload)


@router.delete("/{season_id}")
def delete_season(
    season_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    crud_season.remove(db, id=season_id)
    logger.info(f"🗑️ Season deleted: {season_id}")
    return {"message": "Season deleted successfully"}
