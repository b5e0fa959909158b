# serilovers/api/v1/episodes.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from ...crud.episode import episode as crud_episode
from ...database import get_db
from ...exceptions import SeriLoversError
from ...models.user import User
from ...schemas.episodes import Episode, EpisodeCreate, EpisodeUpdate
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{episode_id}", response_model=Episode)
def get_episode(episode_id: int, db: Session = Depends(get_db)):
    return crud_episode.get_or_404(db, episode_id)


@router.post("", response_model=Episode, status_code=status.HTTP_201_CREATED)
def create_episode(
    payload: EpisodeCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        episode = crud_episode.create(db, obj_in=payload)
        logger.info(f"✅ Episode {episode.episode_number} created in season {episode.season_id}")
        return episode
    except (HTTPException, SeriLoversError):
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error creating episode: {e}")
        raise HTTPException(status_code=500, detail="Failed to create episode")


@router.put("/{episode_id}", response_model=Episode)
def update_episode(
    episode_id: int,
    payload: EpisodeUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    episode = crud_episode.get_or_404(db, episode_id)
    return crud_episode.update(db, db_obj=episode, obj_in=payload)


@router.delete("/{episode_id}")
def delete_episode(
    episode_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    crud_episode.remove(db, id=episode_id)
    logger.info(f"🗑️ Episode deleted: {episode_id}")
    return {"message": "Episode deleted successfully"}
