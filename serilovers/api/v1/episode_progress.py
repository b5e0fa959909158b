# serilovers/api/v1/episode_progress.py
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...models.user import User
from ...schemas.progress import (
    EpisodePointer,
    EpisodeProgress,
    EpisodeProgressCreate,
    MarkUpToRequest,
    MarkUpToResult,
    SeasonCurrentEpisode,
    SeriesProgress,
)
from ...services.events import EPISODE_WATCHED, episode_watched_payload, publish_event
from ...services.progress_service import progress_service
from ..deps import get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=EpisodeProgress)
def mark_episode(
    payload: EpisodeProgressCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark an episode as watched (or not) for the current user"""
    progress, episode = progress_service.record_progress(
        db, current_user.id, payload.episode_id, payload.is_completed
    )
    background_tasks.add_task(
        publish_event,
        EPISODE_WATCHED,
        episode_watched_payload(current_user, episode, payload.is_completed, progress.watched_at),
    )
    return progress


@router.get("", response_model=List[EpisodeProgress])
def list_my_progress(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return progress_service.list_user_progress(db, current_user.id)


@router.get("/status", response_model=List[SeriesProgress])
def series_statuses(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """ToDo / InProgress / Finished for every series the user has started"""
    return progress_service.series_statuses(db, current_user.id)


@router.get("/series/{series_id}", response_model=SeriesProgress)
def series_progress(
    series_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return progress_service.series_progress(db, current_user.id, series_id)


@router.get("/series/{series_id}/next", response_model=EpisodePointer)
def next_episode(
    series_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return progress_service.next_episode(db, current_user.id, series_id)


@router.get("/series/{series_id}/last", response_model=EpisodePointer)
def last_watched_episode(
    series_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return progress_service.last_watched_episode(db, current_user.id, series_id)


@router.get("/season/{season_id}/current", response_model=SeasonCurrentEpisode)
def season_current_episode(
    season_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    number = progress_service.season_current_episode(db, current_user.id, season_id)
    return {"season_id": season_id, "current_episode_number": number}


@router.post("/season/{season_id}/mark-up-to", response_model=MarkUpToResult)
def mark_up_to(
    season_id: int,
    payload: MarkUpToRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark the first N episodes of a season as watched"""
    rows = progress_service.mark_episodes_up_to(db, current_user.id, season_id, payload.episode_count)
    return {
        "season_id": season_id,
        "marked_count": len(rows),
        "episode_ids": [row.episode_id for row in rows],
    }


@router.delete("/{episode_id}")
def remove_progress(
    episode_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    progress_service.remove_progress(db, current_user.id, episode_id)
    return {"message": "Progress removed successfully"}
