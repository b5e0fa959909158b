# serilovers/api/v1/actors.py
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
import logging

from ...crud.actor import actor as crud_actor
from ...database import get_db
from ...models.user import User
from ...schemas.actor import Actor, ActorCreate, ActorUpdate
from ...services.events import ACTOR_CREATED, actor_created_payload, publish_event
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Actor])
def list_actors(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return crud_actor.search(db, query=search, skip=skip, limit=limit)


@router.get("/{actor_id}", response_model=Actor)
def get_actor(actor_id: int, db: Session = Depends(get_db)):
    return crud_actor.get_or_404(db, actor_id)


@router.post("", response_model=Actor, status_code=status.HTTP_201_CREATED)
def create_actor(
    payload: ActorCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    actor = crud_actor.create(db, obj_in=payload)
    background_tasks.add_task(publish_event, ACTOR_CREATED, actor_created_payload(actor))
    logger.info(f"✅ Actor created: {actor.full_name}")
    return actor


@router.put("/{actor_id}", response_model=Actor)
def update_actor(
    actor_id: int,
    payload: ActorUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    actor = crud_actor.get_or_404(db, actor_id)
    return crud_actor.update(db, db_obj=actor, obj_in=payload)


@router.delete("/{actor_id}")
def delete_actor(
    actor_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    crud_actor.remove(db, id=actor_id)
    logger.info(f"🗑️ Actor deleted: {actor_id}")
    return {"message": "Actor deleted successfully"}
