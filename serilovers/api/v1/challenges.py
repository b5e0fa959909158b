# serilovers/api/v1/challenges.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from ...crud.challenge import challenge as crud_challenge
from ...database import get_db
from ...models.user import User
from ...schemas.challenge import Challenge, ChallengeCreate, ChallengeProgress, ChallengeUpdate
from ...services.challenge_service import challenge_service
from ..deps import get_current_admin, get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Challenge])
def list_challenges(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_challenge.get_multi(db, skip=skip, limit=limit)


@router.get("/my-progress", response_model=List[ChallengeProgress])
def my_progress(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return challenge_service.my_progress(db, current_user.id)


@router.get("/{challenge_id}", response_model=Challenge)
def get_challenge(challenge_id: int, db: Session = Depends(get_db)):
    return crud_challenge.get_or_404(db, challenge_id)


@router.post("/{challenge_id}/start", response_model=ChallengeProgress, status_code=status.HTTP_201_CREATED)
def start_challenge(
    challenge_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return challenge_service.start_challenge(db, current_user.id, challenge_id)


@router.post("", response_model=Challenge, status_code=status.HTTP_201_CREATED)
def create_challenge(
    payload: ChallengeCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    challenge = crud_challenge.create(db, obj_in=payload)
    logger.info(f"✅ Challenge created: {challenge.name}")
    return challenge


@router.put("/{challenge_id}", response_model=Challenge)
def update_challenge(
    challenge_id: int,
    payload: ChallengeUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    challenge = crud_challenge.get_or_404(db, challenge_id)
    return crud_challenge.update(db, db_obj=challenge, obj_in=payload)


@router.delete("/{challenge_id}")
def delete_challenge(
    challenge_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    crud_challenge.remove(db, id=challenge_id)
    return {"message": "Challenge deleted successfully"}
