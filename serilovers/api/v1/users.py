# serilovers/api/v1/users.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...models.user import User
from ...schemas.user import User as UserSchema
from ..deps import get_current_admin, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserSchema)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=List[UserSchema])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Admin-only user listing"""
    return db.query(User).order_by(User.id).offset(skip).limit(limit).all()
