# serilovers/api/v1/auth.py
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...exceptions import ConflictError
from ...models.user import User, UserRole
from ...schemas.user import Token, UserCreate, UserLogin
from ...services.events import USER_CREATED, publish_event, user_created_payload
from ...services.watchlist_service import watchlist_service
from ...utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Create a client account. Every new account starts with a Favorites collection.
    """
    email = payload.email.lower()
    if db.query(User).filter(func.lower(User.email) == email).first():
        raise ConflictError("Email already registered", context={"email": email})
    if db.query(User).filter(func.lower(User.username) == payload.username.lower()).first():
        raise ConflictError("Username already taken", context={"username": payload.username})

    user = User(
        email=email,
        username=payload.username,
        full_name=payload.full_name,
        hashed_password=get_password_hash(payload.password),
        role=UserRole.CLIENT,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"✅ User registered: {user.email} (id={user.id})")

    watchlist_service.ensure_favorites(db, user.id)
    background_tasks.add_task(publish_event, USER_CREATED, user_created_payload(user))

    token = create_access_token(user.id, role=user.role.value)
    return {"access_token": token, "token_type": "bearer", "user": user}


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(func.lower(User.email) == payload.email.lower()).first()

    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning(f"⚠️ Failed login for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")

    token = create_access_token(user.id, role=user.role.value)
    logger.info(f"🔑 User logged in: {user.email}")
    return {"access_token": token, "token_type": "bearer", "user": user}
