"""Pytest configuration and fixtures.

Environment is set before any serilovers module is imported so the
settings object and the engine pick up the in-memory SQLite database.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("EVENTS_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import Callable, Generator
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from serilovers.database import Base, SessionLocal, engine, get_db
from serilovers.main import app
from serilovers.models import Episode, EpisodeProgress, Season, Series, User, UserRole
from serilovers.utils.security import create_access_token


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema and session per test.

    Yields:
        Session bound to the in-memory database
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """TestClient whose requests share the test session."""

    def override_get_db():
        # each request starts from fresh state, like its own session would
        db.expire_all()
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db: Session, username: str, role: UserRole) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        hashed_password="not-a-real-hash",
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db: Session) -> User:
    return _make_user(db, "viewer", UserRole.CLIENT)


@pytest.fixture
def other_user(db: Session) -> User:
    return _make_user(db, "other", UserRole.CLIENT)


@pytest.fixture
def admin(db: Session) -> User:
    return _make_user(db, "admin", UserRole.ADMIN)


def _auth_headers(user: User) -> dict:
    token = create_access_token(user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    return _auth_headers


@pytest.fixture
def user_headers(user: User) -> dict:
    return _auth_headers(user)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return _auth_headers(admin)


@pytest.fixture
def make_series(db: Session) -> Callable[..., Series]:
    """Factory: make_series("Title", [5, 5]) builds two seasons of five episodes."""

    def factory(title: str = "Dark", episodes_per_season=(5, 5), episode_numbers=None) -> Series:
        series = Series(title=title)
        db.add(series)
        db.flush()
        for index, count in enumerate(episodes_per_season, start=1):
            season = Season(series_id=series.id, season_number=index, title=f"Season {index}")
            db.add(season)
            db.flush()
            numbers = episode_numbers or range(1, count + 1)
            for number in numbers:
                db.add(Episode(season_id=season.id, episode_number=number, title=f"S{index}E{number}"))
        db.commit()
        db.refresh(series)
        return series

    return factory


@pytest.fixture
def watch(db: Session) -> Callable[..., None]:
    """Directly write completed progress rows, optionally spaced in time."""

    def mark(user: User, episodes, start: datetime = None) -> None:
        start = start or datetime.utcnow() - timedelta(hours=1)
        for offset, episode in enumerate(episodes):
            db.add(EpisodeProgress(
                user_id=user.id,
                episode_id=episode.id,
                is_completed=True,
                watched_at=start + timedelta(minutes=offset),
            ))
        db.commit()

    return mark


@pytest.fixture
def episodes_of(db: Session) -> Callable[[Series], list]:
    """Episodes of a series ordered by (season_number, episode_number)."""

    def lookup(series: Series) -> list:
        return (
            db.query(Episode)
            .join(Season, Episode.season_id == Season.id)
            .filter(Season.series_id == series.id)
            .order_by(Season.season_number, Episode.episode_number)
            .all()
        )

    return lookup
