"""
SeriLovers User model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum
from ..database import Base


# ==================== ENUMS ====================

class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "admin"
    CLIENT = "client"


# ==================== USER MODEL ====================

class User(Base):
    """Account owning progress, ratings, watchlists and challenge progress"""
    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Authentication
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(500), nullable=False)

    # Basic Info
    full_name = Column(String(255), nullable=True)

    # Role & Status
    role = Column(SQLEnum(UserRole, name="user_role"), default=UserRole.CLIENT, index=True, nullable=False)
    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, index=True)

    # ==================== RELATIONSHIPS ====================

    episode_progress = relationship("EpisodeProgress", back_populates="user", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="user", cascade="all, delete-orphan")
    watchlists = relationship("Watchlist", back_populates="user", cascade="all, delete-orphan")
    watchlist_collections = relationship(
        "WatchlistCollection",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    challenge_progress = relationship("ChallengeProgress", back_populates="user", cascade="all, delete-orphan")

    # ==================== METHODS ====================

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    def is_admin(self) -> bool:
        """Check if user is admin"""
        return self.role == UserRole.ADMIN

    def is_client(self) -> bool:
        """Check if user is client"""
        return self.role == UserRole.CLIENT
