from sqlalchemy import Column, Integer, DateTime, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base


class EpisodeProgress(Base):
    """Progress ledger - one row per (user, episode)"""
    __tablename__ = "episode_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_id = Column(Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True)

    is_completed = Column(Boolean, default=True, nullable=False)
    watched_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="episode_progress")
    episode = relationship("Episode", back_populates="progress")

    __table_args__ = (
        UniqueConstraint("user_id", "episode_id", name="uq_episode_progress_user_episode"),
    )

    def __repr__(self):
        return f"<EpisodeProgress(user={self.user_id}, episode={self.episode_id}, completed={self.is_completed})>"
