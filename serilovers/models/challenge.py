from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum
from ..database import Base


# ==================== ENUMS ====================

class ChallengeDifficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


class ChallengeProgressStatus(str, Enum):
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    ABANDONED = "Abandoned"


# ==================== MODELS ====================

class Challenge(Base):
    """A "watch N series" style challenge users can take part in"""
    __tablename__ = "challenges"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    difficulty = Column(SQLEnum(ChallengeDifficulty, name="challenge_difficulty"), nullable=False)
    target_count = Column(Integer, nullable=False)
    participants_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    progress = relationship("ChallengeProgress", back_populates="challenge", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Challenge(id={self.id}, name='{self.name}', target={self.target_count})>"


class ChallengeProgress(Base):
    __tablename__ = "challenge_progress"

    id = Column(Integer, primary_key=True, index=True)
    challenge_id = Column(Integer, ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    progress_count = Column(Integer, default=0, nullable=False)
    status = Column(
        SQLEnum(ChallengeProgressStatus, name="challenge_progress_status"),
        default=ChallengeProgressStatus.IN_PROGRESS,
        nullable=False,
    )
    completed_at = Column(DateTime(timezone=True), nullable=True)

    challenge = relationship("Challenge", back_populates="progress")
    user = relationship("User", back_populates="challenge_progress")

    def __repr__(self):
        return f"<ChallengeProgress(challenge={self.challenge_id}, user={self.user_id}, status={self.status})>"
