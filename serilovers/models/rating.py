from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base


class Rating(Base):
    """Series rating/review. One per (user, series); created_at doubles as last-updated."""
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False)  # 1-10
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="ratings")
    series = relationship("Series", back_populates="ratings")

    __table_args__ = (
        UniqueConstraint("user_id", "series_id", name="uq_ratings_user_series"),
    )

    def __repr__(self):
        return f"<Rating(id={self.id}, user={self.user_id}, series={self.series_id}, score={self.score})>"
