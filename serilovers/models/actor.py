# serilovers/models/actor.py
"""Actor model, credited on series through series_actors"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    biography = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    # Relationships
    series = relationship("Series", secondary="series_actors", back_populates="actors")

    def __repr__(self):
        return f"<Actor(id={self.id}, name='{self.full_name}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
