from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

# Many-to-many association tables
series_genres = Table(
    'series_genres',
    Base.metadata,
    Column('series_id', Integer, ForeignKey('series.id', ondelete='CASCADE'), primary_key=True),
    Column('genre_id', Integer, ForeignKey('genres.id', ondelete='CASCADE'), primary_key=True)
)

series_actors = Table(
    'series_actors',
    Base.metadata,
    Column('series_id', Integer, ForeignKey('series.id', ondelete='CASCADE'), primary_key=True),
    Column('actor_id', Integer, ForeignKey('actors.id', ondelete='CASCADE'), primary_key=True)
)


class Series(Base):
    """
    Series model. Owns seasons; the rating column is the denormalized mean
    of all user ratings (see services.rating_service).
    """
    __tablename__ = "series"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Basic Information
    title = Column(String(200), index=True, nullable=False)
    description = Column(Text, nullable=True)
    release_date = Column(Date, nullable=True)
    image_url = Column(String(500), nullable=True, comment="Poster image")

    # Aggregate
    rating = Column(Float, default=0.0, nullable=False, comment="Average user rating (0-10), 2 decimals")

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=datetime.utcnow, nullable=True)

    # Relationships
    genres = relationship("Genre", secondary=series_genres, back_populates="series")
    actors = relationship("Actor", secondary=series_actors, back_populates="series")
    seasons = relationship(
        "Season",
        back_populates="series",
        cascade="all, delete-orphan",
        order_by="Season.season_number",
    )
    ratings = relationship("Rating", back_populates="series", cascade="all, delete-orphan")
    watchlist_entries = relationship("Watchlist", back_populates="series", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Series(id={self.id}, title='{self.title}', seasons={len(self.seasons)})>"

    @property
    def total_episodes(self) -> int:
        return sum(len(season.episodes) for season in self.seasons)


class Season(Base):
    """
    Season within a series. season_number is unique per series
    (checked in the seasons router before insert/update).
    """
    __tablename__ = "seasons"

    id = Column(Integer, primary_key=True, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    season_number = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    release_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=datetime.utcnow, nullable=True)

    # Relationships
    series = relationship("Series", back_populates="seasons")
    episodes = relationship(
        "Episode",
        back_populates="season",
        cascade="all, delete-orphan",
        order_by="Episode.episode_number",
    )

    def __repr__(self):
        return f"<Season(id={self.id}, series_id={self.series_id}, S{self.season_number:02d})>"


class Episode(Base):
    """
    Episode within a season. episode_number is unique per season.
    """
    __tablename__ = "episodes"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Episode Identification
    season_id = Column(Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_number = Column(Integer, nullable=False, comment="Episode number within the season")

    # Basic Information
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    air_date = Column(Date, nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=datetime.utcnow, nullable=True)

    # Relationships
    season = relationship("Season", back_populates="episodes")
    progress = relationship("EpisodeProgress", back_populates="episode", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Episode(id={self.id}, season_id={self.season_id}, E{self.episode_number:02d})>"
