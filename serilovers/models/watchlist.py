from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

FAVORITES_NAME = "Favorites"
FAVORITES_ALIASES = ("favorites", "favourite")


def is_favorites_name(name: str) -> bool:
    """Favorites/Favourite, case-insensitive"""
    return (name or "").strip().lower() in FAVORITES_ALIASES


class WatchlistCollection(Base):
    """Named grouping of watchlist entries (e.g. "Favorites", "Save for later")"""
    __tablename__ = "watchlist_collections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="watchlist_collections")
    entries = relationship("Watchlist", back_populates="collection")

    def __repr__(self):
        return f"<WatchlistCollection(id={self.id}, user={self.user_id}, name='{self.name}')>"

    @property
    def is_favorites(self) -> bool:
        return is_favorites_name(self.name)


class Watchlist(Base):
    """Watchlist entry: a series saved by a user, optionally inside a collection"""
    __tablename__ = "watchlists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    collection_id = Column(
        Integer,
        ForeignKey("watchlist_collections.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    added_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="watchlists")
    series = relationship("Series", back_populates="watchlist_entries")
    collection = relationship("WatchlistCollection", back_populates="entries")

    def __repr__(self):
        return f"<Watchlist(id={self.id}, user={self.user_id}, series={self.series_id}, collection={self.collection_id})>"
