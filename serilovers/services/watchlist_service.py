"""
SeriLovers Watchlist Service
Watchlist entries, named collections and the single-Favorites invariant
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    PreconditionFailedError,
    ValidationFailedError,
)
from ..models import Series, User, Watchlist, WatchlistCollection
from ..models.watchlist import FAVORITES_ALIASES, FAVORITES_NAME, is_favorites_name

logger = logging.getLogger(__name__)


class WatchlistService:

    # ============================================================
    # Favorites
    # ============================================================

    def ensure_favorites(self, db: Session, user_id: int) -> WatchlistCollection:
        """
        Leave the user with exactly one Favorites collection.

        Creates it when missing. When duplicates exist the earliest one
        (lowest id on a created_at tie) wins; entries of the others are
        moved onto it and the duplicates are deleted.
        """
        favorites = (
            db.query(WatchlistCollection)
            .filter(
                WatchlistCollection.user_id == user_id,
                func.lower(func.trim(WatchlistCollection.name)).in_(FAVORITES_ALIASES),
            )
            .order_by(WatchlistCollection.created_at.asc(), WatchlistCollection.id.asc())
            .all()
        )

        if not favorites:
            keeper = WatchlistCollection(user_id=user_id, name=FAVORITES_NAME)
            db.add(keeper)
            db.commit()
            db.refresh(keeper)
            logger.info(f"✅ Created Favorites collection for user {user_id}")
            return keeper

        keeper, duplicates = favorites[0], favorites[1:]
        if not duplicates:
            return keeper

        moved = 0
        for duplicate in duplicates:
            db.expire(duplicate, ["entries"])
            for entry in list(duplicate.entries):
                entry.collection = keeper
                moved += 1
            db.delete(duplicate)
        db.commit()

        logger.warning(f"⚠️ Merged {len(duplicates)} duplicate Favorites collections ({moved} entries) for user {user_id}")
        return keeper

    # ============================================================
    # Collections
    # ============================================================

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationFailedError("Collection name cannot be blank.", context={"name": name})
        return cleaned

    def _name_taken(self, db: Session, user_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        query = db.query(WatchlistCollection).filter(
            WatchlistCollection.user_id == user_id,
            func.lower(WatchlistCollection.name) == name.strip().lower(),
        )
        if exclude_id is not None:
            query = query.filter(WatchlistCollection.id != exclude_id)
        return query.first() is not None

    def _has_favorites(self, db: Session, user_id: int, exclude_id: Optional[int] = None) -> bool:
        query = db.query(WatchlistCollection).filter(
            WatchlistCollection.user_id == user_id,
            func.lower(func.trim(WatchlistCollection.name)).in_(FAVORITES_ALIASES),
        )
        if exclude_id is not None:
            query = query.filter(WatchlistCollection.id != exclude_id)
        return query.first() is not None

    def get_collection(self, db: Session, collection_id: int, user: User) -> WatchlistCollection:
        collection = db.query(WatchlistCollection).filter(WatchlistCollection.id == collection_id).first()
        if not collection:
            raise NotFoundError("WatchlistCollection", collection_id)
        if collection.user_id != user.id and not user.is_admin():
            raise PermissionDeniedError(
                "You can only access your own collections.",
                context={"collection_id": collection_id, "user_id": user.id},
            )
        return collection

    def list_collections(self, db: Session, user_id: int) -> List[WatchlistCollection]:
        self.ensure_favorites(db, user_id)
        return (
            db.query(WatchlistCollection)
            .filter(WatchlistCollection.user_id == user_id)
            .order_by(WatchlistCollection.created_at.asc(), WatchlistCollection.id.asc())
            .all()
        )

    def create_collection(self, db: Session, user_id: int, name: str,
                          description: Optional[str] = None) -> WatchlistCollection:
        name = self._clean_name(name)
        if self._name_taken(db, user_id, name):
            raise PreconditionFailedError(
                f"A collection named '{name}' already exists.",
                context={"user_id": user_id, "name": name},
            )
        if is_favorites_name(name) and self._has_favorites(db, user_id):
            raise PreconditionFailedError(
                "You already have a Favorites collection.",
                context={"user_id": user_id, "name": name},
            )

        collection = WatchlistCollection(user_id=user_id, name=name, description=description)
        db.add(collection)
        db.commit()
        db.refresh(collection)
        logger.info(f"✅ Collection '{name}' created for user {user_id}")
        return collection

    def update_collection(self, db: Session, collection_id: int, user: User,
                          name: Optional[str] = None,
                          description: Optional[str] = None) -> WatchlistCollection:
        collection = self.get_collection(db, collection_id, user)

        if name is not None:
            name = self._clean_name(name)
            if collection.is_favorites and not is_favorites_name(name):
                raise PreconditionFailedError(
                    "The Favorites collection cannot be renamed.",
                    context={"collection_id": collection_id},
                )
            if self._name_taken(db, collection.user_id, name, exclude_id=collection.id):
                raise PreconditionFailedError(
                    f"A collection named '{name}' already exists.",
                    context={"collection_id": collection_id, "name": name},
                )
            if is_favorites_name(name) and self._has_favorites(db, collection.user_id, exclude_id=collection.id):
                raise PreconditionFailedError(
                    "You already have a Favorites collection.",
                    context={"collection_id": collection_id, "name": name},
                )
            collection.name = name

        if description is not None:
            collection.description = description

        db.commit()
        db.refresh(collection)
        return collection

    def delete_collection(self, db: Session, collection_id: int, user: User) -> None:
        collection = self.get_collection(db, collection_id, user)
        if collection.is_favorites:
            raise PreconditionFailedError(
                "The Favorites collection cannot be deleted.",
                context={"collection_id": collection_id},
            )

        db.expire(collection, ["entries"])
        for entry in list(collection.entries):
            entry.collection = None
        db.delete(collection)
        db.commit()
        logger.info(f"🗑️ Collection {collection_id} deleted")

    def add_series_to_collection(self, db: Session, collection_id: int, series_id: int,
                                 user: User) -> Watchlist:
        collection = self.get_collection(db, collection_id, user)
        if not db.query(Series.id).filter(Series.id == series_id).first():
            raise NotFoundError("Series", series_id)

        entries = db.query(Watchlist).filter(
            Watchlist.user_id == collection.user_id,
            Watchlist.series_id == series_id,
        ).all()

        for entry in entries:
            if entry.collection_id == collection.id:
                return entry

        loose = next((e for e in entries if e.collection_id is None), None)
        if loose:
            loose.collection = collection
            entry = loose
        else:
            entry = Watchlist(user_id=collection.user_id, series_id=series_id, collection=collection)
            db.add(entry)

        db.commit()
        db.refresh(entry)
        logger.info(f"✅ Series {series_id} added to collection {collection_id}")
        return entry

    def remove_series_from_collection(self, db: Session, collection_id: int, series_id: int,
                                      user: User) -> None:
        collection = self.get_collection(db, collection_id, user)
        entries = db.query(Watchlist).filter(
            Watchlist.collection_id == collection.id,
            Watchlist.series_id == series_id,
        ).all()
        for entry in entries:
            entry.collection = None
        db.commit()

    # ============================================================
    # Plain watchlist
    # ============================================================

    def add_to_watchlist(self, db: Session, user_id: int, series_id: int,
                         collection_id: Optional[int] = None) -> Watchlist:
        if not db.query(Series.id).filter(Series.id == series_id).first():
            raise NotFoundError("Series", series_id)

        existing = db.query(Watchlist).filter(
            Watchlist.user_id == user_id,
            Watchlist.series_id == series_id,
        ).first()
        if existing:
            raise ConflictError(
                "Series is already in your watchlist.",
                context={"user_id": user_id, "series_id": series_id},
            )

        if collection_id is not None:
            collection = db.query(WatchlistCollection).filter(
                WatchlistCollection.id == collection_id,
                WatchlistCollection.user_id == user_id,
            ).first()
            if not collection:
                raise NotFoundError("WatchlistCollection", collection_id)

        entry = Watchlist(user_id=user_id, series_id=series_id, collection_id=collection_id)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    def list_watchlist(self, db: Session, user_id: int) -> List[Watchlist]:
        return (
            db.query(Watchlist)
            .filter(Watchlist.user_id == user_id)
            .order_by(Watchlist.added_at.desc(), Watchlist.id.desc())
            .all()
        )

    def remove_from_watchlist(self, db: Session, entry_id: int, user: User) -> None:
        entry = db.query(Watchlist).filter(Watchlist.id == entry_id).first()
        if not entry:
            raise NotFoundError("Watchlist", entry_id)
        if entry.user_id != user.id and not user.is_admin():
            raise PermissionDeniedError(
                "You can only remove your own watchlist entries.",
                context={"entry_id": entry_id, "user_id": user.id},
            )
        db.delete(entry)
        db.commit()


# Singleton instance
watchlist_service = WatchlistService()
