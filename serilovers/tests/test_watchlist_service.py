"""Unit tests for watchlists, collections and the Favorites invariant."""

from datetime import datetime, timedelta

import pytest

from serilovers.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    PreconditionFailedError,
    ValidationFailedError,
)
from serilovers.models import Watchlist, WatchlistCollection
from serilovers.services.watchlist_service import watchlist_service


def _favorites(db, user):
    return [c for c in db.query(WatchlistCollection).filter(WatchlistCollection.user_id == user.id).all()
            if c.is_favorites]


class TestEnsureFavorites:
    """Tests for ensure_favorites."""

    def test_creates_when_missing(self, db, user):
        """Test a user without collections gets Favorites."""
        keeper = watchlist_service.ensure_favorites(db, user.id)

        assert keeper.name == "Favorites"
        assert len(_favorites(db, user)) == 1

    def test_noop_when_single(self, db, user):
        """Test a second call keeps the same collection."""
        first = watchlist_service.ensure_favorites(db, user.id)
        second = watchlist_service.ensure_favorites(db, user.id)

        assert first.id == second.id
        assert len(_favorites(db, user)) == 1

    def test_merges_duplicates(self, db, user, make_series):
        """Test three Favorites-named collections collapse into the earliest."""
        base = datetime.utcnow() - timedelta(days=3)
        names = ["favorites", "Favourite", "FAVORITES"]
        collections = []
        for offset, name in enumerate(names):
            collection = WatchlistCollection(user_id=user.id, name=name, created_at=base + timedelta(days=offset))
            db.add(collection)
            collections.append(collection)
        db.commit()

        for index, collection in enumerate(collections):
            series = make_series(f"Show {index}", (1,))
            db.add(Watchlist(user_id=user.id, series_id=series.id, collection_id=collection.id))
        db.commit()

        keeper = watchlist_service.ensure_favorites(db, user.id)

        assert keeper.id == collections[0].id
        assert [c.id for c in _favorites(db, user)] == [collections[0].id]
        entries = db.query(Watchlist).filter(Watchlist.user_id == user.id).all()
        assert len(entries) == 3
        assert {e.collection_id for e in entries} == {keeper.id}

    def test_tie_broken_by_lowest_id(self, db, user):
        """Test equal created_at keeps the lowest id."""
        stamp = datetime.utcnow()
        first = WatchlistCollection(user_id=user.id, name="Favorites", created_at=stamp)
        db.add(first)
        db.commit()
        second = WatchlistCollection(user_id=user.id, name="favorites", created_at=stamp)
        db.add(second)
        db.commit()

        keeper = watchlist_service.ensure_favorites(db, user.id)

        assert keeper.id == first.id
        assert len(_favorites(db, user)) == 1

    def test_list_collections_repairs(self, db, user):
        """Test listing collections leaves exactly one Favorites."""
        db.add_all([
            WatchlistCollection(user_id=user.id, name="Favorites"),
            WatchlistCollection(user_id=user.id, name="favourite"),
        ])
        db.commit()

        collections = watchlist_service.list_collections(db, user.id)

        assert sum(1 for c in collections if c.is_favorites) == 1


class TestCollections:
    """Tests for collection rules."""

    def test_duplicate_name_rejected(self, db, user):
        """Test names are unique per user, case-insensitively."""
        watchlist_service.create_collection(db, user.id, "Weekend")

        with pytest.raises(PreconditionFailedError):
            watchlist_service.create_collection(db, user.id, "weekend")

    def test_blank_name_rejected(self, db, user):
        """Test a whitespace-only name is refused on create."""
        with pytest.raises(ValidationFailedError):
            watchlist_service.create_collection(db, user.id, "   ")

        assert db.query(WatchlistCollection).filter(WatchlistCollection.user_id == user.id).count() == 0

    def test_blank_rename_rejected(self, db, user):
        """Test renaming to whitespace is refused and the old name stays."""
        collection = watchlist_service.create_collection(db, user.id, "Weekend")

        with pytest.raises(ValidationFailedError):
            watchlist_service.update_collection(db, collection.id, user, name="\t ")

        db.expire_all()
        assert collection.name == "Weekend"

    def test_second_favorites_rejected(self, db, user):
        """Test a Favourite alias cannot be created next to Favorites."""
        watchlist_service.ensure_favorites(db, user.id)

        with pytest.raises(PreconditionFailedError):
            watchlist_service.create_collection(db, user.id, "Favourite")

    def test_favorites_cannot_be_renamed(self, db, user):
        """Test renaming Favorites to something else is refused."""
        favorites = watchlist_service.ensure_favorites(db, user.id)

        with pytest.raises(PreconditionFailedError):
            watchlist_service.update_collection(db, favorites.id, user, name="Maybe later")

    def test_favorites_description_can_change(self, db, user):
        """Test the description of Favorites is editable."""
        favorites = watchlist_service.ensure_favorites(db, user.id)

        updated = watchlist_service.update_collection(db, favorites.id, user, description="best of")

        assert updated.description == "best of"

    def test_favorites_cannot_be_deleted(self, db, user):
        """Test deleting Favorites is refused."""
        favorites = watchlist_service.ensure_favorites(db, user.id)

        with pytest.raises(PreconditionFailedError):
            watchlist_service.delete_collection(db, favorites.id, user)

    def test_delete_detaches_entries(self, db, user, make_series):
        """Test deleting a collection keeps its entries, uncollected."""
        series = make_series("Dark", (1,))
        collection = watchlist_service.create_collection(db, user.id, "Weekend")
        entry = watchlist_service.add_series_to_collection(db, collection.id, series.id, user)

        watchlist_service.delete_collection(db, collection.id, user)

        remaining = db.query(Watchlist).filter(Watchlist.id == entry.id).first()
        assert remaining is not None
        assert remaining.collection_id is None

    def test_add_series_moves_loose_entry(self, db, user, make_series):
        """Test an uncollected entry is moved instead of duplicated."""
        series = make_series("Dark", (1,))
        loose = watchlist_service.add_to_watchlist(db, user.id, series.id)
        collection = watchlist_service.create_collection(db, user.id, "Weekend")

        entry = watchlist_service.add_series_to_collection(db, collection.id, series.id, user)
        again = watchlist_service.add_series_to_collection(db, collection.id, series.id, user)

        assert entry.id == loose.id == again.id
        assert db.query(Watchlist).filter(Watchlist.user_id == user.id).count() == 1

    def test_add_unknown_series(self, db, user):
        """Test adding an unknown series raises NotFound."""
        collection = watchlist_service.create_collection(db, user.id, "Weekend")

        with pytest.raises(NotFoundError):
            watchlist_service.add_series_to_collection(db, collection.id, 999, user)

    def test_other_users_collection(self, db, user, other_user):
        """Test collections are private."""
        collection = watchlist_service.create_collection(db, user.id, "Weekend")

        with pytest.raises(PermissionDeniedError):
            watchlist_service.get_collection(db, collection.id, other_user)


class TestPlainWatchlist:
    """Tests for the plain watchlist."""

    def test_duplicate_entry_conflicts(self, db, user, make_series):
        """Test adding the same series twice is a conflict."""
        series = make_series("Dark", (1,))
        watchlist_service.add_to_watchlist(db, user.id, series.id)

        with pytest.raises(ConflictError):
            watchlist_service.add_to_watchlist(db, user.id, series.id)

    def test_remove_own_entry(self, db, user, other_user, make_series):
        """Test only the owner removes an entry."""
        series = make_series("Dark", (1,))
        entry = watchlist_service.add_to_watchlist(db, user.id, series.id)

        with pytest.raises(PermissionDeniedError):
            watchlist_service.remove_from_watchlist(db, entry.id, other_user)

        watchlist_service.remove_from_watchlist(db, entry.id, user)
        assert watchlist_service.list_watchlist(db, user.id) == []
