from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase, like_pattern
from ..exceptions import NotFoundError
from ..models import Actor, Genre, Series
from ..schemas.series import SeriesCreate, SeriesUpdate


class CRUDSeries(CRUDBase[Series, SeriesCreate, SeriesUpdate]):
    def _resolve(self, db: Session, model, ids: List[int]) -> list:
        if not ids:
            return []
        found = db.query(model).filter(model.id.in_(ids)).all()
        missing = set(ids) - {obj.id for obj in found}
        if missing:
            raise NotFoundError(model.__name__, sorted(missing)[0])
        return found

    def search(
        self,
        db: Session,
        *,
        query: Optional[str] = None,
        genre_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> Tuple[int, List[Series]]:
        q = db.query(Series)
        if query:
            q = q.filter(Series.title.ilike(like_pattern(query), escape="\\"))
        if genre_id is not None:
            q = q.filter(Series.genres.any(Genre.id == genre_id))
        total = q.count()
        items = q.order_by(Series.title, Series.id).offset(skip).limit(limit).all()
        return total, items

    def create(self, db: Session, *, obj_in: SeriesCreate) -> Series:
        data = obj_in.model_dump(exclude={"genre_ids", "actor_ids"})
        db_obj = Series(**data)
        db_obj.genres = self._resolve(db, Genre, obj_in.genre_ids)
        db_obj.actors = self._resolve(db, Actor, obj_in.actor_ids)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Series, obj_in: SeriesUpdate) -> Series:
        data = obj_in.model_dump(exclude_unset=True)
        genre_ids = data.pop("genre_ids", None)
        actor_ids = data.pop("actor_ids", None)
        self.reject_nulls(data)

        for field, value in data.items():
            setattr(db_obj, field, value)
        if genre_ids is not None:
            db_obj.genres = self._resolve(db, Genre, genre_ids)
        if actor_ids is not None:
            db_obj.actors = self._resolve(db, Actor, actor_ids)

        self.commit_update(db, db_obj)
        db.refresh(db_obj)
        return db_obj


series = CRUDSeries(Series)
