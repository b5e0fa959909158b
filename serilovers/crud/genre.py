from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase
from ..exceptions import ConflictError
from ..models import Genre
from ..schemas.genre import GenreCreate, GenreUpdate


class CRUDGenre(CRUDBase[Genre, GenreCreate, GenreUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[Genre]:
        return db.query(Genre).filter(func.lower(Genre.name) == name.strip().lower()).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100):
        return db.query(Genre).order_by(Genre.name).offset(skip).limit(limit).all()

    def create(self, db: Session, *, obj_in: GenreCreate) -> Genre:
        if self.get_by_name(db, name=obj_in.name):
            raise ConflictError("Genre name already exists", context={"name": obj_in.name})
        return super().create(db, obj_in=obj_in)

    def update(self, db: Session, *, db_obj: Genre, obj_in: GenreUpdate) -> Genre:
        if obj_in.name is not None:
            existing = self.get_by_name(db, name=obj_in.name)
            if existing and existing.id != db_obj.id:
                raise ConflictError("Genre name already exists", context={"name": obj_in.name})
        return super().update(db, db_obj=db_obj, obj_in=obj_in)


genre = CRUDGenre(Genre)
