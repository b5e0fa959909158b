from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..database import Base
from ..exceptions import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with user wildcards escaped by a backslash"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default methods to Create, Read, Update, Delete (CRUD).

        **Parameters**

        * `model`: A SQLAlchemy model class
        """
        self.model = model

    @property
    def label(self) -> str:
        return self.model.__name__

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_or_404(self, db: Session, id: Any) -> ModelType:
        obj = self.get(db, id)
        if obj is None:
            raise NotFoundError(self.label, id)
        return obj

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return db.query(self.model).order_by(self.model.id).offset(skip).limit(limit).all()

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        self.reject_nulls(update_data)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        self.commit_update(db, db_obj)
        db.refresh(db_obj)
        return db_obj

    def reject_nulls(self, update_data: Dict[str, Any]) -> None:
        """An explicit null for a NOT NULL column is a 400, raised before any attribute changes"""
        columns = self.model.__table__.columns
        for field, value in update_data.items():
            if value is None and field in columns and not columns[field].nullable:
                raise ValidationFailedError(
                    f"{field} cannot be null.",
                    context={"model": self.label, "field": field},
                )

    def commit_update(self, db: Session, db_obj: ModelType) -> None:
        """
        Commit a pending update. A StaleDataError means the UPDATE matched
        no row: report NotFound when the row is really gone, else re-raise.
        """
        obj_id = db_obj.id
        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            if db.query(self.model.id).filter(self.model.id == obj_id).first() is None:
                logger.warning(f"⚠️ {self.label} {obj_id} vanished during update")
                raise NotFoundError(self.label, obj_id)
            raise

    def remove(self, db: Session, *, id: int) -> ModelType:
        obj = self.get_or_404(db, id)
        db.delete(obj)
        db.commit()
        return obj
