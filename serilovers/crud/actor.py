from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase, like_pattern
from ..models import Actor
from ..schemas.actor import ActorCreate, ActorUpdate


class CRUDActor(CRUDBase[Actor, ActorCreate, ActorUpdate]):
    def search(
        self, db: Session, *, query: Optional[str] = None, skip: int = 0, limit: int = 100
    ) -> List[Actor]:
        q = db.query(Actor)
        if query:
            pattern = like_pattern(query)
            q = q.filter(or_(Actor.first_name.ilike(pattern, escape="\\"), Actor.last_name.ilike(pattern, escape="\\")))
        return q.order_by(Actor.last_name, Actor.first_name).offset(skip).limit(limit).all()


actor = CRUDActor(Actor)
