from sqlalchemy.orm import Session
from ..crud.base import CRUDBase
from ..models import Challenge
from ..schemas.challenge import ChallengeCreate, ChallengeUpdate


class CRUDChallenge(CRUDBase[Challenge, ChallengeCreate, ChallengeUpdate]):
    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100):
        return db.query(Challenge).order_by(Challenge.created_at.desc(), Challenge.id.desc()).offset(skip).limit(limit).all()


challenge = CRUDChallenge(Challenge)
