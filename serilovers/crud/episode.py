from typing import List, Optional
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase
from ..exceptions import NotFoundError, ValidationFailedError
from ..models import Episode, Season
from ..schemas.episodes import EpisodeCreate, EpisodeUpdate


class CRUDEpisode(CRUDBase[Episode, EpisodeCreate, EpisodeUpdate]):
    def get_by_number(
        self, db: Session, *, season_id: int, episode_number: int, exclude_id: Optional[int] = None
    ) -> Optional[Episode]:
        q = db.query(Episode).filter(
            Episode.season_id == season_id,
            Episode.episode_number == episode_number,
        )
        if exclude_id is not None:
            q = q.filter(Episode.id != exclude_id)
        return q.first()

    def get_by_season(self, db: Session, *, season_id: int) -> List[Episode]:
        return (
            db.query(Episode)
            .filter(Episode.season_id == season_id)
            .order_by(Episode.episode_number)
            .all()
        )

    def _check_number(self, db: Session, season_id: int, episode_number: int,
                      exclude_id: Optional[int] = None) -> None:
        if self.get_by_number(db, season_id=season_id, episode_number=episode_number, exclude_id=exclude_id):
            raise ValidationFailedError(
                f"Episode {episode_number} already exists in this season.",
                context={"season_id": season_id, "episode_number": episode_number},
            )

    def create(self, db: Session, *, obj_in: EpisodeCreate) -> Episode:
        if not db.query(Season.id).filter(Season.id == obj_in.season_id).first():
            raise NotFoundError("Season", obj_in.season_id)
        self._check_number(db, obj_in.season_id, obj_in.episode_number)
        return super().create(db, obj_in=obj_in)

    def update(self, db: Session, *, db_obj: Episode, obj_in: EpisodeUpdate) -> Episode:
        if obj_in.episode_number is not None and obj_in.episode_number != db_obj.episode_number:
            self._check_number(db, db_obj.season_id, obj_in.episode_number, exclude_id=db_obj.id)
        return super().update(db, db_obj=db_obj, obj_in=obj_in)


episode = CRUDEpisode(Episode)
