from typing import List, Optional
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase
from ..exceptions import NotFoundError, ValidationFailedError
from ..models import Season, Series
from ..schemas.series import SeasonCreate, SeasonUpdate


class CRUDSeason(CRUDBase[Season, SeasonCreate, SeasonUpdate]):
    def get_by_number(
        self, db: Session, *, series_id: int, season_number: int, exclude_id: Optional[int] = None
    ) -> Optional[Season]:
        q = db.query(Season).filter(
            Season.series_id == series_id,
            Season.season_number == season_number,
        )
        if exclude_id is not None:
            q = q.filter(Season.id != exclude_id)
        return q.first()

    def get_by_series(self, db: Session, *, series_id: int) -> List[Season]:
        return (
            db.query(Season)
            .filter(Season.series_id == series_id)
            .order_by(Season.season_number)
            .all()
        )

    def _check_number(self, db: Session, series_id: int, season_number: int,
                      exclude_id: Optional[int] = None) -> None:
        if self.get_by_number(db, series_id=series_id, season_number=season_number, exclude_id=exclude_id):
            raise ValidationFailedError(
                f"Season {season_number} already exists for this series.",
                context={"series_id": series_id, "season_number": season_number},
            )

    def create(self, db: Session, *, obj_in: SeasonCreate) -> Season:
        if not db.query(Series.id).filter(Series.id == obj_in.series_id).first():
            raise NotFoundError("Series", obj_in.series_id)
        self._check_number(db, obj_in.series_id, obj_in.season_number)
        return super().create(db, obj_in=obj_in)

    def update(self, db: Session, *, db_obj: Season, obj_in: SeasonUpdate) -> Season:
        if obj_in.season_number is not None and obj_in.season_number != db_obj.season_number:
            self._check_number(db, db_obj.series_id, obj_in.season_number, exclude_id=db_obj.id)
        return super().update(db, db_obj=db_obj, obj_in=obj_in)


season = CRUDSeason(Season)
