# serilovers/api/v1/admin_statistics.py
"""Admin dashboard statistics"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from ...database import get_db
from ...models.user import User
from ...schemas.statistics import AdminStatistics
from ...services.admin_statistics import admin_statistics_service
from ..deps import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== DASHBOARD STATS ====================

@router.get("", response_model=AdminStatistics)
def get_admin_statistics(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """
    Totals, the five best-rated active series, genre shares and
    ratings plus watchlist additions per month for the last year
    """
    return admin_statistics_service.get_statistics(db)
