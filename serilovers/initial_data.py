import logging
from sqlalchemy.orm import Session
from .database import SessionLocal, create_tables
from .models.user import User, UserRole
from .services.watchlist_service import watchlist_service
from .utils.security import get_password_hash
from .config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(db: Session) -> None:
    """Create the first admin account from FIRST_SUPERUSER_* settings"""
    if not settings.FIRST_SUPERUSER_EMAIL or not settings.FIRST_SUPERUSER_PASSWORD:
        logger.info("FIRST_SUPERUSER_EMAIL/PASSWORD not set, skipping admin creation")
        return

    user = db.query(User).filter(User.email == settings.FIRST_SUPERUSER_EMAIL).first()
    if user:
        logger.info("Admin already exists")
        return

    user = User(
        email=settings.FIRST_SUPERUSER_EMAIL,
        username=settings.FIRST_SUPERUSER_EMAIL.split("@")[0],
        hashed_password=get_password_hash(settings.FIRST_SUPERUSER_PASSWORD),
        full_name="Administrator",
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(user)
    db.commit()
    logger.info(f"Admin created: {settings.FIRST_SUPERUSER_EMAIL}")


def repair_favorites(db: Session) -> None:
    """Give every user exactly one Favorites collection"""
    user_ids = [row[0] for row in db.query(User.id).all()]
    for user_id in user_ids:
        watchlist_service.ensure_favorites(db, user_id)
    logger.info(f"Favorites checked for {len(user_ids)} users")


def init_db(db: Session) -> None:
    create_admin(db)
    repair_favorites(db)


def main() -> None:
    """Main function to initialize database"""
    logger.info("Creating initial data")
    create_tables()
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
