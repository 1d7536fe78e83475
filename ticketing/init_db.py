from sqlalchemy.orm import Session
import logging

from ticketing.config import (
    INITIAL_ADMIN_EMAIL,
    INITIAL_ADMIN_NAME,
    INITIAL_ADMIN_PASSWORD,
)
from ticketing.models.user import Admin
from ticketing.services.auth import get_password_hash

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Create the configured admin account when no admin exists yet.
    """
    if db.query(Admin).count() > 0:
        logger.info("Admin accounts already exist, skipping seed.")
        return

    db_admin = Admin(
        name=INITIAL_ADMIN_NAME,
        email=INITIAL_ADMIN_EMAIL.lower(),
        hashed_password=get_password_hash(INITIAL_ADMIN_PASSWORD),
    )
    db.add(db_admin)
    db.commit()
    logger.info(f"Admin created: {db_admin.email}")
