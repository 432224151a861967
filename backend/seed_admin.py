import logging
from sqlmodel import Session
from core.config import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD, LOG_LEVEL
from core.database import create_db_and_tables, engine
from core.logging import configure_logging
from models.user import User, UserRole
from repositories.user_repository import UserRepository
from utils.security import hash_password

logger = logging.getLogger(__name__)


def seed_admin(session: Session) -> User:
    users = UserRepository(session)

    # check if admin already exists
    existing_admin = users.find_by_email(ADMIN_EMAIL)
    if existing_admin:
        logger.info("Admin user already exists")
        return existing_admin

    admin = users.insert(
        User(
            name=ADMIN_NAME,
            email=ADMIN_EMAIL,
            password_hash=hash_password(ADMIN_PASSWORD),
            role=UserRole.admin,
        )
    )
    logger.info("Admin user created: %s", admin.email)
    return admin


if __name__ == "__main__":
    configure_logging(LOG_LEVEL)
    create_db_and_tables()
    with Session(engine) as session:
        seed_admin(session)
