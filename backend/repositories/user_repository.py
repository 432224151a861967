import uuid
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from core.exceptions import InternalError
from models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", e)
            raise InternalError() from e

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.session.exec(select(User).where(User.email == email.lower())).first()
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", e)
            raise InternalError() from e

    def insert(self, user: User) -> User:
        user.email = user.email.lower()
        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User write failed: %s", e)
            raise InternalError() from e
        return user
