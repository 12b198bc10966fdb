"""SQLAlchemy-backed UserStore."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserStore:
    """UserStore over one request-scoped Session. The unique index on username is the authority."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def insert_user(self, user: User) -> bool:
        """Add and commit user; roll back and return False when the insert is rejected."""
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Insert rejected by unique constraint", extra={"username": user.username})
            return False
        self.session.refresh(user)
        return True
