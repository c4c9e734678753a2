# stockpile_api/stores/users.py
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockpile_api.database import DatabaseError
from stockpile_api.models.users import Role, User
from stockpile_api.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserStore:
    """Access to the ``users`` table for a single request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def _failed(self, action: str) -> DatabaseError:
        self.db.rollback()
        logger.exception("Database error while %s", action)
        return DatabaseError()

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == normalize_email(email)).first()
        except SQLAlchemyError as exc:
            raise self._failed("looking up user by email") from exc

    def find_by_id(self, user_id: int) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as exc:
            raise self._failed("looking up user by id") from exc

    def create(self, email: str, password: str, name: str, role: Role = Role.WORKER) -> User:
        user = User(
            email=normalize_email(email),
            password=get_password_hash(password),
            name=name,
            role=Role(role).value,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as exc:
            raise self._failed("creating user") from exc
        return user

    @staticmethod
    def compare_password(password: str, hashed_password: str) -> bool:
        return verify_password(password, hashed_password)

    def update_last_login(self, user_id: int) -> None:
        try:
            self.db.query(User).filter(User.id == user_id).update(
                {User.last_login: func.now()}, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._failed("recording last login") from exc
