"""Credential store: user registration, password verification and profile edits."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskflow.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationFailed
from taskflow.models.enums import Role
from taskflow.models.user import User
from taskflow.utils.security import dummy_verify, hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CredentialStore:
    """Owns User rows. Password hashes never leave this class."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def require(self, user_id: int) -> User:
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def list_users(self):
        return self.db.query(User).order_by(User.id).all()

    def register(self, name: str, email: str, raw_password: str, role: Optional[Role] = None) -> int:
        email = normalize_email(email)
        if self.get_by_email(email) is not None:
            raise DuplicateEmail()

        try:
            hashed = hash_password(raw_password)
        except ValueError as e:
            raise ValidationFailed(str(e))

        user = User(name=name, email=email, password_hash=hashed, role=role or Role.USER)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info("New user registered: %s (role=%s)", user.email, user.role.value)
        return user.id

    def verify(self, email: str, raw_password: str) -> User:
        user = self.get_by_email(email)
        if user is None:
            dummy_verify()
            logger.warning("Failed login attempt for email: %s", normalize_email(email))
            raise InvalidCredentials()
        if not verify_password(raw_password, user.password_hash):
            logger.warning("Failed login attempt for email: %s", user.email)
            raise InvalidCredentials()
        return user

    def change_secret(self, user_id: int, current_raw_password: str, new_raw_password: str) -> None:
        # Outstanding tokens stay valid until they expire.
        user = self.require(user_id)
        if not verify_password(current_raw_password, user.password_hash):
            raise InvalidCredentials("Current password is incorrect")
        try:
            user.password_hash = hash_password(new_raw_password)
        except ValueError as e:
            raise ValidationFailed(str(e))
        self._commit()
        logger.info("Password changed for user: %s", user.email)

    def update_profile(self, user_id: int, name: str, email: str) -> User:
        user = self.require(user_id)
        email = normalize_email(email)
        taken = (
            self.db.query(User.id)
            .filter(User.email == email, User.id != user_id)
            .first()
        )
        if taken is not None:
            raise DuplicateEmail("Email is already taken by another user")
        user.name = name
        user.email = email
        self._commit()
        self.db.refresh(user)
        logger.info("User profile updated: %s", user.email)
        return user

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race on the unique email index
            self.db.rollback()
            raise DuplicateEmail()
        except Exception:
            self.db.rollback()
            raise
