"""
Account Service (Credential Store operations).

Emails are stored lower-cased so uniqueness is case-insensitive.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import InvalidCredentialsError, UserExistsError, UserNotFoundError
from app.core.security import hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Registration, login and user lookup."""

    @staticmethod
    def register(
        db: Session,
        email: str,
        name: str,
        password: str,
        is_subscriber: bool = False,
    ) -> User:
        """
        Create an account.

        Raises:
            UserExistsError: the email is already registered (including a
                concurrent registration tripping the unique constraint)
        """
        email = normalize_email(email)
        if db.query(User).filter(User.email == email).first():
            raise UserExistsError()

        user = User(
            email=email,
            name=name.strip(),
            password_hash=hash_password(password),
            is_subscriber=is_subscriber,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise UserExistsError()
        db.refresh(user)

        logger.info(f"Registered user {user.id} (subscriber={user.is_subscriber})")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> User:
        """Return the user for valid credentials; unknown email and bad password fail alike."""
        user = db.query(User).filter(User.email == normalize_email(email)).first()
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    @staticmethod
    def get_user(db: Session, user_id: str) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
