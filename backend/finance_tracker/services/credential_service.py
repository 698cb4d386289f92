"""
Service for registering users and authenticating their credentials.
"""
from typing import Tuple
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_tracker.config import Settings, get_settings
from finance_tracker.models import User
from finance_tracker.security.passwords import (
    BCRYPT_MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
)
from finance_tracker.security.tokens import create_access_token

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


class CredentialError(ValueError):
    """Registration or login rejected for a business reason."""


class CredentialService:
    """Registers users and exchanges valid credentials for bearer tokens."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def register(self, username: str, password: str) -> Tuple[User, str]:
        """
        Create a user and issue a token for it.

        Raises:
            CredentialError: missing fields, too-short username or password,
                password longer than bcrypt accepts, or a taken username
        """
        username = (username or "").strip()
        if not username or not password:
            raise CredentialError("Username and password are required")
        if len(username) < MIN_USERNAME_LENGTH:
            raise CredentialError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise CredentialError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise CredentialError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")

        existing = self.db.query(User.id).filter(User.username == username).first()
        if existing:
            raise CredentialError("Username already exists")

        user = User(
            username=username,
            password_hash=hash_password(password, rounds=self.settings.bcrypt_rounds),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise CredentialError("Username already exists") from exc
        self.db.refresh(user)

        logger.info(f"[AUTH] Registered user {user.id} ({user.username})")
        return user, self.issue_token(user)

    def authenticate(self, username: str, password: str) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Unknown users and wrong passwords are reported identically.
        """
        username = (username or "").strip()
        user = self.db.query(User).filter(User.username == username).first() if username else None
        if not user or not password or not verify_password(password, user.password_hash):
            logger.info("[AUTH] Rejected login attempt")
            raise CredentialError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"[AUTH] User {user.id} logged in")
        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.username, settings=self.settings)
