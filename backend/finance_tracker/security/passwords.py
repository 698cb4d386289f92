"""
Password hashing with bcrypt.
"""
import bcrypt

from finance_tracker.config import get_settings

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt with a fresh salt.
    """
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Verify a password against its stored bcrypt hash.
    """
    if not stored_hash or not stored_hash.startswith("$2"):
        return False
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, stored_hash.encode("utf-8"))
