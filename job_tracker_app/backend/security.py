"""
Password hashing and signed session tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from .config.settings import get_settings

settings = get_settings()

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

SECRET_KEY = settings.secret_key
ALGORITHM = settings.algorithm
SESSION_EXPIRE_MINUTES = settings.session_max_age_minutes


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token naming the session's user; stored in the session cookie."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=SESSION_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[int]:
    """Return the user id carried by a session token, or None if it is invalid."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
