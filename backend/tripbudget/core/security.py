"""
Password hashing and bearer tokens for Tripbudget users.

Passwords are bcrypt hashes of a SHA-256 digest, so passphrases longer than
bcrypt's 72-byte input limit still count in full. Tokens are signed JWTs that
name the user by email (`sub`) and id (`user_id`) and carry the role the user
held when logging in, for clients that tailor their screens to it. Access
checks always reload the role from the database.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from tripbudget.core.config import settings


def _digest(password: str) -> bytes:
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str) -> str:
    """Hash a password for storage in `users.hashed_password`."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_digest(password), hashed_password.encode("utf-8"))


def issue_access_token(user, lifetime: Optional[timedelta] = None) -> str:
    """Signed token for a logged-in user, valid ACCESS_TOKEN_EXPIRE_DAYS by default."""
    if lifetime is None:
        lifetime = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    role = getattr(user.role, "value", user.role)
    claims = {
        "sub": user.email,
        "user_id": user.id,
        "role": role,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def read_access_token(token: str) -> Optional[dict]:
    """
    Claims of a valid token, or None.

    Tokens that are expired, badly signed or lack an integer `user_id` are
    all treated the same way.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not isinstance(claims.get("user_id"), int):
        return None
    return claims
