"""Password hashing and access-token handling."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from sahaya_api.config import settings
from sahaya_api.exceptions import AuthenticationError, AuthErrorKind


@dataclass(frozen=True)
class Actor:
    """The authenticated caller as carried by a verified token."""
    user_id: int
    role: str


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token carrying the user id (as `sub`) and role."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: Optional[str]) -> Actor:
    """
    Verify a bearer token.

    Raises AuthenticationError with kind MISSING, EXPIRED or INVALID so the
    caller can tell a client exactly why it was turned away.
    """
    if not token:
        raise AuthenticationError(AuthErrorKind.MISSING)

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError(AuthErrorKind.EXPIRED)
    except JWTError:
        raise AuthenticationError(AuthErrorKind.INVALID)

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role is None or not str(subject).isdigit():
        raise AuthenticationError(AuthErrorKind.INVALID)

    return Actor(user_id=int(subject), role=role)
