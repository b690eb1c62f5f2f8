"""
JWT creation and verification for bearer authentication.

Tokens are returned by /api/auth/login and presented in the Authorization
header. Algorithm: HS256; secret must be set in config. Claims: sub (user id),
email, exp (now + JWT_MAX_AGE).
"""
from datetime import datetime, timedelta, UTC

from jose import jwt, JWTError
from pydantic import BaseModel

from config import JWT_SECRET, JWT_ALGORITHM, JWT_MAX_AGE
from errors import InvalidToken


class Identity(BaseModel):
    """Claims resolved from a verified token."""
    id: str
    email: str


def create_jwt(user_id: str, email: str) -> str:
    """Build a JWT carrying the user's id and email; exp = now + JWT_MAX_AGE."""
    payload = {
        "sub": user_id,
        "email": email,
        "exp": datetime.now(UTC) + timedelta(seconds=JWT_MAX_AGE),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    """Decode and verify JWT; raises JWTError if invalid or expired."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])


def verify_token(token: str) -> Identity:
    """Return the identity asserted by token, or raise InvalidToken."""
    try:
        payload = decode_jwt(token)
    except JWTError:
        raise InvalidToken()
    user_id = payload.get("sub")
    email = payload.get("email")
    if not isinstance(user_id, str) or not user_id or not isinstance(email, str):
        raise InvalidToken()
    return Identity(id=user_id, email=email)
