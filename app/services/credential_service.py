"""
Credential service: registration and password verification.

Passwords are hashed with bcrypt at a fixed cost (config.BCRYPT_ROUNDS).
Email uniqueness is checked before insert and enforced again by the users
table's unique constraint, so concurrent registrations cannot both succeed.
"""
import logging
import uuid

import bcrypt
from sqlalchemy.exc import IntegrityError

from config import BCRYPT_ROUNDS
from errors import DuplicateEmail, InvalidPassword, UserNotFound
from models import User
from stores import UserStore

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode())


def register(store: UserStore, email: str, password: str) -> User:
    """Create a user; raises DuplicateEmail if the email is taken (exact match)."""
    if store.get_by_email(email) is not None:
        raise DuplicateEmail()
    user = User(id=uuid.uuid4().hex, email=email, password_hash=hash_password(password))
    try:
        store.insert(user)
    except IntegrityError:
        raise DuplicateEmail()
    logger.info("Registered user %s", user.id)
    return user


def verify(store: UserStore, email: str, password: str) -> User:
    """Return the user for valid credentials; raises UserNotFound or InvalidPassword."""
    user = store.get_by_email(email)
    if user is None:
        raise UserNotFound()
    if not check_password(password, user.password_hash):
        logger.warning("Invalid password for user %s", user.id)
        raise InvalidPassword()
    return user
