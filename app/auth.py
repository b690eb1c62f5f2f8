"""
Email/password registration, login, and the bearer-token auth gate.

- /register creates a user (bcrypt hash); duplicate emails are rejected.
- /login verifies credentials and returns a signed JWT in the body.
- /me returns the identity carried by the presented token.
- get_current_identity dependency reads "Authorization: Bearer <jwt>" and
  returns the verified Identity (used by progress and others). It never
  consults the user table: the token alone establishes identity.
"""
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from errors import InvalidToken, MissingToken
from security import Identity, create_jwt, verify_token
from services import credential_service
from stores import UserStore, get_user_store

router = APIRouter(prefix="/api/auth")


class CredentialsBody(BaseModel):
    """Request body for register and login."""
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


def get_current_identity(request: Request) -> Identity:
    """
    FastAPI dependency: read the bearer token from the Authorization header
    and verify it. Raises MissingToken if no header, InvalidToken if the
    header is malformed or the token does not verify.
    """
    header = request.headers.get("Authorization")
    if not header or not header.strip():
        raise MissingToken()
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise InvalidToken()
    return verify_token(token)


@router.post("/register")
def register(body: CredentialsBody, store: UserStore = Depends(get_user_store)):
    """Register a new user. Email must not already be registered (case-sensitive)."""
    credential_service.register(store, body.email, body.password)
    return {"ok": True}


@router.post("/login")
def login(body: CredentialsBody, store: UserStore = Depends(get_user_store)):
    """Verify email and password; return a bearer token for later requests."""
    user = credential_service.verify(store, body.email, body.password)
    return {"token": create_jwt(user.id, user.email)}


@router.get("/me")
def me(identity: Identity = Depends(get_current_identity)):
    """Return the identity (id, email) the presented token asserts."""
    return {"id": identity.id, "email": identity.email}
