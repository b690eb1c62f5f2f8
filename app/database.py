"""
Database engine and session. Defaults to an in-memory SQLite database;
any SQLAlchemy URL (file SQLite, Postgres) can be set via DATABASE_URL.

get_db is the single dependency for DB access; the stores wrap the session it yields.
"""
import threading
from contextlib import nullcontext

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL

# SQLite needs check_same_thread=False for FastAPI; Postgres does not
_connect_args = {}
_engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    _connect_args["check_same_thread"] = False

# In-memory SQLite lives inside one connection, so every session must share it
IN_MEMORY = DATABASE_URL in ("sqlite://", "sqlite:///:memory:")
if IN_MEMORY:
    _engine_kwargs["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, connect_args=_connect_args, **_engine_kwargs)
# No expiry on commit: attribute reads after commit must not hit the shared connection
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)

Base = declarative_base()

# Guards a single statement-plus-commit on the shared in-memory connection.
# Held only for one store operation, never across a request.
db_guard = threading.RLock() if IN_MEMORY else nullcontext()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        # close() rolls back the shared connection; keep it out of another store operation
        with db_guard:
            db.close()
