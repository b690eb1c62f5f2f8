"""
Store wrappers around the DB session: one per record type, injected into
routers through the get_*_store dependencies. Call sites only see
get/insert/update operations, never the session or the tables.

Each operation runs its statements and commit under database.db_guard, so
operations from concurrent requests never interleave on a shared connection.
"""
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import db_guard, get_db
from models import Book, ProgressEntry, User


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> User | None:
        with db_guard:
            return self.db.scalars(select(User).where(User.email == email)).first()

    def insert(self, user: User) -> User:
        """Add and commit; IntegrityError (duplicate email) propagates after rollback."""
        with db_guard:
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise
        return user


class BookStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, book_id: str) -> Book | None:
        with db_guard:
            return self.db.scalars(select(Book).where(Book.id == book_id)).first()

    def list_all(self) -> list[Book]:
        """All books in creation order."""
        with db_guard:
            return list(self.db.scalars(select(Book).order_by(Book.seq)))

    def insert(self, book: Book) -> Book:
        with db_guard:
            self.db.add(book)
            self.db.commit()
        return book

    def update(self, book: Book) -> Book:
        with db_guard:
            self.db.commit()
            self.db.refresh(book)
        return book


def _as_number(value: float) -> int | float:
    # Whole seconds go back out as they came in: 42, not 42.0
    return int(value) if value.is_integer() else value


class ProgressStore:
    """Flat mapping (user_id, book_id, audio_name) -> current_time."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, user_id: str, book_id: str, audio_name: str, current_time: float) -> None:
        """Insert or overwrite the entry for this exact triple (last write wins)."""
        entry = ProgressEntry(
            user_id=user_id,
            book_id=book_id,
            audio_name=audio_name,
            current_time=current_time,
        )
        with db_guard:
            try:
                self.db.merge(entry)
                self.db.commit()
            except IntegrityError:
                # Another session inserted the same key first; it exists now, so merge updates
                self.db.rollback()
                self.db.merge(entry)
                self.db.commit()

    def get(self, user_id: str, book_id: str) -> dict[str, int | float]:
        """Map audio_name -> current_time for one user and book; empty if none."""
        with db_guard:
            rows = self.db.scalars(
                select(ProgressEntry).where(
                    ProgressEntry.user_id == user_id,
                    ProgressEntry.book_id == book_id,
                )
            ).all()
        return {row.audio_name: _as_number(row.current_time) for row in rows}


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_book_store(db: Session = Depends(get_db)) -> BookStore:
    return BookStore(db)


def get_progress_store(db: Session = Depends(get_db)) -> ProgressStore:
    return ProgressStore(db)
