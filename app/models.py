"""
Data models for the audiobook backend.

Audio assets are not modelled here: they are files in the book's storage
area (see services.asset_service).
"""
from sqlalchemy import Column, Float, Integer, String

from database import Base


class User(Base):
    """
    Registered account.

    - id: generated hex uuid, primary key; never changes.
    - email: unique, compared case-sensitively exactly as given.
    - password_hash: bcrypt hash (cost from config.BCRYPT_ROUNDS).
    """
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)


class Book(Base):
    """
    Catalog entry. seq preserves creation order for listing; id is the
    public identifier used in URLs and storage areas.
    """
    __tablename__ = "books"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)
    title = Column(String(1024), nullable=False)
    cover_url = Column(String(2048), nullable=True)


class ProgressEntry(Base):
    """Last saved playback offset (seconds) for one (user, book, audio) triple."""
    __tablename__ = "progress"

    user_id = Column(String(64), primary_key=True)
    book_id = Column(String(255), primary_key=True)
    audio_name = Column(String(1024), primary_key=True)
    current_time = Column("playback_time", Float, nullable=False)
