"""
Catalog service: create, list and update book records.

Covers are written through the asset store only after the book is known to
exist, so a failed update leaves nothing on disk.
"""
import logging
import uuid
from typing import BinaryIO

from errors import BookNotFound
from models import Book
from services.asset_service import AssetStore
from stores import BookStore

logger = logging.getLogger(__name__)


def create_book(store: BookStore, title: str) -> Book:
    book = store.insert(Book(id=uuid.uuid4().hex, title=title))
    logger.info("Created book %s", book.id)
    return book


def list_books(store: BookStore) -> list[Book]:
    return store.list_all()


def update_book(
    store: BookStore,
    assets: AssetStore,
    book_id: str,
    title: str | None = None,
    cover: tuple[str, BinaryIO] | None = None,
) -> Book:
    """
    Overwrite title when a non-empty one is given; store cover (name, fileobj)
    and point cover_url at it when given. Raises BookNotFound for unknown ids.
    """
    book = store.get(book_id)
    if book is None:
        raise BookNotFound()
    if title:
        book.title = title
    if cover is not None:
        name, fileobj = cover
        book.cover_url = assets.store_cover(book.id, name, fileobj)
    store.update(book)
    logger.info("Updated book %s", book.id)
    return book


def book_payload(book: Book) -> dict:
    """Wire form: {id, title} plus coverUrl once a cover exists."""
    payload = {"id": book.id, "title": book.title}
    if book.cover_url:
        payload["coverUrl"] = book.cover_url
    return payload
