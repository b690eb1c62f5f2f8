"""
Books router: catalog create/list/update and audio upload/listing.

None of these endpoints require authentication. Uploads and listings are
keyed by the book id in the URL and work whether or not the book exists in
the catalog; update returns 404 for unknown ids.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from services import catalog_service
from services.asset_service import AssetStore, get_asset_store
from stores import BookStore, get_book_store

router = APIRouter(prefix="/api/books")


# --- Request models ---


class CreateBookBody(BaseModel):
    """Request body for creating a book."""
    title: str


# --- Endpoints ---


@router.post("")
def create_book(body: CreateBookBody, store: BookStore = Depends(get_book_store)):
    """Create a book with a fresh id and no cover."""
    book = catalog_service.create_book(store, body.title)
    return catalog_service.book_payload(book)


@router.get("")
def list_books(store: BookStore = Depends(get_book_store)):
    """All books in creation order."""
    return [catalog_service.book_payload(b) for b in catalog_service.list_books(store)]


@router.post("/{book_id}/upload")
def upload_audios(
    book_id: str,
    files: list[UploadFile] | None = File(None),
    assets: AssetStore = Depends(get_asset_store),
):
    """
    Store uploaded files (multipart field "files") in the book's storage area.
    Each is saved as <stamp>-<name>, so repeated names never overwrite.
    """
    stored = assets.upload(
        book_id,
        ((f.filename or "unnamed", f.file) for f in files or []),
    )
    return {"files": stored}


@router.get("/{book_id}/audios")
def list_audios(book_id: str, assets: AssetStore = Depends(get_asset_store)):
    """Files in the book's storage area; empty list if nothing was uploaded."""
    return assets.list_assets(book_id)


@router.put("/{book_id}")
def update_book(
    book_id: str,
    title: str | None = Form(None),
    cover: UploadFile | None = File(None),
    store: BookStore = Depends(get_book_store),
    assets: AssetStore = Depends(get_asset_store),
):
    """Update title and/or cover image (multipart fields "title", "cover")."""
    book = catalog_service.update_book(
        store,
        assets,
        book_id,
        title=title,
        cover=(cover.filename or "cover", cover.file) if cover is not None else None,
    )
    return catalog_service.book_payload(book)
