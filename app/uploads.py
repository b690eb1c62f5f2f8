"""
Static retrieval of stored files: GET /uploads/<book_id>/<filename>.

Served from the same asset store the upload endpoints write to.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from services.asset_service import AssetStore, get_asset_store

router = APIRouter(prefix="/uploads")


@router.get("/{book_id}/{filename:path}")
def get_upload(book_id: str, filename: str, assets: AssetStore = Depends(get_asset_store)):
    return FileResponse(assets.resolve(book_id, filename))
