"""
Progress router: per-user playback position per audio file of a book.

Both endpoints require a bearer token. The user id always comes from the
verified token, never from the request, so one user cannot read or write
another's progress. Book ids and audio names are not checked against the
catalog or the storage areas.
"""
import math

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth import get_current_identity
from security import Identity
from stores import ProgressStore, get_progress_store

router = APIRouter(prefix="/api/books")


class SaveProgressBody(BaseModel):
    """Request body for saving progress: {audioName, currentTime (seconds)}."""
    model_config = ConfigDict(populate_by_name=True)

    audio_name: str = Field(..., alias="audioName", min_length=1)
    current_time: float = Field(..., alias="currentTime", ge=0)

    @field_validator("current_time")
    @classmethod
    def current_time_is_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("currentTime must be a finite number")
        return v


@router.post("/{book_id}/progress")
def save_progress(
    book_id: str,
    body: SaveProgressBody,
    identity: Identity = Depends(get_current_identity),
    store: ProgressStore = Depends(get_progress_store),
):
    """Save (overwrite) the position for this user, book and audio file."""
    store.save(identity.id, book_id, body.audio_name, body.current_time)
    return {"ok": True}


@router.get("/{book_id}/progress")
def get_progress(
    book_id: str,
    identity: Identity = Depends(get_current_identity),
    store: ProgressStore = Depends(get_progress_store),
):
    """Map of audioName -> currentTime for this user and book; {} if none."""
    return store.get(identity.id, book_id)
