"""
Asset service: per-book storage areas on disk, upload, listing, lookup.

Layout: <root>/<area>/<stamp>-<name> for audio and
<root>/<area>/covers/<stamp>-<name> for covers, <area> being the
percent-encoded book id (see area_segment). Areas are keyed by the
book id string only; the Catalog is never consulted. Directories are created
on demand and never deleted.
"""
import hashlib
import logging
import os
import re
import threading
import time
from pathlib import Path
from typing import BinaryIO, Iterable
from urllib.parse import quote

from config import UPLOADS_DIR
from errors import AssetNotFound

logger = logging.getLogger(__name__)

COVERS_DIR = "covers"
URL_PREFIX = "/uploads"
CHUNK_SIZE = 8192
MAX_SEGMENT = 200


def safe_filename(name: str) -> str:
    """Remove path separators and reserved chars so name is safe for filesystem."""
    safe = re.sub(r'[\\/:*?"<>|\s]+', "_", name)
    if len(safe) > 200:
        safe = safe[:200]
    # "." and ".." are valid names but would walk out of the area
    if set(safe) == {"."}:
        safe = "_" * len(safe)
    return safe or "unnamed"


def area_segment(book_id: str) -> str:
    """
    Directory name for a book id. Percent-encoding is one-to-one, so distinct
    ids never share an area. "%L<sha256>" (for ids too long for a file name)
    and "%" (for the empty id) can never be produced by quote().
    """
    if not book_id:
        return "%"
    segment = quote(book_id, safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    if len(segment) > MAX_SEGMENT:
        segment = "%L" + hashlib.sha256(book_id.encode("utf-8")).hexdigest()
    return segment


_stamp_lock = threading.Lock()
_last_stamp = 0


def next_stamp() -> int:
    """Millisecond timestamp, strictly increasing across the process."""
    global _last_stamp
    with _stamp_lock:
        _last_stamp = max(int(time.time() * 1000), _last_stamp + 1)
        return _last_stamp


class AssetStore:
    """Storage areas under root, one directory per book id."""

    def __init__(self, root: str | os.PathLike = UPLOADS_DIR):
        self.root = Path(root)

    def area_path(self, book_id: str, *parts: str) -> Path:
        return self.root.joinpath(area_segment(book_id), *parts)

    def ensure_area(self, book_id: str, *parts: str) -> Path:
        """Create the area (idempotent) and return its path."""
        path = self.area_path(book_id, *parts)
        os.makedirs(path, exist_ok=True)
        return path

    def url_for(self, book_id: str, *parts: str) -> str:
        segments = [book_id, *parts]
        return URL_PREFIX + "/" + "/".join(quote(s, safe="") for s in segments)

    def _write(self, directory: Path, original_name: str, fileobj: BinaryIO) -> str:
        """Stream fileobj into directory under a stamped name; returns the stored name."""
        stored = f"{next_stamp()}-{safe_filename(original_name)}"
        dest_path = directory / stored
        try:
            with open(dest_path, "wb") as f:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
        except OSError:
            if dest_path.exists():
                dest_path.unlink()
            raise
        return stored

    def upload(self, book_id: str, files: Iterable[tuple[str, BinaryIO]]) -> list[dict]:
        """
        Store each (original_name, fileobj) in the book's area. Returns
        [{name, url}] with name = original file name, in input order.
        """
        result: list[dict] = []
        for original_name, fileobj in files:
            directory = self.ensure_area(book_id)
            stored = self._write(directory, original_name, fileobj)
            result.append({"name": original_name, "url": self.url_for(book_id, stored)})
        logger.info("Stored %d file(s) for book %s", len(result), book_id)
        return result

    def store_cover(self, book_id: str, original_name: str, fileobj: BinaryIO) -> str:
        """Store a cover image in the book's covers sub-area; returns its URL."""
        directory = self.ensure_area(book_id, COVERS_DIR)
        stored = self._write(directory, original_name, fileobj)
        return self.url_for(book_id, COVERS_DIR, stored)

    def list_assets(self, book_id: str) -> list[dict]:
        """
        Every file directly in the book's area as {name, url}, name being the
        stored file name. Ordered by name, which is upload order. Empty if the
        area does not exist.
        """
        directory = self.area_path(book_id)
        if not directory.is_dir():
            return []
        names = sorted(p.name for p in directory.iterdir() if p.is_file())
        return [{"name": name, "url": self.url_for(book_id, name)} for name in names]

    def resolve(self, book_id: str, filename: str) -> Path:
        """Path of a stored file for static retrieval; AssetNotFound if missing or outside root."""
        root = self.root.resolve()
        path = (self.area_path(book_id) / filename).resolve()
        if not path.is_relative_to(root) or not path.is_file():
            raise AssetNotFound()
        return path


def get_asset_store() -> AssetStore:
    """FastAPI dependency: store rooted at config.UPLOADS_DIR."""
    return AssetStore(UPLOADS_DIR)
