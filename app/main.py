"""
Audiobook library backend: accounts, books, audio uploads, playback progress.

Configure logging, create tables (in-memory by default), add CORS, the
service-error and global exception handlers, and mount the routers.
"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import FRONTEND_URL, HOST, LOG_LEVEL, PORT
from database import Base, engine
from errors import ServiceError
from auth import router as auth_router
from books import router as books_router
from progress import router as progress_router
from uploads import router as uploads_router

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# All state is in memory unless DATABASE_URL points elsewhere; tables are created on start
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Audiobook Backend",
    description="Accounts, book catalog, audio uploads per book, per-user playback progress.",
)

# Bearer tokens travel in a header, so no credentials (cookies) are needed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if FRONTEND_URL == "*" else [FRONTEND_URL],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render domain errors as {"detail", "code"} with the error's status."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.msg, "code": exc.code},
        headers=headers,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions; log and return generic 500. Never leak stack traces."""
    # Let FastAPI handle HTTPException (validation, routing, etc.)
    if isinstance(exc, HTTPException):
        raise exc
    logging.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(books_router)
app.include_router(progress_router)
app.include_router(uploads_router)


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
