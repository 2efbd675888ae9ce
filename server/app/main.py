from __future__ import annotations
"""server/app/main.py
~~~~~~~~~~~~~~~~~~~~~~~~
Point d'entrée FastAPI.
"""
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.domain.errors import ValidationError
from app.infrastructure.persistence.backend.supabase_client import BackendError, NotFoundError
from app.presentation.api.deps import _shared_backend

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    yield
    if _shared_backend.cache_info().currsize:
        _shared_backend().close()


app = FastAPI(title="Campus Incidents", version="0.1.0", lifespan=lifespan)

allow_origins: List[str] = []
if origins := getattr(settings, "CORS_ALLOW_ORIGINS", None):
    allow_origins = [o.strip() for o in origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "not_found"})


@app.exception_handler(BackendError)
async def backend_error_handler(_: Request, exc: BackendError) -> JSONResponse:
    log.warning("Backend failure: %s", exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": "backend_error"})


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError) -> JSONResponse:
    # enregistrement mal formé côté backend (ex: statut inconnu)
    log.warning("Invalid record: %s", exc.message)
    return JSONResponse(status_code=422, content={"detail": exc.message})


app.include_router(api_router, prefix="/api/v1")


def run() -> None:
    """Lance le serveur (`campus-incidents` ou `python -m app.main`)."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()
