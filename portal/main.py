"""FastAPI entry point for the careers portal."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal.config import settings
from portal.db import close as close_db
from portal.db import get_connection
from portal.errors import PortalError
from portal.models.notification import Notification
from portal.routers import admin, auth, public
from portal.services.api_client import api_client
from portal.services.session_service import session_service

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(
        "Starting careers portal on %s:%d (backend %s)",
        settings.host, settings.port, settings.api_base_url,
    )
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    get_connection()
    session_service.load_user_from_storage()

    yield

    # Shutdown
    await api_client.close()
    close_db()
    logger.info("Careers portal stopped")


app = FastAPI(
    title="Careers Portal",
    description="University job board: public listings and the admin panel",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # localhost only; tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"notification": Notification(level="error", message=exc.message).model_dump()},
    )


@app.exception_handler(StarletteHTTPException)
async def unmatched_route_handler(request: Request, exc: StarletteHTTPException):
    """Unknown pages redirect to the section's landing page."""
    if exc.status_code == 404 and request.method == "GET":
        path = request.url.path
        target = "/admin" if path == "/admin" or path.startswith("/admin/") else "/"
        if path != target:
            return RedirectResponse(target, status_code=307)
    return JSONResponse(
        status_code=exc.status_code,
        content={"notification": Notification(level="error", message=str(exc.detail)).model_dump()},
        headers=getattr(exc, "headers", None),
    )


# Register routers
app.include_router(public.router)
app.include_router(auth.router)
app.include_router(admin.router)


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "backend": settings.api_base_url,
        "signed_in": session_service.is_authenticated,
    }


if __name__ == "__main__":
    uvicorn.run(
        "portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
