# src/inkpress/main.py
"""Main entry point for the Inkpress application."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from inkpress.api.v1 import (
    admin_categories_router,
    admin_posts_router,
    admin_settings_router,
    admin_tags_router,
    auth_router,
    blog_router,
    uploads_router,
    users_router,
)
from inkpress.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Inkpress API",
    description="Blog publishing and content management API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(blog_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(admin_posts_router, prefix="/api/v1")
app.include_router(admin_tags_router, prefix="/api/v1")
app.include_router(admin_categories_router, prefix="/api/v1")
app.include_router(admin_settings_router, prefix="/api/v1")
app.include_router(uploads_router, prefix="/api/v1")

# Uploaded media is public
media_root = Path(settings.media_root)
media_root.mkdir(parents=True, exist_ok=True)
app.mount(settings.media_url, StaticFiles(directory=str(media_root)), name="media")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("%s %s starting (debug=%s)", settings.app_name, settings.app_version, settings.debug)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Inkpress API",
        "version": settings.app_version,
        "description": "Blog publishing and content management API",
        "docs": "/docs",
        "redoc": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkpress.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
