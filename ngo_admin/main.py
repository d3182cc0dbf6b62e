"""
Main FastAPI application for the NGO admin service
"""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from ngo_admin import __version__
from ngo_admin.core.config import settings, validate_settings
from ngo_admin.core.error_handlers import register_error_handlers
from ngo_admin.core.logging_config import setup_logging
from ngo_admin.db.database import create_tables
from ngo_admin.api.routes import api_router
from ngo_admin.middleware.request_logging import RequestLoggingMiddleware

setup_logging(log_level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, file_logging=settings.LOG_TO_FILE)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting NGO Admin API...")
    try:
        validate_settings()
        if settings.CREATE_TABLES_ON_STARTUP:
            await create_tables()
        logger.info("NGO Admin API started successfully!")
    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise

    yield

    logger.info("Shutting down NGO Admin API...")


app = FastAPI(
    title="NGO Admin API",
    description="Content management API for the NGO admin dashboard",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Uploaded images are served from the local uploads directory
upload_dir = Path(settings.UPLOAD_DIR)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {"message": "NGO Admin API", "version": __version__, "docs": "/api/docs"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ngo_admin.main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "development")
