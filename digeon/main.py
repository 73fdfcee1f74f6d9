"""
Digeon API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401  registers tables on Base.metadata
from .config import get_settings
from .database import Base, engine
from .errors import ServiceError
from .limiter import limiter
from .logging_config import api_logger, db_logger
from .middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from .responses import api_exception_handler
from .routes import (
    auth_router,
    comments_router,
    follows_router,
    health_router,
    likes_router,
    media_router,
    notifications_router,
    posts_router,
    search_router,
    timeline_router,
    users_router,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    # Schema is created directly; there are no migrations
    Base.metadata.create_all(bind=engine)
    db_logger.info("Database schema ready", tables=len(Base.metadata.tables))
    for subdir in ("images", "videos"):
        Path(settings.upload_dir, subdir).mkdir(parents=True, exist_ok=True)
    api_logger.info("Digeon API started", environment=settings.environment)

    yield

    engine.dispose()


app = FastAPI(
    title="Digeon API",
    description="Backend API for the Digeon social network",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Error envelope
app.add_exception_handler(ServiceError, api_exception_handler)
app.add_exception_handler(RequestValidationError, api_exception_handler)
app.add_exception_handler(StarletteHTTPException, api_exception_handler)
app.add_exception_handler(Exception, api_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)

if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,
)

# Routes; follows before users so /api/users/suggested is not read as an id
app.include_router(auth_router)
app.include_router(follows_router)
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(likes_router)
app.include_router(comments_router)
app.include_router(timeline_router)
app.include_router(search_router)
app.include_router(notifications_router)
app.include_router(media_router)
app.include_router(health_router)

app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": "1.0.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("digeon.main:app", host="0.0.0.0", port=8080, reload=settings.debug)
