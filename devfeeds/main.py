"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from devfeeds.api import api_keys, auth, feeds, posts, public, upload, username
from devfeeds.config import get_settings
from devfeeds.errors import DomainError, StoreUnavailableError

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger.info(f"Starting Dev Feeds ({settings.environment})")
    yield


app = FastAPI(
    title="Dev Feeds API",
    description="Feed hosting with RSS and JSON Feed syndication",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Render domain errors as ``{"detail", "kind", ...context}``."""
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Tag request-shape errors with the validation kind."""
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": exc.errors(), "kind": "validation_error"}),
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Report database failures as an upstream outage without retrying."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    error = StoreUnavailableError("Storage is unavailable")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Register routers
app.include_router(auth.router)
app.include_router(api_keys.router)
app.include_router(username.router)
app.include_router(feeds.router)
app.include_router(posts.router)
app.include_router(upload.router)
app.include_router(public.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
