"""Main FastAPI application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from branchpoint import __version__
from branchpoint.ai.client import build_text_generator
from branchpoint.api.exception_handlers import (
    branchpoint_error_handler,
    not_found_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from branchpoint.api.routes import decisions_router, generation_router, simulations_router
from branchpoint.core.config import settings
from branchpoint.core.database import create_all, create_engine
from branchpoint.exceptions import BranchPointError, NotFoundError, ValidationError
from branchpoint.storage.base import DocumentStore
from branchpoint.storage.memory import InMemoryDocumentStore
from branchpoint.storage.sql import SqlDocumentStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def build_store() -> DocumentStore:
    """Create the document store selected by settings."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory document store")
        return InMemoryDocumentStore()
    if backend == "sql":
        engine = create_engine()
        if not settings.is_production():
            # Production schemas are managed by Alembic
            await create_all(engine)
        return SqlDocumentStore(engine)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set - AI features will return fallback content")
    app.state.store = await build_store()
    app.state.text_generator = build_text_generator()

    yield

    # Shutdown
    await app.state.store.close()


app = FastAPI(
    title="BranchPoint - Decision Journal API",
    description="Record life decisions, simulate each branch and commit to a choice",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(ValidationError, validation_error_handler)
app.add_exception_handler(NotFoundError, not_found_error_handler)
app.add_exception_handler(BranchPointError, branchpoint_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(decisions_router)
app.include_router(simulations_router)
app.include_router(generation_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "BranchPoint",
        "version": __version__,
        "description": "Decision Journal API",
        "status": "operational",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "BranchPoint API is running",
    }
