"""
Bookshelf Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires the book usecase into the handler, registers
       middleware, exception handlers and routes, and returns the app.
Who:   uvicorn (uvicorn bookshelf.main:app) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────┐
    │                   FastAPI App                    │
    │                                                  │
    │  Middleware:  Request ID → Logging → CORS        │
    │                                                  │
    │  Routes:      /books, /books/{id}   (BookHandler)│
    │               /health                            │
    │                                                  │
    │  Exception Handlers:                             │
    │    MalformedInput→400  NotFound→404              │
    │    DownstreamFailure→500                         │
    │  Other exceptions: generic 500 in RequestID      │
    └──────────────────────────────────────────────────┘
                          │
                    BookUsecase (injected)
                          │
              BookService → BookRepository → SQLAlchemy

Lifecycle:
    Startup:  logging, optional table creation
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database import async_session_factory, create_tables, dispose_engine
from bookshelf.exceptions import (
    BookNotFoundError,
    DownstreamFailureError,
    MalformedInputError,
    UndecodableBodyError,
)
from bookshelf.middleware.logging import RequestLoggingMiddleware
from bookshelf.middleware.request_id import RequestIDMiddleware, request_id_var
from bookshelf.routes import health
from bookshelf.routes.books import BookHandler
from bookshelf.services.book_base import BookUsecase
from bookshelf.services.book_repository import BookRepository
from bookshelf.services.book_service import BookService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before anything else logs.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Bookshelf Backend %s starting up...", __version__)

    if settings.db_create_tables:
        await create_tables()
        logger.info("Database schema ready")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Bookshelf Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        UndecodableBodyError    → 400 {"message": ...}
        MalformedInputError     → 400 {"error": ...}
        BookNotFoundError       → 404 {"error": "Book not found"}
        DownstreamFailureError  → 500 {"message": ...}

    Any other exception is answered by RequestIDMiddleware with a generic
    500 so the response keeps its X-Request-ID header.

    Starlette resolves handlers along the exception's MRO, so the more
    specific UndecodableBodyError handler wins over MalformedInputError.
    """

    @app.exception_handler(MalformedInputError)
    async def handle_malformed_input(request: Request, exc: MalformedInputError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed input: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(UndecodableBodyError)
    async def handle_undecodable_body(request: Request, exc: UndecodableBodyError):
        rid = request_id_var.get("")
        logger.warning("[%s] Undecodable body: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(BookNotFoundError)
    async def handle_not_found(request: Request, exc: BookNotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(DownstreamFailureError)
    async def handle_downstream_failure(request: Request, exc: DownstreamFailureError):
        rid = request_id_var.get("")
        logger.error("[%s] Downstream failure: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(usecase: Optional[BookUsecase] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        usecase: Business layer for the book routes. Defaults to a
                 BookService over the configured database.

    Returns:
        Fully configured FastAPI instance.
    """
    if usecase is None:
        usecase = BookService(BookRepository(async_session_factory))

    app = FastAPI(
        title="Bookshelf API",
        description="CRUD service for books.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Middleware ────────────────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(BookHandler(usecase).router)
    app.include_router(health.router)

    return app


app = create_app()
