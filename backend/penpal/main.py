"""
Celebrity Penpal - FastAPI Application

Main entry point for the Celebrity Penpal backend.

Flow for a letter:
- POST /api/letters → VisibilityPolicy → LetterSubmissionService
- LetterSubmissionService → HandwryttenClient (when configured) → letter status
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .database import Database
from .errors import InternalError, PenpalError
from .logging_config import setup_logging
from .routers import auth_router, celebrities_router, letters_router, penpals_router, forum_router
from .services.fulfillment import HandwryttenClient
from .services.seed import seed_celebrities

logger = logging.getLogger(__name__)


def build_fulfillment_client(settings: Settings) -> Optional[HandwryttenClient]:
    """A client only when both key and secret are set; otherwise letters stay pending."""
    if not settings.fulfillment_configured:
        return None
    return HandwryttenClient(
        api_key=settings.handwrytten_api_key,
        api_secret=settings.handwrytten_api_secret,
        base_url=settings.handwrytten_api_url,
        timeout=settings.handwrytten_timeout,
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def penpal_error_handler(request: Request, exc: PenpalError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=400, content={"error": detail})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return await penpal_error_handler(request, InternalError("Database error"))


# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    fulfillment_client: Optional[HandwryttenClient] = None,
) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    # A caller-supplied handle is left open; the caller disposes it.
    owns_database = database is None
    database = database or Database(settings.database_url)
    if fulfillment_client is None:
        fulfillment_client = build_fulfillment_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database on startup."""
        logger.info(f"Data directory: {settings.data_dir}")
        database.init_db()
        if settings.seed_on_startup:
            db = database.session()
            try:
                seed_celebrities(db)
            finally:
                db.close()
        logger.info(
            f"Handwrytten sending {'enabled' if app.state.fulfillment_client else 'disabled'}"
        )
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title="Celebrity Penpal",
        description="""
        Celebrity Penpal - handwritten letters to celebrities, pen pals and family

        ## Areas
        1. **Directory**: public celebrities plus each user's private contacts
        2. **Letters**: orders forwarded to Handwrytten, or queued as pending
        3. **Pen pals**: claim a profile, keep a private address book
        4. **Forum**: topics and replies
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.database = database
    app.state.fulfillment_client = fulfillment_client

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PenpalError, penpal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(celebrities_router, prefix="/api")
    app.include_router(letters_router, prefix="/api")
    app.include_router(penpals_router, prefix="/api")
    app.include_router(forum_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Celebrity Penpal",
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}

    return app


# For running with: python -m penpal.main
if __name__ == "__main__":
    import uvicorn
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
