import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from sqlalchemy.orm import sessionmaker

from jobly.core.config import Settings, settings as default_settings
from jobly.core.database import build_engine, build_session_factory
from jobly.core.errors import register_exception_handlers
from jobly.core.logging_config import setup_logging
from jobly.core.security import TokenVerifier
from jobly.api.endpoints import companies, health, jobs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    # Startup
    logger.info(f"Starting up {settings.PROJECT_NAME}...")

    engine = None
    if app.state.session_factory is None:
        logger.info("Connecting to database...")
        engine = build_engine(settings.DATABASE_URL)
        app.state.session_factory = build_session_factory(engine)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    if engine is not None:
        engine.dispose()
        app.state.session_factory = None


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    token_verifier: Optional[TokenVerifier] = None,
) -> FastAPI:
    """
    Build the application with its dependencies attached to app.state.

    Anything not injected is built from settings: the token verifier right
    away, the database session factory at startup.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Companies and jobs API",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.token_verifier = token_verifier or TokenVerifier(settings.SECRET_KEY, settings.ALGORITHM)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(companies.router, prefix=settings.API_PREFIX)
    app.include_router(jobs.router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """Root endpoint - API health check"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "status": "healthy"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
