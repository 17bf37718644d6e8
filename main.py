import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtracker.core.config import Settings, settings
from jobtracker.core.database import create_db_engine, create_session_factory, init_db
from jobtracker.core.logging_config import setup_logging
from jobtracker.core.security import TokenService
from jobtracker.api.handlers import register_exception_handlers
from jobtracker.api.endpoints import auth, health, jobs, users

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine (connection pool) and token service are created once
    in the lifespan and stored on app.state; request handlers reach them
    through the get_db and get_token_service dependencies.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL, json_logs=app_settings.JSON_LOGS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown events.
        """
        # Startup
        logger.info("Starting up Job Tracker API...")
        engine = create_db_engine(app_settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.token_service = TokenService(
            app_settings.SECRET,
            algorithm=app_settings.ALGORITHM,
            lifetime=timedelta(minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        if not app_settings.SECRET:
            logger.warning("SECRET is not set: logins will fail until a signing secret is configured")

        init_db(engine, create_tables=app_settings.AUTO_CREATE_TABLES)
        logger.info("Database initialized successfully")

        yield

        # Shutdown
        logger.info("Shutting down Job Tracker API...")
        engine.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version="1.0.0",
        description="Track job postings per user behind token authentication",
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.BACKEND_CORS_ORIGINS,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router, prefix=app_settings.API_PREFIX)
    app.include_router(users.router, prefix=app_settings.API_PREFIX)
    app.include_router(jobs.router, prefix=app_settings.API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
