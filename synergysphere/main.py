from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from synergysphere.config.settings import Settings, settings as default_settings
from synergysphere.constants import ErrorMessages
from synergysphere.database.session import Database
from synergysphere.endpoints.router import api_router
from synergysphere.enums import ErrorCode
from synergysphere.exceptions import raise_api_error, register_exception_handlers
from synergysphere.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    """
    Builds the application. The database pool is opened on startup,
    checked with a live query, and closed on shutdown.
    """
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database.from_settings(settings)
        database.ping()
        database.create_all()
        app.state.database = database
        logger.info("Database connected")
        yield
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan
    )

    register_exception_handlers(app)

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API Router
    app.include_router(api_router)

    @app.get("/")
    def root():
        """
        Root endpoint.
        """
        return {"message": f"{settings.PROJECT_NAME} API is running"}

    @app.get("/health")
    def health(request: Request):
        """
        Liveness check backed by a live SELECT 1.
        """
        try:
            request.app.state.database.ping()
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            raise_api_error(503, ErrorMessages.DATABASE_UNAVAILABLE, ErrorCode.SERVICE_UNAVAILABLE)
        return {"status": "ok", "database": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("synergysphere.main:app", host="0.0.0.0", port=default_settings.PORT, reload=True)
