# team_directory/main.py
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from team_directory.api.api import api_router
from team_directory.api.error_handlers import register_error_handlers
from team_directory.core.config import Settings, settings as default_settings
from team_directory.core.logging import configure_logging, logger
from team_directory.db.session import Database


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    if database.ping():
        logger.info("Database connected")
    if app.state.settings.CREATE_TABLES_ON_STARTUP:
        database.create_all()
    yield
    if app.state.owns_database:
        database.dispose()
        logger.info("Database connections closed")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application around one explicitly constructed Database.
    Pass a database to share it with the caller (tests, scripts).
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=settings.DOCS_URL,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.owns_database = database is None
    app.state.database = database or Database.from_settings(settings)

    # Set up CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Add logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(f"Request: {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.2f}s")
        return response

    register_error_handlers(app)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to the {settings.PROJECT_NAME}"}

    @app.get("/health")
    def health_check(request: Request):
        if request.app.state.database.ping():
            return {"status": "healthy", "database": "connected"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unreachable"},
        )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    logger.info("API router included")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting {default_settings.PROJECT_NAME} in development mode")
    uvicorn.run("team_directory.main:app", host="0.0.0.0", port=default_settings.PORT, reload=True)
