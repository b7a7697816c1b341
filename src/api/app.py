import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    message = (
        "Service temporarily unavailable"
        if exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        else "Internal server error"
    )
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


def create_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from sqlmodel import SQLModel

        from src.app.services.cleanup_sweeper import ExpiredSessionSweeper
        from src.depends import engine, unit_of_work_scope
        import src.domain.entities  # noqa: F401  registers tables on the metadata

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        sweeper_task = None
        if ApplicationConfig.CLEANUP_ENABLED:
            sweeper = ExpiredSessionSweeper(
                unit_of_work_scope,
                interval_seconds=ApplicationConfig.CLEANUP_INTERVAL_SECONDS,
                initial_delay_seconds=ApplicationConfig.CLEANUP_INITIAL_DELAY_SECONDS,
            )
            sweeper_task = asyncio.create_task(sweeper.run())
            logger.info("Expired session sweeper ENABLED")
        else:
            logger.info("Expired session sweeper DISABLED via config")

        yield

        if sweeper_task and not sweeper_task.done():
            sweeper_task.cancel()
            try:
                await sweeper_task
            except asyncio.CancelledError:
                logger.info("Expired session sweeper cancelled")

    return lifespan


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(
        title="Session Lifecycle API",
        version="0.1.0",
        lifespan=create_lifespan(ApplicationConfig),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(sessions.router, prefix=ApplicationConfig.API_PREFIX, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
