# server.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from common.logger import LoggerFactory, LogLevel
from infra.configs.app_config import AppSettings, settings
from infra.di.container import configure_container, get_container
from app.api.routers.health_router import router as health_router
from app.api.routers.test_router import router as test_router


def create_app(app_settings: AppSettings = settings) -> FastAPI:
    """Build the FastAPI application and load settings into the DI container."""
    LoggerFactory.configure(
        level=LogLevel.DEBUG if app_settings.debug else LogLevel.from_name(app_settings.log_level),
        log_file=app_settings.log_file,
    )
    logger = LoggerFactory.get_logger(name="server")

    configure_container(get_container(), app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(f"Starting {app_settings.app_name} v{app_settings.app_version}")
        logger.info(f"Data directory: {app_settings.data_dir}")
        yield
        logger.info("Shutting down application...")

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Runs API test collections: variable resolution, live HTTP calls and sandboxed JavaScript assertions",
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(test_router, prefix="/api/v1")

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error": str(exc)},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
    )
