"""
API server application
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storelink import __version__
from storelink.config import Settings, settings
from storelink.monitoring import get_logger, global_metrics, setup_logging
from storelink.scheduler.main import MainScheduler
from storelink.storage import MemoryStore, seed_demo_data

from .dependencies import get_app_settings
from .middleware import TimingMiddleware
from .routers import admin, mobile, my, public, token

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    app_settings = app.dependency_overrides.get(get_app_settings, get_app_settings)()

    setup_logging(
        log_level=app_settings.log_level,
        log_file=app_settings.log_file,
        json_logs=app_settings.is_production(),
    )
    logger.info("API server starting")

    if getattr(app.state, "store", None) is None:
        app.state.store = MemoryStore()
        if app_settings.seed_demo_data:
            await seed_demo_data(app.state.store)
            logger.info("Demo data loaded")

    scheduler = None
    if app_settings.scheduler_enabled:
        scheduler = MainScheduler(app.state.store, app_settings)
        scheduler.start()
    app.state.scheduler = scheduler

    yield

    logger.info("API server stopping")

    if scheduler:
        await scheduler.close()
        app.state.scheduler = None

    publisher = getattr(app.state, "ricardo_publisher", None)
    if publisher is not None:
        await publisher.close()
        app.state.ricardo_publisher = None


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Error body: {"error": message}, structured details passed through"""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    global_metrics.increment("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Validation Error", "details": jsonable_encoder(exc.errors())},
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Unhandled exceptions"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title="storelink API",
        description="Store REST extensions for back office, customers, mobile apps and integrations",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(TimingMiddleware)

    app.include_router(admin.router, prefix="/api/admin")
    app.include_router(my.router, prefix="/api/my")
    app.include_router(mobile.router, prefix="/api/mobile")
    app.include_router(public.router, prefix="/api/extended", tags=["extended"])
    app.include_router(token.router, prefix="/api/token", tags=["token"])

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/")
    async def root(app_settings: Settings = Depends(get_app_settings)):
        """API status"""
        return {
            "name": "storelink API",
            "version": __version__,
            "status": "running",
            "environment": app_settings.env,
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/health")
    async def health_check(request: Request, app_settings: Settings = Depends(get_app_settings)):
        store_ready = getattr(request.app.state, "store", None) is not None
        scheduler = getattr(request.app.state, "scheduler", None)
        metrics = global_metrics.get_summary()

        return {
            "status": "healthy" if store_ready else "degraded",
            "checks": {
                "store": "healthy" if store_ready else "unavailable",
                "scheduler": "healthy" if app_settings.scheduler_enabled else "disabled",
                "ricardo": "configured" if app_settings.ricardo.has_credentials() else "not configured",
            },
            "scheduler": scheduler.get_schedule_summary() if scheduler else None,
            "metrics": metrics,
        }

    return app


app = create_app()


def run():
    """Run the API server"""
    import uvicorn

    logger.info(f"API server listening on http://{settings.host}:{settings.port}")

    uvicorn.run(
        "storelink.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
