import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.api.v1 import categories, products
from catalog.core.config import Settings, settings
from catalog.core.database import engine
from catalog.core.exceptions import CatalogError
from catalog.core.logging import configure_logging
from catalog.core.redis import close_redis
from catalog.middleware.metrics import PrometheusMiddleware, metrics_endpoint
from catalog.middleware.rate_limit import RateLimitMiddleware
from catalog.services.image_service import ImageBinder, UploadConfig

logger = logging.getLogger(__name__)


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0]["loc"])
        message = f"{location}: {errors[0]['msg']}"
    else:
        message = "Invalid request"
    return error_response(400, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal Server Error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    upload_dir = app.state.image_binder.config.upload_dir
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Starting catalog API, uploads in {upload_dir}")

    yield

    logger.info("Shutting down catalog API")
    await close_redis()
    await engine.dispose()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the catalog application from the given (or process) settings."""
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)

    upload_config = UploadConfig.from_settings(app_settings)

    app = FastAPI(
        title="Product Catalog",
        version="1.0.0",
        description="Product catalog with category references and image uploads",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.image_binder = ImageBinder(upload_config)

    # Prometheus Metrics Middleware (must be first to capture all requests)
    app.add_middleware(PrometheusMiddleware)

    if app_settings.RATE_LIMIT_ENABLED:
        app.add_middleware(RateLimitMiddleware, ip_limit=app_settings.RATE_LIMIT_IP)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.add_route("/metrics", metrics_endpoint)

    # Uploaded images are served from the same path their URLs point at
    app.mount(
        f"/{upload_config.url_path}",
        StaticFiles(directory=Path(upload_config.upload_dir), check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
