"""
WiFi Portal API - FastAPI application
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from wifi_portal.api.api import ENDPOINTS, api_router
from wifi_portal.core.config import settings
from wifi_portal.core.database import close_db, init_db, mongodb
from wifi_portal.core.exceptions import InternalError, PortalError
from wifi_portal.core.logging_config import configure_logging
from wifi_portal.services.visitor_store import MemoryVisitorStore, MongoVisitorStore, StoreProvider

configure_logging()
logger = structlog.get_logger(__name__)


def build_store_provider() -> StoreProvider:
    """Memory fallback always; MongoDB too when a client was created"""
    durable = MongoVisitorStore(mongodb.collection()) if mongodb.client is not None else None
    return StoreProvider(
        fallback=MemoryVisitorStore(),
        durable=durable,
        is_available=lambda: mongodb.available,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting WiFi Portal API", version=settings.APP_VERSION, environment=settings.ENVIRONMENT)
    await init_db()
    app.state.store_provider = build_store_provider()
    logger.info("Storage ready", storage=app.state.store_provider.active().name)

    yield

    # Shutdown
    close_db()
    logger.info("Shutting down WiFi Portal API")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Captive portal backend: visitor registration, outreach tracking and exports",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root(request: Request):
    """Root endpoint"""
    provider = request.app.state.store_provider
    return {
        "message": "WiFi Portal API",
        "version": settings.APP_VERSION,
        "status": "running",
        "storage": provider.active().name,
        "endpoints": ENDPOINTS,
    }


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, **extra})


def _internal_error_response(exc: Exception) -> JSONResponse:
    error = InternalError(detail=str(exc))
    if settings.is_development:
        return error_response(error.status_code, error.message, detail=str(exc))
    return error_response(error.status_code, error.message)


@app.exception_handler(PortalError)
async def portal_exception_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, err=exc.message, **exc.details)
        if not settings.is_development:
            return error_response(exc.status_code, exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, status_code=exc.status_code, err=exc.message)
    return error_response(exc.status_code, exc.message, **exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header"))
    message = f"Campo inválido: {field}" if field else "Solicitud inválida"
    logger.info("Request validation failed", path=request.url.path, field=field)
    return error_response(400, message, field=field, detail=first.get("msg"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    if exc.status_code == 404:
        return error_response(
            404,
            "Endpoint no encontrado",
            path=request.url.path,
            availableEndpoints=ENDPOINTS,
        )
    logger.error("HTTP Exception", status_code=exc.status_code, detail=exc.detail)
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(PyMongoError)
async def database_exception_handler(request: Request, exc: PyMongoError):
    logger.error("Database operation failed", path=request.url.path, err=str(exc))
    return _internal_error_response(exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error("Unhandled exception", path=request.url.path, err=str(exc), exc_info=True)
    return _internal_error_response(exc)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "wifi_portal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
