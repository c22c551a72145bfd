import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from pokedex.api import detail, pokemon
from pokedex.db.connection import create_engine, create_session_factory, create_tables
from pokedex.schemas.error import ErrorType, ValidationErrorDetail
from pokedex.services.catalog_gateway import build_http_client
from pokedex.services.dependencies import build_container
from pokedex.services.errors import (
    CatalogGatewayError,
    CatalogTimeoutError,
    DetailNotReadyError,
    FavoriteTargetNotFound,
    ShareInProgressError,
)
from pokedex.settings import get_settings
from pokedex.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from pokedex.utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def validate_environment() -> None:
    """Log warnings for configuration values that degrade behaviour."""

    warnings = settings.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared gateway, favorite store, and presenters."""

    validate_environment()

    logger.info("=" * 60)
    logger.info("Pokedex API - Startup")
    logger.info("=" * 60)
    logger.info(f"Catalog API: {settings.normalized_base_url}")
    logger.info(f"Catalog limit: {settings.catalog_limit}")
    logger.info(f"Favorites store: {settings.favorites_database_url}")

    engine = create_engine(settings.favorites_database_url)
    await create_tables(engine)
    client = build_http_client(timeout_seconds=settings.http_timeout_seconds)
    container = build_container(
        settings,
        client=client,
        session_factory=create_session_factory(engine),
    )
    app.state.container = container

    yield

    logger.info("Shutting down Pokedex API")
    await container.detail_presenter.aclose()
    await client.aclose()
    await engine.dispose()


app = FastAPI(
    title="Pokedex API",
    version="0.1.0",
    description="View-state API for a searchable Pokédex backed by PokeAPI.",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_DEFAULT_ORIGINS + settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _error_json(
    request: Request,
    *,
    error_type: ErrorType,
    message: str,
    detail: str | None,
    status_code: int,
) -> JSONResponse:
    error_response = build_error_response(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        path=str(request.url.path),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


def _validation_details(errors: list[dict]) -> list[ValidationErrorDetail]:
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in errors
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = _validation_details(list(exc.errors()))

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised while building responses."""
    errors = _validation_details(list(exc.errors()))

    logger.warning(
        "Pydantic validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Data validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(CatalogGatewayError)
async def catalog_gateway_exception_handler(request: Request, exc: CatalogGatewayError):
    """Handle failed, malformed, or timed out catalog fetches."""
    logger.error(
        "Catalog gateway error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )
    if isinstance(exc, CatalogTimeoutError):
        return _error_json(
            request,
            error_type=ErrorType.TIMEOUT_ERROR,
            message="Catalog service timed out",
            detail=str(exc),
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        )
    return _error_json(
        request,
        error_type=ErrorType.NETWORK_ERROR,
        message="Catalog service unavailable",
        detail=str(exc),
        status_code=status.HTTP_502_BAD_GATEWAY,
    )


@app.exception_handler(FavoriteTargetNotFound)
async def favorite_not_found_exception_handler(
    request: Request, exc: FavoriteTargetNotFound
):
    """Handle favorite toggles aimed at identities outside the catalog."""
    logger.info("Favorite target %s not found", exc.identity)
    return _error_json(
        request,
        error_type=ErrorType.NOT_FOUND,
        message="Catalog entry not found",
        detail=str(exc),
        status_code=status.HTTP_404_NOT_FOUND,
    )


@app.exception_handler(ShareInProgressError)
@app.exception_handler(DetailNotReadyError)
async def detail_conflict_exception_handler(request: Request, exc: Exception):
    """Handle detail actions that conflict with the current view state."""
    logger.info("Detail action rejected for %s: %s", request.url.path, exc)
    return _error_json(
        request,
        error_type=ErrorType.CONFLICT,
        message="Detail view is not ready for this action",
        detail=str(exc),
        status_code=status.HTTP_409_CONFLICT,
    )


@app.exception_handler(OperationalError)
async def database_exception_handler(request: Request, exc: OperationalError):
    """Handle failures of the local favorite store."""
    logger.error(
        "Favorite store error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )
    return _error_json(
        request,
        error_type=ErrorType.DATABASE_ERROR,
        message="Favorite store unavailable",
        detail="Unable to read or write favorites. Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s",
        get_request_id(),
        request.url.path,
    )
    return _error_json(
        request,
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail="An unexpected error occurred. Please try again later.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


app.include_router(pokemon.router, prefix="/pokemon", tags=["pokemon"])
app.include_router(detail.router, prefix="/detail", tags=["detail"])


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
