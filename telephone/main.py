"""FastAPI application entrypoint.

All routes prefixed /v1. Auto-generated OpenAPI docs at /docs.

A DeepLProviderFactory holding one pooled httpx client is created once
during the lifespan and stored on app.state for injection via Depends().
Credentials are never stored: each request carries its own DeepL key.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from telephone.api.v1.chain import router as chain_router
from telephone.api.v1.health import router as health_router
from telephone.api.v1.languages import router as languages_router
from telephone.api.v1.strings import router as strings_router
from telephone.core.config import settings
from telephone.core.exceptions import TelephoneError, ValidationError
from telephone.services.translation.deepl import DeepLProviderFactory


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


_configure_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle.

    Creates the provider factory and attaches it to app.state.
    Retrieved in request handlers via Depends() in telephone/api/deps.py.
    """
    # --- Startup ---
    logger.info("app_startup", env=settings.app_env)
    app.state.provider_factory = DeepLProviderFactory(config=settings)
    logger.info("app_providers_ready")
    yield

    # --- Shutdown ---
    logger.info("app_shutdown")
    await app.state.provider_factory.aclose()


app = FastAPI(
    title="Translation Telephone API",
    description="Routes text through a chain of machine translations and "
    "streams the semantic drift measured at every hop.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TelephoneError)
async def telephone_error_handler(request: Request, exc: TelephoneError) -> JSONResponse:
    """Structured error response for all TelephoneError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies get the same 400 VALIDATION_ERROR shape as every other check."""
    error = ValidationError(_describe_validation_errors(exc))
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        method=request.method,
        errors=len(exc.errors()),
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Mount all v1 routers
app.include_router(health_router, prefix="/v1")
app.include_router(languages_router, prefix="/v1")
app.include_router(chain_router, prefix="/v1")
app.include_router(strings_router, prefix="/v1")
