"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy.exc import SQLAlchemyError

from app.presentation.api.v1 import auth
from app.presentation.dependencies import dispose_database_engine
from app.presentation.exception_handlers import (
    application_error_handler,
    domain_exception_handler,
    validation_error_handler,
    database_error_handler,
    generic_exception_handler,
)
from app.presentation.error_schemas import ValidationErrorResponse
from app.application.exceptions import ApplicationError
from app.domain.exceptions import DomainException
from app.infrastructure.config.settings import get_settings


_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check signing configuration on startup, release the pool on shutdown."""
    # Same provider the request dependencies resolve, overrides included
    settings_provider = app.dependency_overrides.get(get_settings, get_settings)
    if not settings_provider().signing_configured:
        logger.warning(
            "ACCESS_TOKEN_SECRET and/or REFRESH_TOKEN_SECRET is not set; "
            "every login and refresh will fail until both are configured"
        )
    yield
    await dispose_database_engine()


app = FastAPI(
    title=_settings.app_name,
    description="Login, refresh token rotation and logout for moderators, organizations and users",
    version=_settings.app_version,
    debug=_settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# - ApplicationError handles login and refresh token failures
# - DomainException handles domain faults (e.g. missing signing secret)
# - SQLAlchemyError handles storage faults
app.add_exception_handler(ApplicationError, application_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(DomainException, domain_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(auth.router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "message": _settings.app_name,
        "status": "running",
        "version": _settings.app_version,
        "environment": _settings.environment,
    }


def custom_openapi():
    """
    Customize OpenAPI schema to use our custom validation error format.

    Replaces the default HTTPValidationError schema with ValidationErrorResponse
    to match the actual error format returned by our validation_error_handler.
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
    schemas.pop("HTTPValidationError", None)
    schemas.pop("ValidationError", None)
    schemas["ValidationErrorResponse"] = ValidationErrorResponse.model_json_schema()

    # Update all 422 response references to use our custom schema
    for path_data in openapi_schema.get("paths", {}).values():
        for operation in path_data.values():
            if isinstance(operation, dict) and "422" in operation.get("responses", {}):
                operation["responses"]["422"] = {
                    "description": "Validation Error",
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/ValidationErrorResponse"}
                        }
                    },
                }

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi  # type: ignore[method-assign]
