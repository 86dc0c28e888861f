"""Pydantic models for error responses used in OpenAPI schema generation."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-validation error response."""

    detail: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Refresh token revoked", "Invalid credentials"],
    )
    error_code: str = Field(
        ...,
        description="Machine-readable error code for client-side error handling",
        examples=["TOKEN_REVOKED", "INVALID_CREDENTIALS"],
    )


class ValidationErrorDetail(BaseModel):
    """Model for individual field validation error."""

    field: str = Field(
        ...,
        description="The field path where the validation error occurred",
        examples=["body.email", "body.refresh_token"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message describing what went wrong",
        examples=["value is not a valid email address", "field required"],
    )


class ValidationErrorResponse(BaseModel):
    """Model for the complete 422 validation error response.

    This is the format returned by validation_error_handler
    in app/presentation/exception_handlers.py.
    """

    detail: str = Field(
        ...,
        description="High-level description of the error",
        examples=["Validation failed"],
    )
    error_code: str = Field(
        ...,
        description="Machine-readable error code for client-side error handling",
        examples=["VALIDATION_ERROR"],
    )
    errors: list[ValidationErrorDetail] = Field(
        ...,
        description="List of all validation errors found in the request",
        min_length=1,
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "detail": "Validation failed",
                "error_code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "body.refresh_token",
                        "message": "field required",
                    },
                ],
            }
        }
    }
