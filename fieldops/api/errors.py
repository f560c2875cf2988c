"""RFC 7807 Problem Details error response formatting"""

import logging
from typing import Optional, Dict, Any, List, Union
from http import HTTPStatus
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from fieldops.exceptions import FieldOpsError, Forbidden

logger = logging.getLogger(__name__)

ERROR_TYPE_BASE = "https://api.fieldops.app/errors"


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field"""
    field: str
    message: str


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs"""
    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference identifying the specific occurrence")
    reason: Optional[str] = Field(None, description="Access-control deny reason (403 only)")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Validation errors")


# Documents the problem body on every resource route in the OpenAPI schema
PROBLEM_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    400: {"model": ProblemDetail, "description": "Validation error"},
    401: {"model": ProblemDetail, "description": "No valid session"},
    403: {"model": ProblemDetail, "description": "Not permitted"},
    404: {"model": ProblemDetail, "description": "Not found"},
}


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
    reason: Optional[str] = None,
) -> JSONResponse:
    """
    Create an RFC 7807 compliant error response

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type URI (defaults to generic type based on status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message
        reason: Deny reason attached to 403 responses

    Returns:
        JSONResponse with problem details
    """
    # Default error types based on status code
    error_type_map = {
        400: "validation_error",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        429: "rate_limit_exceeded",
        500: "internal_server_error",
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem: Dict[str, Any] = {
        "type": f"{ERROR_TYPE_BASE}/{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail
    }

    if instance:
        problem["instance"] = instance

    if reason:
        problem["reason"] = reason

    if errors:
        problem["errors"] = errors

    return JSONResponse(
        status_code=status_code,
        content=problem
    )


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location
        location = [str(part) for part in error.get("loc", ())][1:]
        errors.append({
            "field": ".".join(location) or "request",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


async def domain_error_handler(request: Request, exc: FieldOpsError) -> JSONResponse:
    reason = None
    if isinstance(exc, Forbidden) and exc.reason:
        reason = getattr(exc.reason, "value", exc.reason)
    return create_error_response(
        status_code=exc.status_code,
        title=exc.title,
        detail=exc.detail,
        error_type=exc.error_type,
        instance=request.url.path,
        reason=reason,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail="Request validation failed",
        instance=request.url.path,
        errors=_validation_errors(exc),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"
    return create_error_response(
        status_code=exc.status_code,
        title=title,
        detail=str(exc.detail) if exc.detail else title,
        instance=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail=str(exc) or "An internal server error occurred",
        instance=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render domain, validation, HTTP and unexpected errors as problem documents"""
    app.add_exception_handler(FieldOpsError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
