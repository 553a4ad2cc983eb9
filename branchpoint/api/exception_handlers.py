"""Exception handlers for FastAPI application"""
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.exceptions import BranchPointError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "path": str(request.url.path),
        },
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle validation errors, including rejected state transitions"""
    return _error_response(request, status.HTTP_400_BAD_REQUEST, exc.to_dict())


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handle missing or foreign-owned records"""
    return _error_response(request, status.HTTP_404_NOT_FOUND, exc.to_dict())


async def branchpoint_error_handler(request: Request, exc: BranchPointError) -> JSONResponse:
    """Handle any other engine error that reached the HTTP layer"""
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc.message}")
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors as bad requests"""
    error_code = ErrorCodeDictionary.SYSTEM_002
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        {
            **error_code.to_dict(),
            "entity_id": None,
            "context": {
                "details": [
                    {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                    for error in exc.errors()
                ],
            },
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500"""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    error_code = ErrorCodeDictionary.SYSTEM_001
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            **error_code.to_dict(),
            "entity_id": None,
            "context": {},
        },
    )
