"""
Error handling service: maps exceptions onto the API's JSON error envelope.

Every error body has the shape ``{"error": {"code", "message", "timestamp",
"request_id", ["details"]}}``. The short request id is also written to the
log line so a client report can be matched with the server log.
"""

from typing import Dict, Any, Optional, List, Mapping
from datetime import datetime, timezone
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from rental_premises.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Turns exceptions into the API's JSON error envelope and logs them.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        ``details`` and ``request_id`` are left out when not given.
        """
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        return ErrorHandlerService._respond(
            status_code=exception.status_code,
            error_code=exception.error_code or "API_ERROR",
            message=exception.detail,
            request=request,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception: Any, request: Optional[Request] = None) -> JSONResponse:
        """
        Report every failed field of a RequestValidationError.

        Only location, message and type are echoed; the offending input is not.
        """
        details = [
            {
                "field": " -> ".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exception.errors()
        ]
        return ErrorHandlerService._respond(
            status_code=422,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            request=request,
            details=details
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """Hide driver messages; constraint violations become 409."""
        if isinstance(exception, IntegrityError):
            status_code, error_code, message = 409, "INTEGRITY_ERROR", "Data integrity constraint violation"
        else:
            status_code, error_code, message = 500, "DATABASE_ERROR", "Database operation failed"

        return ErrorHandlerService._respond(
            status_code=status_code,
            error_code=error_code,
            message=message,
            request=request,
            level=logging.ERROR,
            log_detail=f"{type(exception).__name__}: {exception}",
            exc_info=exception
        )

    @staticmethod
    def handle_http_exception(exception: HTTPException, request: Optional[Request] = None) -> JSONResponse:
        return ErrorHandlerService._respond(
            status_code=exception.status_code,
            error_code=f"HTTP_{exception.status_code}",
            message=str(exception.detail),
            request=request,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        return ErrorHandlerService._respond(
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred. Please try again later.",
            request=request,
            level=logging.ERROR,
            log_detail=f"{type(exception).__name__}: {exception}",
            exc_info=exception
        )

    @staticmethod
    def _respond(
        status_code: int,
        error_code: str,
        message: str,
        request: Optional[Request] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Mapping[str, str]] = None,
        level: int = logging.WARNING,
        log_detail: Optional[str] = None,
        exc_info: Optional[BaseException] = None
    ) -> JSONResponse:
        request_id = str(uuid.uuid4())[:8]
        path = request.url.path if request else None

        logger.log(
            level,
            f"[{request_id}] {status_code} {error_code} on {path}: {log_detail or message}",
            exc_info=exc_info
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(error_code, message, details, request_id),
            headers=dict(headers) if headers else None
        )
