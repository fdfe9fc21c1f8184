"""
Common decorators and helpers for session action handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import (
    BuildInProgressError,
    ConversionServiceError,
    DecodeFailureError,
    InvalidStateTransitionError,
    NotFoundError,
    PhotoDeckError,
    ValidationError,
)
from core.utils.response import JsonDict, ResponseBuilder
from core.utils.validators import sanitize_validation_errors

logger = Logger(service="session-action-handler", UTC=True)


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Preserves specific validation messages while making generic errors friendly.
    """
    exc_str = str(exc)

    # Messages that already read well are kept as they are
    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Required",
        "Must",
        "Cannot",
        "Unable to",
        "Image",
        "File",
    )

    if exc_str and any(exc_str.startswith(prefix) for prefix in friendly_prefixes):
        return exc_str

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    return "We encountered an issue processing your request. Please try again."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: Request ID from the invocation context
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        # logger.exception automatically includes traceback
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def _domain_error_response(exc: PhotoDeckError, request_id: str | None) -> JsonDict:
    if isinstance(exc, (ValidationError, DecodeFailureError)):
        return ResponseBuilder.validation_error(
            message=exc.message,
            error=exc.error_code,
            details=exc.details or None,
            request_id=request_id,
        )

    if isinstance(exc, NotFoundError):
        return ResponseBuilder.not_found(exc.message, request_id=request_id)

    if isinstance(exc, (BuildInProgressError, InvalidStateTransitionError)):
        return ResponseBuilder.conflict(
            exc.message, error=exc.error_code, request_id=request_id
        )

    if isinstance(exc, ConversionServiceError):
        return ResponseBuilder.bad_gateway(
            exc.message, error=exc.error_code, request_id=request_id
        )

    return ResponseBuilder.error(
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        error=exc.error_code,
        message=exc.message,
        request_id=request_id,
    )


def session_action_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for session action handlers.

    Provides:
    - Centralized exception handling and error responses
    - Request ID tracking and structured logging
    - User-friendly error messages
    - Full traceback logging for monitoring

    Example:
        @session_action_handler
        def handler(event, context):
            return {"statusCode": 200, "body": "Success"}
    """

    @wraps(func)
    def wrapper(event: Any, context: Any) -> JsonDict:
        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        # Request payload failed model validation (422)
        except PydanticValidationError as exc:
            _log_error(
                "Request validation failed",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.validation_error(
                message="Invalid request payload",
                details={"errors": sanitize_validation_errors(exc.errors())},
                request_id=request_id,
            )

        # Domain errors carry their own code and message
        except PhotoDeckError as exc:
            _log_error(
                "Session action rejected",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return _domain_error_response(exc, request_id)

        # Client errors (4xx) - Bad Request
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                _get_user_friendly_message(exc),
                request_id=request_id,
            )

        # Catch-all for unexpected errors
        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                "We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
            )

    return wrapper
