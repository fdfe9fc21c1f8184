"""
Centralized response builder for session action handlers.
"""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import DEFAULT_CONTENT_TYPE, ERROR_CODE_VALIDATION_FAILED
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {}

        if body:
            payload.update(body)

        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": dict(ResponseBuilder.DEFAULT_HEADERS),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(body: JsonDict, *, request_id: str | None = None) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            request_id=request_id,
        )

    @staticmethod
    def no_content() -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": dict(ResponseBuilder.DEFAULT_HEADERS),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
        )

    @staticmethod
    def bad_request(
        message: str,
        *,
        details: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            details=details,
            request_id=request_id,
        )

    @staticmethod
    def validation_error(
        *,
        message: str,
        error: str = ERROR_CODE_VALIDATION_FAILED,
        details: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        """422 Unprocessable Entity validation error."""
        return ResponseBuilder.error(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            error=error,
            message=message,
            details=details,
            request_id=request_id,
        )

    @staticmethod
    def not_found(
        message: str = "Resource not found",
        *,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.NOT_FOUND,
            message=message,
            request_id=request_id,
        )

    @staticmethod
    def conflict(
        message: str,
        *,
        error: str | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        """409 Conflict, used while a build holds the session."""
        return ResponseBuilder.error(
            status=HTTPStatus.CONFLICT,
            error=error,
            message=message,
            request_id=request_id,
        )

    @staticmethod
    def bad_gateway(
        message: str,
        *,
        error: str | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        """502 Bad Gateway, used when the conversion service fails."""
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_GATEWAY,
            error=error,
            message=message,
            request_id=request_id,
        )

    @staticmethod
    def internal_error(
        message: str = "Internal server error",
        *,
        request_id: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
            request_id=request_id,
        )

    @staticmethod
    def binary_response(
        content: bytes,
        *,
        content_type: str,
        filename: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> JsonDict:
        response_headers: dict[str, str] = {
            "Content-Type": content_type,
            "Content-Length": str(len(content)),
        }

        if filename:
            response_headers["Content-Disposition"] = f'attachment; filename="{filename}"'

        if headers:
            response_headers.update(headers)

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": response_headers,
            "body": base64.b64encode(content).decode("utf-8"),
            "isBase64Encoded": True,
        }
