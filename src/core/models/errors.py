"""Custom exception classes for the photo deck pipeline."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_BUILD_IN_PROGRESS,
    ERROR_CODE_CAPACITY_EXCEEDED,
    ERROR_CODE_CONVERSION_FAILED,
    ERROR_CODE_DECODE_FAILED,
    ERROR_CODE_INVALID_STATE_TRANSITION,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_VALIDATION_FAILED,
)


class PhotoDeckError(Exception):
    """
    Base exception for all photo deck errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(PhotoDeckError):
    """Raised when input or configuration validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(PhotoDeckError):
    """Raised when a staged image or session is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class CapacityExceededError(PhotoDeckError):
    """Advisory notice: part of an ingested batch was dropped at the capacity bound.

    Ingestion never raises this; it is carried on the ingestion result so the
    admitted files are kept.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CAPACITY_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class BuildInProgressError(PhotoDeckError):
    """Raised when the staged collection is mutated while a build is running."""

    def __init__(
        self,
        *,
        message: str = "A build is in progress",
        error_code: str = ERROR_CODE_BUILD_IN_PROGRESS,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidStateTransitionError(PhotoDeckError):
    """Raised when the build state machine is asked for an illegal transition."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_STATE_TRANSITION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DecodeFailureError(PhotoDeckError):
    """Raised when a staged image cannot be decoded."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DECODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConversionServiceError(PhotoDeckError):
    """Raised when the conversion service rejects the request or is unreachable."""

    status_code: int | None

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONVERSION_FAILED,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
