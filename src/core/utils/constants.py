"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Session / Build State Errors
ERROR_CODE_BUILD_IN_PROGRESS = "BUILD_IN_PROGRESS"
ERROR_CODE_INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
ERROR_CODE_NO_STAGED_IMAGES = "NO_STAGED_IMAGES"

# Processing Errors
ERROR_CODE_DECODE_FAILED = "DECODE_FAILED"
ERROR_CODE_CONVERSION_FAILED = "CONVERSION_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Staging Limits
# ============================================================================

DEFAULT_MAX_FILES = 30
MIN_MAX_FILES = 1
MAX_MAX_FILES = 300

DEFAULT_MAX_DIMENSION = 1920
MIN_MAX_DIMENSION = 640
MAX_MAX_DIMENSION = 4096

DEFAULT_JPEG_QUALITY = 90

IMAGE_MIME_PREFIX = "image/"

# Declared media types that are re-encoded losslessly (as PNG).
LOSSLESS_MIME_MARKERS: Final[tuple[str, ...]] = ("png", "gif", "bmp", "tiff")

LOSSLESS_OUTPUT_MIME = "image/png"
LOSSY_OUTPUT_MIME = "image/jpeg"

PREVIEW_URL_PREFIX = "blob:photodeck/"


# ============================================================================
# Deck Options
# ============================================================================

ALLOWED_RATIOS: Final[tuple[str, ...]] = ("16:9", "4:3")
ALLOWED_LAYOUTS: Final[tuple[str, ...]] = ("cover", "fit")

DEFAULT_RATIO = "16:9"
DEFAULT_LAYOUT = "cover"
DEFAULT_TITLE_TEXT = "Photo Slides"


# ============================================================================
# Conversion Service
# ============================================================================

DEFAULT_CONVERSION_URL = "http://localhost:3000"
DEFAULT_CONVERSION_PATH = "/api/pptx"
DEFAULT_REQUEST_TIMEOUT = 120.0

ARCHIVE_CONTENT_MARKER = "zip"
ARCHIVE_FILENAME = "photos.zip"
DECK_FILENAME = "photos.pptx"
DEFAULT_ARTIFACT_CONTENT_TYPE = "application/octet-stream"

GENERIC_FAILURE_MESSAGE = "An error occurred"


# ============================================================================
# Session Actions
# ============================================================================

DEFAULT_CONTENT_TYPE = "application/json"
SESSION_ID_PATTERN = r"^[a-zA-Z0-9_-]+$"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_CONVERSION_URL = "PHOTODECK_CONVERSION_URL"
ENV_CONVERSION_PATH = "PHOTODECK_CONVERSION_PATH"
ENV_REQUEST_TIMEOUT = "PHOTODECK_REQUEST_TIMEOUT"
ENV_MAX_FILES = "PHOTODECK_MAX_FILES"
ENV_MAX_DIMENSION = "PHOTODECK_MAX_DIMENSION"
ENV_JPEG_QUALITY = "PHOTODECK_JPEG_QUALITY"

# ============================================================================
# Helper Functions
# ============================================================================


def capacity_notice(max_files: int) -> str:
    """Advisory text shown when a batch is truncated at the capacity bound."""
    return f"The limit is {max_files} images. Increase the limit to add more."


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Bytes are shown without decimals, larger units with one.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)
    units = ("B", "KB", "MB", "GB")
    index = 0

    while size >= 1024.0 and index < len(units) - 1:
        size /= 1024.0
        index += 1

    if index == 0:
        return f"{size:.0f} {units[index]}"
    return f"{size:.1f} {units[index]}"
