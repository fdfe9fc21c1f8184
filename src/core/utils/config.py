"""Runtime configuration loaded from environment variables."""

import os
from collections.abc import Mapping

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ValidationError
from core.utils.constants import (
    DEFAULT_CONVERSION_PATH,
    DEFAULT_CONVERSION_URL,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_MAX_FILES,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_CONVERSION_PATH,
    ENV_CONVERSION_URL,
    ENV_JPEG_QUALITY,
    ENV_MAX_DIMENSION,
    ENV_MAX_FILES,
    ENV_REQUEST_TIMEOUT,
    MAX_MAX_DIMENSION,
    MAX_MAX_FILES,
    MIN_MAX_DIMENSION,
    MIN_MAX_FILES,
)

logger = Logger(UTC=True)

_ENV_FIELDS: Mapping[str, str] = {
    ENV_CONVERSION_URL: "conversion_url",
    ENV_CONVERSION_PATH: "conversion_path",
    ENV_REQUEST_TIMEOUT: "request_timeout",
    ENV_MAX_FILES: "max_files",
    ENV_MAX_DIMENSION: "max_dimension",
    ENV_JPEG_QUALITY: "jpeg_quality",
}


class PhotoDeckSettings(BaseModel):
    """Process-wide defaults for sessions and the conversion client."""

    conversion_url: StrictStr = Field(DEFAULT_CONVERSION_URL, min_length=1)
    conversion_path: StrictStr = Field(DEFAULT_CONVERSION_PATH, pattern=r"^/")
    request_timeout: float = Field(DEFAULT_REQUEST_TIMEOUT, gt=0)
    max_files: int = Field(DEFAULT_MAX_FILES, ge=MIN_MAX_FILES, le=MAX_MAX_FILES)
    max_dimension: int = Field(
        DEFAULT_MAX_DIMENSION, ge=MIN_MAX_DIMENSION, le=MAX_MAX_DIMENSION
    )
    jpeg_quality: int = Field(DEFAULT_JPEG_QUALITY, ge=1, le=100)

    @property
    def conversion_endpoint(self) -> str:
        return self.conversion_url.rstrip("/") + self.conversion_path

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PhotoDeckSettings":
        """Build settings from environment variables, falling back to defaults.

        Raises:
            ValidationError: If a variable holds an out-of-range or malformed value
        """
        env = os.environ if environ is None else environ
        values = {
            field: env[name] for name, field in _ENV_FIELDS.items() if env.get(name)
        }

        try:
            return cls.model_validate(values)
        except PydanticValidationError as exc:
            logger.error(
                "Invalid photodeck configuration",
                extra={"errors": exc.errors(include_url=False)},
            )
            raise ValidationError(
                message="Invalid photodeck configuration",
                details={"fields": [".".join(map(str, e["loc"])) for e in exc.errors()]},
            ) from exc


def get_settings() -> PhotoDeckSettings:
    """Return settings for the current environment."""
    return PhotoDeckSettings.from_env()
