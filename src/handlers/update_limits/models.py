"""Pydantic models for the update-limits request."""

from pydantic import BaseModel, Field, StrictInt, model_validator

from core.utils.constants import (
    MAX_MAX_DIMENSION,
    MAX_MAX_FILES,
    MIN_MAX_DIMENSION,
    MIN_MAX_FILES,
)


class UpdateLimitsRequest(BaseModel):
    """Validation model for the per-session limits."""

    max_files: StrictInt | None = Field(
        None,
        ge=MIN_MAX_FILES,
        le=MAX_MAX_FILES,
        description="Maximum number of staged images",
    )
    max_dimension: StrictInt | None = Field(
        None,
        ge=MIN_MAX_DIMENSION,
        le=MAX_MAX_DIMENSION,
        description="Longest edge after downscaling, in pixels",
    )

    @model_validator(mode="after")
    def require_one_limit(self) -> "UpdateLimitsRequest":
        if self.max_files is None and self.max_dimension is None:
            raise ValueError("At least one of max_files or max_dimension is required")
        return self
