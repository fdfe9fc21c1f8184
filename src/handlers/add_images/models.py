"""Pydantic models for the add-images request/response."""

import base64
import binascii
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.staged_image import SourceFile

logger = Logger(UTC=True)


class UploadedFile(BaseModel):
    """One file handle as sent by the picker or drop surface."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255, description="File name")
    mime_type: str = Field("", alias="type", description="Declared media type")
    size: int = Field(..., ge=0, description="Declared size in bytes")
    last_modified: int = Field(0, ge=0, description="Modification time, epoch ms")
    content: str = Field(..., description="Base64 encoded file content")

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        """
        Validate base64 content:
        - must not be empty
        - must decode correctly
        """
        if not value or not value.strip():
            raise ValueError("content must not be empty")

        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        return value

    def to_source(self) -> SourceFile:
        return SourceFile(
            name=self.name,
            mime_type=self.mime_type,
            size=self.size,
            last_modified=self.last_modified,
            data=base64.b64decode(self.content),
        )


class AddImagesRequest(BaseModel):
    """Validation model for an ingested batch."""

    files: list[UploadedFile] = Field(..., description="Picked or dropped files")

    @field_validator("files", mode="before")
    @classmethod
    def validate_files(cls, value: Any) -> Any:
        if value is None:
            return []
        return value


class CapacityNotice(BaseModel):
    error: str
    message: str
    capacity: int
    dropped: int


class AddImagesResponse(BaseModel):
    """Response model for an ingested batch."""

    admitted: list[str] = Field(..., description="Identifiers of admitted images")
    dropped: int = Field(..., description="Image files dropped at the capacity bound")
    notice: CapacityNotice | None = None
    total_count: int
