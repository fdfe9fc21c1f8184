"""Deck build models: options, transformed images, outbound request and results."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.utils.constants import (
    ARCHIVE_CONTENT_MARKER,
    ARCHIVE_FILENAME,
    DECK_FILENAME,
    DEFAULT_LAYOUT,
    DEFAULT_RATIO,
    DEFAULT_TITLE_TEXT,
)

AspectRatio = Literal["16:9", "4:3"]
Layout = Literal["cover", "fit"]


class BuildState(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    REQUESTING = "requesting"
    COMPLETED = "completed"
    FAILED = "failed"


class BuildProgress(BaseModel):
    """Transcoding progress of the running build."""

    model_config = ConfigDict(frozen=True)

    done: StrictInt = Field(0, ge=0)
    total: StrictInt = Field(0, ge=0)


class BuildStatus(BaseModel):
    """Observable snapshot of the build state machine."""

    model_config = ConfigDict(frozen=True)

    state: BuildState
    busy: StrictBool
    progress: BuildProgress


class DeckOptions(BaseModel):
    """Presentation configuration forwarded verbatim to the conversion service."""

    model_config = ConfigDict(frozen=True)

    ratio: AspectRatio = Field(DEFAULT_RATIO, description="Slide aspect ratio")
    layout: Layout = Field(
        DEFAULT_LAYOUT, description="cover crops to fill the slide, fit letterboxes"
    )
    title_slide: StrictBool = Field(True, description="Prepend a title slide")
    title_text: StrictStr = Field(DEFAULT_TITLE_TEXT, description="Title slide text")
    split_every: StrictInt = Field(
        0,
        ge=0,
        description="0 for a single deck; otherwise images per deck in a zip archive",
    )


class TransformedImage(BaseModel):
    """One downscaled, re-encoded image ready for embedding."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    data_url: StrictStr = Field(..., repr=False, serialization_alias="dataUrl")
    width: StrictInt = Field(..., ge=1)
    height: StrictInt = Field(..., ge=1)
    mime_type: StrictStr = Field(..., exclude=True)


class BuildRequest(BaseModel):
    """Ordered images plus presentation configuration."""

    images: list[TransformedImage]
    options: DeckOptions

    def to_payload(self) -> dict[str, Any]:
        """Wire payload expected by the conversion service."""
        return {
            "images": [image.model_dump(by_alias=True) for image in self.images],
            "ratio": self.options.ratio,
            "layout": self.options.layout,
            "titleSlide": self.options.title_slide,
            "titleText": self.options.title_text,
            "splitEvery": self.options.split_every,
        }


class ConversionResult(BaseModel):
    """Raw successful response of the conversion service."""

    content: bytes = Field(..., repr=False)
    content_type: StrictStr = ""


class DownloadArtifact(BaseModel):
    """Artifact offered to the user as a download."""

    filename: StrictStr
    content_type: StrictStr
    content: bytes = Field(..., repr=False)

    @property
    def is_archive(self) -> bool:
        return self.filename == ARCHIVE_FILENAME

    @classmethod
    def from_conversion(cls, result: ConversionResult) -> "DownloadArtifact":
        """Pick the download name from the archive marker in the content type."""
        is_archive = ARCHIVE_CONTENT_MARKER in result.content_type.lower()

        return cls(
            filename=ARCHIVE_FILENAME if is_archive else DECK_FILENAME,
            content_type=result.content_type,
            content=result.content,
        )


class BuildResult(BaseModel):
    """Final outcome of one build."""

    state: BuildState
    message: StrictStr | None = None
    error_code: StrictStr | None = None
    artifact: DownloadArtifact | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is BuildState.COMPLETED
