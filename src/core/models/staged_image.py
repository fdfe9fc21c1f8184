"""Staged image models."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.staging.preview import PreviewHandle


class SourceFile(BaseModel):
    """Raw file handle supplied by a picker or drop event."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Display name of the file")
    mime_type: str = Field("", description="Declared media type (may be empty)")
    size: int = Field(..., ge=0, description="Declared size in bytes")
    last_modified: int = Field(0, description="Modification time, epoch milliseconds")
    data: bytes = Field(..., repr=False, description="Raw file content")


class StagedImage:
    """One admitted image awaiting processing.

    Owns its source handle and its preview handle. Nothing mutates after
    creation; the store only changes its position.
    """

    __slots__ = ("_image_id", "_source", "_preview", "__weakref__")

    def __init__(self, *, image_id: str, source: SourceFile, preview: PreviewHandle) -> None:
        self._image_id = image_id
        self._source = source
        self._preview = preview

    @property
    def image_id(self) -> str:
        return self._image_id

    @property
    def source(self) -> SourceFile:
        return self._source

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def size(self) -> int:
        return self._source.size

    @property
    def preview(self) -> PreviewHandle:
        return self._preview

    def release(self) -> None:
        """Release the preview handle; later calls do nothing."""
        self._preview.release()

    def __repr__(self) -> str:
        return f"StagedImage(image_id={self._image_id!r}, name={self.name!r}, size={self.size})"
