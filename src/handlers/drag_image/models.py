"""Pydantic models for drag gestures on the staged list."""

from typing import Literal

from pydantic import BaseModel, Field, StrictInt, model_validator


class DragImageRequest(BaseModel):
    """One step of a drag gesture: start on a row, drop on a row, or cancel."""

    gesture: Literal["start", "drop", "cancel"]
    index: StrictInt | None = Field(None, description="0-based row the gesture is on")

    @model_validator(mode="after")
    def require_index(self) -> "DragImageRequest":
        if self.gesture != "cancel" and self.index is None:
            raise ValueError(f"index is required for a {self.gesture} gesture")
        return self


class DragImageResponse(BaseModel):
    gesture: str
    accepted: bool = Field(..., description="Whether the gesture had an effect")
    order: list[str] = Field(..., description="Staged identifiers in slide order")
