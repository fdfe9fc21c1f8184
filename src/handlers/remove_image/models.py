"""Pydantic models for the remove-image request."""

from pydantic import BaseModel, Field, StrictInt


class RemoveImageRequest(BaseModel):
    """Validation model for removing one staged image."""

    index: StrictInt = Field(..., description="0-based position of the image to remove")
