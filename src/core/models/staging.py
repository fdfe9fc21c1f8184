"""Read model of a staging session, returned by session actions."""

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr

from core.models.deck import BuildProgress, BuildState
from core.session.context import StagingSession
from core.utils.constants import format_file_size


class StagedImageView(BaseModel):
    """One staged image as shown in the ordered list."""

    position: StrictInt = Field(..., description="1-based slide position")
    image_id: StrictStr
    name: StrictStr
    size: StrictInt
    size_label: StrictStr
    preview_url: StrictStr
    mime_type: StrictStr


class StagingView(BaseModel):
    """Snapshot of a session: staged order, totals, limits and build status."""

    session_id: StrictStr
    images: list[StagedImageView]
    total_count: StrictInt
    total_bytes: StrictInt
    total_size_label: StrictStr
    max_files: StrictInt
    max_dimension: StrictInt
    busy: StrictBool
    state: BuildState
    progress: BuildProgress
    message: StrictStr | None = None

    @classmethod
    def from_session(cls, session: StagingSession) -> "StagingView":
        items = session.store.snapshot()
        status = session.tracker.status()
        total_bytes = sum(item.size for item in items)

        return cls(
            session_id=session.session_id,
            images=[
                StagedImageView(
                    position=position,
                    image_id=item.image_id,
                    name=item.name,
                    size=item.size,
                    size_label=format_file_size(item.size),
                    preview_url=item.preview.url,
                    mime_type=item.source.mime_type,
                )
                for position, item in enumerate(items, start=1)
            ],
            total_count=len(items),
            total_bytes=total_bytes,
            total_size_label=format_file_size(total_bytes),
            max_files=session.capacity,
            max_dimension=session.max_dimension,
            busy=status.busy,
            state=status.state,
            progress=status.progress,
            message=session.message,
        )
