"""Admission of picked or dropped files into the staging store."""

import secrets
from collections.abc import Iterable
from dataclasses import dataclass, field

from aws_lambda_powertools import Logger

from core.models.errors import CapacityExceededError
from core.models.staged_image import SourceFile, StagedImage
from core.staging.preview import PreviewRegistry
from core.staging.store import StagingStore
from core.utils.constants import capacity_notice
from core.utils.mime import is_image_mime_type

logger = Logger(UTC=True)


@dataclass
class IngestionResult:
    """Outcome of one ingested batch."""

    admitted: list[StagedImage] = field(default_factory=list)
    dropped: int = 0
    notice: CapacityExceededError | None = None

    @property
    def truncated(self) -> bool:
        return self.notice is not None


class FileIngestion:
    """Filters a batch to images and feeds it into a store up to its capacity."""

    def __init__(self, store: StagingStore, previews: PreviewRegistry) -> None:
        self._store = store
        self._previews = previews

    @staticmethod
    def generate_image_id(source: SourceFile) -> str:
        """Identifier from name, size, modification time and a random salt."""
        return f"{source.name}-{source.size}-{source.last_modified}-{secrets.token_hex(8)}"

    def ingest(self, files: Iterable[SourceFile]) -> IngestionResult:
        """Admit the image files of ``files`` in encounter order.

        Non-image files are discarded without notice. When the capacity bound
        cuts the batch short, the result carries a :class:`CapacityExceededError`
        notice; the admitted files stay staged either way.
        """
        candidates = [f for f in files if is_image_mime_type(f.mime_type)]
        if not candidates:
            return IngestionResult()

        admissible = max(0, self._store.capacity - len(self._store))
        accepted = candidates[:admissible]
        dropped = len(candidates) - len(accepted)

        taken = set(self._store.ids())
        staged: list[StagedImage] = []
        for source in accepted:
            image_id = self.generate_image_id(source)
            while image_id in taken:
                image_id = self.generate_image_id(source)
            taken.add(image_id)

            preview = self._previews.create(source.data, source.mime_type)
            staged.append(StagedImage(image_id=image_id, source=source, preview=preview))

        admitted = self._store.add(staged, admissible)
        dropped += len(staged) - len(admitted)

        result = IngestionResult(admitted=admitted, dropped=dropped)
        if dropped:
            result.notice = CapacityExceededError(
                message=capacity_notice(self._store.capacity),
                details={"capacity": self._store.capacity, "dropped": dropped},
            )
            logger.info(
                "Ingested batch truncated at capacity",
                extra={"capacity": self._store.capacity, "dropped": dropped},
            )

        logger.debug(
            "Ingested batch",
            extra={"candidates": len(candidates), "admitted": len(admitted)},
        )
        return result
