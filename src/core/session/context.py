"""
Session-scoped staging context.

A :class:`StagingSession` owns everything one user works with: the staging
store and its preview registry, the build state machine, the reorder
controller, the per-session limits and the message shown to the user.

Every mutating operation checks the busy flag under the session lock, so a
mutation can never interleave with a running build no matter which call site
triggers it.
"""

import threading
from collections.abc import Iterable

from aws_lambda_powertools import Logger

from core.models.errors import BuildInProgressError, NotFoundError, ValidationError
from core.models.staged_image import SourceFile, StagedImage
from core.session.build_state import BuildTracker
from core.staging.ingestion import FileIngestion, IngestionResult
from core.staging.preview import PreviewRegistry
from core.staging.reorder import ReorderController
from core.staging.store import StagingStore
from core.utils.config import PhotoDeckSettings, get_settings
from core.utils.constants import (
    MAX_MAX_DIMENSION,
    MAX_MAX_FILES,
    MIN_MAX_DIMENSION,
    MIN_MAX_FILES,
)

logger = Logger(UTC=True)


class StagingSession:
    """Explicit per-session context owning the staged images and build state."""

    def __init__(self, session_id: str, settings: PhotoDeckSettings | None = None) -> None:
        settings = settings or get_settings()

        self.session_id = session_id
        self.settings = settings
        self.previews = PreviewRegistry()
        self.store = StagingStore(capacity=settings.max_files)
        self.tracker = BuildTracker()
        self.reorder_controller = ReorderController(self)
        self.message: str | None = None

        self._ingestion = FileIngestion(self.store, self.previews)
        self._max_dimension = settings.max_dimension
        self._lock = threading.RLock()
        self._closed = False

    @property
    def busy(self) -> bool:
        return self.tracker.busy

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def capacity(self) -> int:
        return self.store.capacity

    @property
    def max_dimension(self) -> int:
        return self._max_dimension

    def _ensure_mutable(self, action: str) -> None:
        if self._closed:
            raise NotFoundError(
                message="Session has ended",
                details={"session_id": self.session_id},
            )
        if self.tracker.busy:
            logger.info(
                "Rejected staging change during build",
                extra={"session_id": self.session_id, "action": action},
            )
            raise BuildInProgressError(
                details={"session_id": self.session_id, "action": action},
            )

    def add_files(self, files: Iterable[SourceFile]) -> IngestionResult:
        """Ingest a picked or dropped batch.

        Raises:
            BuildInProgressError: While a build is running
        """
        with self._lock:
            self._ensure_mutable("add")
            result = self._ingestion.ingest(files)

            if result.admitted or result.truncated:
                self.message = result.notice.message if result.notice else None

        logger.info(
            "Files staged",
            extra={
                "session_id": self.session_id,
                "admitted": len(result.admitted),
                "dropped": result.dropped,
                "staged": len(self.store),
            },
        )
        return result

    def remove(self, index: int) -> StagedImage:
        with self._lock:
            self._ensure_mutable("remove")
            return self.store.remove(index)

    def reorder(self, from_index: int, to_index: int) -> bool:
        with self._lock:
            self._ensure_mutable("reorder")
            return self.store.reorder(from_index, to_index)

    def clear(self) -> int:
        with self._lock:
            self._ensure_mutable("clear")
            self.message = None
            return self.store.clear()

    def update_limits(
        self,
        *,
        max_files: int | None = None,
        max_dimension: int | None = None,
    ) -> None:
        """Change the capacity bound and/or the downscale bound.

        Raises:
            ValidationError: If a value is out of range, or the capacity would
                fall below the number of staged images
            BuildInProgressError: While a build is running
        """
        with self._lock:
            self._ensure_mutable("update_limits")

            if max_dimension is not None and not (
                MIN_MAX_DIMENSION <= max_dimension <= MAX_MAX_DIMENSION
            ):
                raise ValidationError(
                    message=(
                        f"Max dimension must be between {MIN_MAX_DIMENSION} "
                        f"and {MAX_MAX_DIMENSION}"
                    ),
                    details={"max_dimension": max_dimension},
                )
            if max_files is not None and not (MIN_MAX_FILES <= max_files <= MAX_MAX_FILES):
                raise ValidationError(
                    message=f"Max files must be between {MIN_MAX_FILES} and {MAX_MAX_FILES}",
                    details={"max_files": max_files},
                )

            if max_files is not None:
                self.store.capacity = max_files
            if max_dimension is not None:
                self._max_dimension = max_dimension

    def begin_build(self) -> tuple[StagedImage, ...] | None:
        """Enter Preparing and snapshot the order, atomically.

        Returns:
            The staged images in build order, or None when a build is already
            running, nothing is staged, or the session has ended
        """
        with self._lock:
            if self._closed or self.tracker.busy:
                return None

            items = self.store.snapshot()
            if not items:
                return None

            self.message = None
            self.tracker.begin(len(items))
            return items

    def record_failure(self, message: str) -> None:
        with self._lock:
            self.message = message

    def close(self) -> None:
        """Tear the session down, releasing every preview."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.reorder_controller.cancel()
            self.store.close()

        logger.info("Session closed", extra={"session_id": self.session_id})
