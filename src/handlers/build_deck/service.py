"""Business logic for deck builds.

This module drives the transcoder across the staged order, assembles the
outbound request, calls the conversion service and resolves the returned
artifact into a download, while translating failures into a Failed build.
"""

import asyncio

from aws_lambda_powertools import Logger

from core.imaging.transcoder import ImageTranscoder
from core.infrastructure.http.deck_conversion import HttpDeckConversion
from core.models.deck import (
    BuildRequest,
    BuildResult,
    BuildState,
    DeckOptions,
    DownloadArtifact,
    TransformedImage,
)
from core.models.errors import PhotoDeckError
from core.models.staged_image import StagedImage
from core.repositories.conversion_repository import DeckConversionRepository
from core.session.context import StagingSession
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR, GENERIC_FAILURE_MESSAGE

logger = Logger(UTC=True)


class BuildOrchestrator:
    """Application service responsible for deck builds.

    This service orchestrates:
    - The busy / empty guard and the order snapshot
    - Sequential transcoding with observable progress
    - Request assembly and the conversion round trip
    - Artifact naming and failure reporting

    The staged collection is only read; a failed build can be retried as is.
    """

    def __init__(
        self,
        session: StagingSession,
        *,
        transcoder: ImageTranscoder | None = None,
        conversion: DeckConversionRepository | None = None,
    ) -> None:
        """Initialize the orchestrator with its session and collaborators."""
        self.session = session
        self.transcoder = transcoder or ImageTranscoder(
            max_dimension=session.max_dimension,
            quality=session.settings.jpeg_quality,
        )
        self.conversion = conversion or HttpDeckConversion()
        self._owns_conversion = conversion is None

    def close(self) -> None:
        """Close the conversion client when this orchestrator created it."""
        if self._owns_conversion:
            self.conversion.close()

    async def build(self, options: DeckOptions) -> BuildResult | None:
        """Run one build over the current staged order.

        The build flow is:
        1. Enter Preparing and snapshot the order (no-op if busy or empty)
        2. Transcode each image in order, one at a time
        3. Enter Requesting and send the assembled request
        4. Name the artifact (archive or single deck) and complete
        5. Return to Idle whatever happened

        Args:
            options: Presentation configuration, forwarded verbatim

        Returns:
            The build result, or None when the guard turned the call into a no-op
        """
        session = self.session
        tracker = session.tracker

        items = session.begin_build()
        if items is None:
            logger.info(
                "Build request ignored",
                extra={
                    "session_id": session.session_id,
                    "busy": tracker.busy,
                    "staged": len(session.store),
                },
            )
            return None

        max_dimension = session.max_dimension
        logger.info(
            "Build started",
            extra={
                "session_id": session.session_id,
                "images": len(items),
                "max_dimension": max_dimension,
                "split_every": options.split_every,
            },
        )

        try:
            images = await self._prepare(items, max_dimension=max_dimension)

            tracker.start_request()
            request = BuildRequest(images=images, options=options)
            converted = await asyncio.to_thread(self.conversion.convert, request)

            artifact = DownloadArtifact.from_conversion(converted)
            tracker.complete()

        except PhotoDeckError as exc:
            logger.exception(
                "Build failed",
                extra={"session_id": session.session_id, "error_code": exc.error_code},
            )
            return self._fail(message=exc.message, error_code=exc.error_code)

        except Exception:
            logger.exception(
                "Unexpected error during build",
                extra={"session_id": session.session_id},
            )
            return self._fail(
                message=GENERIC_FAILURE_MESSAGE, error_code=ERROR_CODE_INTERNAL_ERROR
            )

        finally:
            self._settle()

        logger.info(
            "Build completed",
            extra={
                "session_id": session.session_id,
                "artifact": artifact.filename,
                "size": len(artifact.content),
            },
        )
        return BuildResult(state=BuildState.COMPLETED, artifact=artifact)

    async def _prepare(
        self,
        items: tuple[StagedImage, ...],
        *,
        max_dimension: int,
    ) -> list[TransformedImage]:
        images: list[TransformedImage] = []

        for item in items:
            transformed = await asyncio.to_thread(
                self.transcoder.transcode,
                item.source,
                max_dimension=max_dimension,
            )
            images.append(transformed)
            self.session.tracker.advance()

        return images

    def _fail(self, *, message: str, error_code: str) -> BuildResult:
        tracker = self.session.tracker

        if tracker.busy:
            tracker.fail()
        self.session.record_failure(message)

        return BuildResult(state=BuildState.FAILED, message=message, error_code=error_code)

    def _settle(self) -> None:
        """Return the tracker to Idle however the build ended.

        A cancelled or interrupted build is still busy here and is marked
        Failed first so the session accepts mutations again.
        """
        tracker = self.session.tracker

        if tracker.busy:
            logger.warning(
                "Build interrupted",
                extra={"session_id": self.session.session_id, "state": tracker.state.value},
            )
            tracker.fail()
        tracker.finish()
