"""HTTP-backed implementation of DeckConversionRepository."""

from aws_lambda_powertools import Logger
import requests

from core.infrastructure.adapters.http_adapter import (
    ConversionHttpAdapter,
    HttpAdapterProtocol,
)
from core.models.deck import BuildRequest, ConversionResult
from core.models.errors import ConversionServiceError
from core.repositories.conversion_repository import DeckConversionRepository
from core.utils.constants import DEFAULT_ARTIFACT_CONTENT_TYPE, GENERIC_FAILURE_MESSAGE

logger = Logger(UTC=True)


class HttpDeckConversion(DeckConversionRepository):
    """Deck conversion through the remote HTTP service."""

    def __init__(self, adapter: HttpAdapterProtocol | None = None) -> None:
        """Create the client using the provided HTTP adapter."""
        self._http = adapter or ConversionHttpAdapter()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()

    def convert(self, request: BuildRequest) -> ConversionResult:
        """POST the build request and return the artifact."""
        payload = request.to_payload()

        logger.debug(
            "Sending conversion request",
            extra={
                "images": len(request.images),
                "ratio": request.options.ratio,
                "layout": request.options.layout,
                "split_every": request.options.split_every,
            },
        )

        try:
            response = self._http.post_json(payload=payload)

        except requests.Timeout as exc:
            logger.error("Conversion request timed out")
            raise ConversionServiceError(
                message="The conversion service did not respond in time",
            ) from exc

        except requests.RequestException as exc:
            logger.exception("Conversion request failed")
            raise ConversionServiceError(
                message=GENERIC_FAILURE_MESSAGE,
                details={"reason": str(exc)},
            ) from exc

        if not response.ok:
            server_text = (response.text or "").strip()
            logger.error(
                "Conversion service rejected the request",
                extra={"status": response.status_code},
            )
            raise ConversionServiceError(
                message=server_text or GENERIC_FAILURE_MESSAGE,
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type") or DEFAULT_ARTIFACT_CONTENT_TYPE

        logger.info(
            "Conversion completed",
            extra={"content_type": content_type, "size": len(response.content)},
        )
        return ConversionResult(content=response.content, content_type=content_type)
