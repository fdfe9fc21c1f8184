"""
Per-image decode, downscale and re-encode.

The transcoder turns one staged source file into an embeddable data url:

1. Decode the raw bytes (EXIF orientation applied, as a browser shows it)
2. Scale by ``min(1, D / max(w0, h0))``; images are never upscaled
3. Resample with a Lanczos filter into a new image of the target size
4. Encode to PNG for lossless sources, otherwise to JPEG at quality ``Q``
"""

import base64
import io
import math

from aws_lambda_powertools import Logger
from PIL import Image, ImageOps, UnidentifiedImageError

from core.models.deck import TransformedImage
from core.models.errors import DecodeFailureError
from core.models.staged_image import SourceFile
from core.utils.constants import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_DIMENSION,
    LOSSLESS_OUTPUT_MIME,
    LOSSY_OUTPUT_MIME,
)
from core.utils.mime import is_lossless_mime_type

logger = Logger(UTC=True)

_RESAMPLE = Image.Resampling.LANCZOS
_RESAMPLABLE_MODES = frozenset({"L", "LA", "RGB", "RGBA"})

DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class ImageTranscoder:
    """Decodes, downscales and re-encodes staged images."""

    def __init__(
        self,
        *,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        quality: int = DEFAULT_JPEG_QUALITY,
    ) -> None:
        self.max_dimension = max_dimension
        self.quality = quality

    @staticmethod
    def target_size(width: int, height: int, max_dimension: int) -> tuple[int, int]:
        """Dimensions after downscaling ``width`` x ``height`` under ``max_dimension``."""
        scale = min(1.0, max_dimension / max(width, height))
        return (
            max(1, _round_half_up(width * scale)),
            max(1, _round_half_up(height * scale)),
        )

    def transcode(
        self,
        source: SourceFile,
        *,
        max_dimension: int | None = None,
        quality: int | None = None,
    ) -> TransformedImage:
        """Produce the embeddable representation of ``source``.

        Raises:
            DecodeFailureError: If the raw bytes cannot be decoded
        """
        max_dimension = max_dimension or self.max_dimension
        quality = quality or self.quality

        decoded = self._decode(source)
        natural_size = decoded.size
        surfaces = [decoded]
        try:
            lossless = is_lossless_mime_type(source.mime_type)
            surface = self._prepare(decoded, lossless=lossless)
            surfaces.append(surface)
            width, height = self.target_size(surface.width, surface.height, max_dimension)

            if (width, height) != surface.size:
                surface = surface.resize((width, height), _RESAMPLE)
                surfaces.append(surface)

            mime_type, payload = self._encode(surface, lossless=lossless, quality=quality)
        finally:
            # _prepare may hand back the decoded image itself
            for image in {id(image): image for image in surfaces}.values():
                image.close()

        logger.debug(
            "Image transcoded",
            extra={
                "source_name": source.name,
                "natural_size": list(natural_size),
                "output_size": [width, height],
                "output_mime": mime_type,
                "output_bytes": len(payload),
            },
        )

        return TransformedImage(
            name=source.name,
            data_url=f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}",
            width=width,
            height=height,
            mime_type=mime_type,
        )

    @staticmethod
    def _decode(source: SourceFile) -> Image.Image:
        try:
            with Image.open(io.BytesIO(source.data)) as opened:
                opened.load()
                return ImageOps.exif_transpose(opened)
        except DECODE_ERRORS as exc:
            logger.warning(
                "Failed to decode staged image",
                extra={"source_name": source.name, "mime_type": source.mime_type},
            )
            raise DecodeFailureError(
                message=f"Unable to read image: {source.name}",
                details={"image_name": source.name, "reason": str(exc)},
            ) from exc

    @staticmethod
    def _prepare(image: Image.Image, *, lossless: bool) -> Image.Image:
        """Convert to a mode that resamples with a real filter and encodes cleanly."""
        if not lossless:
            if image.mode == "P":
                image = image.convert("RGBA")
            return image if image.mode in ("L", "RGB") else image.convert("RGB")

        if image.mode in _RESAMPLABLE_MODES:
            return image
        if image.mode == "1":
            return image.convert("L")
        if image.mode == "CMYK":
            return image.convert("RGB")
        return image.convert("RGBA")

    @staticmethod
    def _encode(image: Image.Image, *, lossless: bool, quality: int) -> tuple[str, bytes]:
        buffer = io.BytesIO()

        if lossless:
            image.save(buffer, format="PNG", optimize=True)
            return LOSSLESS_OUTPUT_MIME, buffer.getvalue()

        image.save(buffer, format="JPEG", quality=quality, optimize=True)
        return LOSSY_OUTPUT_MIME, buffer.getvalue()
