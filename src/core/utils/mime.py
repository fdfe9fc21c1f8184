from collections.abc import Mapping

from core.utils.constants import IMAGE_MIME_PREFIX, LOSSLESS_MIME_MARKERS

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"RIFF": "image/webp",
    b"BM": "image/bmp",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


def is_image_mime_type(mime_type: str | None) -> bool:
    """Whether a declared media type indicates image content."""
    return (mime_type or "").lower().startswith(IMAGE_MIME_PREFIX)


def is_lossless_mime_type(mime_type: str | None) -> bool:
    """Whether a declared media type names a lossless image format."""
    declared = (mime_type or "").lower()
    return any(marker in declared for marker in LOSSLESS_MIME_MARKERS)
