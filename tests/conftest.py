"""
Pytest configuration and fixtures for photodeck tests.
Provides in-memory image factories, staging sessions and a fake conversion service.
"""

import io
from collections.abc import Callable
from typing import Any

import pytest
from PIL import Image

from core.models.deck import BuildRequest, ConversionResult
from core.models.staged_image import SourceFile
from core.repositories.conversion_repository import DeckConversionRepository
from core.session.context import StagingSession
from core.session.registry import sessions
from core.utils.config import PhotoDeckSettings

PPTX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.presentationml.presentation"
)


def make_image_bytes(
    size: tuple[int, int] = (64, 48),
    fmt: str = "PNG",
    mode: str = "RGB",
    color: Any = (200, 80, 40),
    **save_kwargs: Any,
) -> bytes:
    """Encode a solid-color image in memory."""
    if mode in ("L", "1", "P") and isinstance(color, tuple):
        color = 128
    if mode == "RGBA" and isinstance(color, tuple) and len(color) == 3:
        color = (*color, 128)
    if mode == "CMYK" and isinstance(color, tuple) and len(color) == 3:
        color = (*color, 0)

    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt, **save_kwargs)
    return buffer.getvalue()


class FakeConversion(DeckConversionRepository):
    """Records build requests and answers with a canned artifact or error."""

    def __init__(
        self,
        *,
        content: bytes = b"PK\x03\x04deck",
        content_type: str = PPTX_CONTENT_TYPE,
        error: Exception | None = None,
        on_convert: Callable[[BuildRequest], None] | None = None,
    ) -> None:
        self.content = content
        self.content_type = content_type
        self.error = error
        self.on_convert = on_convert
        self.requests: list[BuildRequest] = []
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1

    def convert(self, request: BuildRequest) -> ConversionResult:
        self.requests.append(request)

        if self.on_convert is not None:
            self.on_convert(request)
        if self.error is not None:
            raise self.error

        return ConversionResult(content=self.content, content_type=self.content_type)


@pytest.fixture(autouse=True)
def reset_sessions():
    """Sessions are process-local; drop them between tests."""
    yield
    sessions.close_all()


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    return make_image_bytes


@pytest.fixture
def source_file() -> Callable[..., SourceFile]:
    """
    Factory for staged source files.

    Usage:
        src = source_file("a.png", size=(3000, 2000))
    """

    def _make(
        name: str = "photo.png",
        *,
        mime_type: str | None = None,
        size: tuple[int, int] = (64, 48),
        data: bytes | None = None,
        last_modified: int = 1_700_000_000_000,
    ) -> SourceFile:
        if mime_type is None:
            mime_type = "image/jpeg" if name.endswith((".jpg", ".jpeg")) else "image/png"
        if data is None:
            fmt = "JPEG" if mime_type == "image/jpeg" else "PNG"
            data = make_image_bytes(size, fmt=fmt)

        return SourceFile(
            name=name,
            mime_type=mime_type,
            size=len(data),
            last_modified=last_modified,
            data=data,
        )

    return _make


@pytest.fixture
def settings() -> PhotoDeckSettings:
    return PhotoDeckSettings(max_files=5, max_dimension=1920)


@pytest.fixture
def session(settings) -> StagingSession:
    staging = StagingSession("test-session", settings)
    yield staging
    staging.close()


@pytest.fixture
def staged_session(session, source_file) -> StagingSession:
    """Session with three images staged in order a, b, c."""
    session.add_files(
        [source_file("a.png"), source_file("b.jpg"), source_file("c.png")]
    )
    return session


@pytest.fixture
def fake_conversion() -> FakeConversion:
    return FakeConversion()


@pytest.fixture
def conversion_factory() -> Callable[..., FakeConversion]:
    """
    Factory for fake conversion services.

    Usage:
        conversion = conversion_factory(content_type="application/zip")
    """
    return FakeConversion
