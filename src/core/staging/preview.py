"""
Preview handles for staged images.

A preview handle is a revocable reference to a renderable view of an image's
raw bytes, addressed by a ``blob:`` style url. Handles are registered in a
per-session :class:`PreviewRegistry` and stay resolvable until released.

Release is tied to a ``weakref.finalize`` callback, so the registry entry is
revoked at most once: on the first explicit ``release()``, on leaving a
``with`` block, or when the handle is garbage collected, whichever comes first.
"""

import threading
import uuid
import weakref

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.utils.constants import PREVIEW_URL_PREFIX

logger = Logger(UTC=True)


class PreviewRegistry:
    """Url table backing the preview handles of one session."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[bytes, str]] = {}
        self._lock = threading.Lock()
        self.created = 0
        self.revoked = 0

    def create(self, data: bytes, mime_type: str) -> "PreviewHandle":
        url = f"{PREVIEW_URL_PREFIX}{uuid.uuid4()}"

        with self._lock:
            self._entries[url] = (data, mime_type)
            self.created += 1

        return PreviewHandle(url=url, registry=self)

    def resolve(self, url: str) -> tuple[bytes, str]:
        """Return ``(content, mime_type)`` for a live preview url.

        Raises:
            NotFoundError: If the url was never issued or has been revoked
        """
        with self._lock:
            entry = self._entries.get(url)

        if entry is None:
            raise NotFoundError(message="Preview not found", details={"url": url})
        return entry

    def revoke(self, url: str) -> None:
        with self._lock:
            removed = self._entries.pop(url, None)
            if removed is not None:
                self.revoked += 1

        if removed is None:
            logger.warning("Preview url revoked twice or never issued", extra={"url": url})

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries


class PreviewHandle:
    """Owning wrapper around one registered preview url."""

    __slots__ = ("_url", "_finalizer", "__weakref__")

    def __init__(self, *, url: str, registry: PreviewRegistry) -> None:
        self._url = url
        self._finalizer = weakref.finalize(self, registry.revoke, url)

    @property
    def url(self) -> str:
        return self._url

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        self._finalizer()

    def __enter__(self) -> "PreviewHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"PreviewHandle({self._url!r}, {state})"
