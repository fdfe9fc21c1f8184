"""
Ordered collection of staged images.

Order is semantically significant: it is the slide order of the produced
deck. Every path that drops an entry (remove, clear, teardown, truncation on
add) releases its preview handle exactly once.
"""

import threading
from collections.abc import Iterable, Iterator

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError, ValidationError
from core.models.staged_image import StagedImage
from core.utils.constants import DEFAULT_MAX_FILES, MIN_MAX_FILES

logger = Logger(UTC=True)


class StagingStore:
    """Bounded, ordered store of :class:`StagedImage` entries.

    All operations run under one re-entrant lock, so no caller can observe a
    partially mutated collection.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_FILES) -> None:
        if capacity < MIN_MAX_FILES:
            raise ValidationError(
                message=f"Capacity must be at least {MIN_MAX_FILES}",
                details={"capacity": capacity},
            )

        self._items: list[StagedImage] = []
        self._capacity = capacity
        self._lock = threading.RLock()
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        with self._lock:
            if value < MIN_MAX_FILES:
                raise ValidationError(
                    message=f"Capacity must be at least {MIN_MAX_FILES}",
                    details={"capacity": value},
                )
            if value < len(self._items):
                raise ValidationError(
                    message="Capacity cannot be lower than the number of staged images",
                    details={"capacity": value, "staged": len(self._items)},
                )
            self._capacity = value

    @property
    def remaining(self) -> int:
        with self._lock:
            return max(0, self._capacity - len(self._items))

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return sum(item.size for item in self._items)

    def add(
        self,
        images: Iterable[StagedImage],
        capacity_remaining: int | None = None,
    ) -> list[StagedImage]:
        """Append entries in encounter order up to the remaining capacity.

        Entries beyond the bound are released and not admitted.

        Args:
            images: Entries to admit, in encounter order
            capacity_remaining: Upper bound on admitted entries for this call;
                never more than the store's own remaining room

        Returns:
            The admitted entries
        """
        with self._lock:
            room = self.remaining
            if capacity_remaining is not None:
                room = max(0, min(room, capacity_remaining))

            admitted: list[StagedImage] = []
            for image in images:
                if len(admitted) < room:
                    admitted.append(image)
                else:
                    image.release()

            self._items.extend(admitted)

        logger.debug(
            "Staged images added",
            extra={"admitted": len(admitted), "staged": len(self._items)},
        )
        return admitted

    def remove(self, index: int) -> StagedImage:
        """Delete the entry at ``index`` and release its preview.

        Raises:
            NotFoundError: If ``index`` is out of range
        """
        with self._lock:
            if not 0 <= index < len(self._items):
                raise NotFoundError(
                    message=f"No staged image at position {index}",
                    details={"index": index, "staged": len(self._items)},
                )
            removed = self._items.pop(index)
            removed.release()

        logger.debug(
            "Staged image removed",
            extra={"image_id": removed.image_id, "index": index},
        )
        return removed

    def clear(self) -> int:
        """Delete every entry, releasing every preview. Returns the count removed."""
        with self._lock:
            removed, self._items = self._items, []
            for item in removed:
                item.release()

        return len(removed)

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move the entry at ``from_index`` into the slot at ``to_index``.

        Moving towards the front places it right before the former occupant of
        ``to_index``; moving towards the back places it right after it.

        Returns:
            True if the order changed, False for a no-op (equal or invalid indices)
        """
        with self._lock:
            size = len(self._items)
            if from_index == to_index:
                return False
            if not (0 <= from_index < size and 0 <= to_index < size):
                logger.debug(
                    "Ignoring reorder with invalid index",
                    extra={"from_index": from_index, "to_index": to_index, "staged": size},
                )
                return False

            moved = self._items.pop(from_index)
            self._items.insert(to_index, moved)

        return True

    def snapshot(self) -> tuple[StagedImage, ...]:
        """Point-in-time copy of the current order."""
        with self._lock:
            return tuple(self._items)

    def ids(self) -> list[str]:
        with self._lock:
            return [item.image_id for item in self._items]

    def find(self, image_id: str) -> StagedImage:
        """
        Raises:
            NotFoundError: If no entry carries ``image_id``
        """
        with self._lock:
            for item in self._items:
                if item.image_id == image_id:
                    return item

        raise NotFoundError(
            message=f"Image not found: {image_id}",
            details={"image_id": image_id},
        )

    def __contains__(self, image_id: object) -> bool:
        with self._lock:
            return any(item.image_id == image_id for item in self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[StagedImage]:
        return iter(self.snapshot())

    def close(self) -> None:
        """Tear the store down, releasing every remaining preview."""
        with self._lock:
            if self._closed:
                return
            released = self.clear()
            self._closed = True

        logger.debug("Staging store closed", extra={"released": released})

    def __enter__(self) -> "StagingStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
