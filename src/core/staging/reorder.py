"""Drag gesture to store permutation."""

from typing import Protocol

from aws_lambda_powertools import Logger

logger = Logger(UTC=True)


class ReorderTarget(Protocol):
    """What the controller needs from the session that owns the store."""

    @property
    def busy(self) -> bool: ...

    def reorder(self, from_index: int, to_index: int) -> bool: ...


class ReorderController:
    """Captures the drag source and issues one reorder on drop.

    Gestures are ignored while a build is in progress. A build that starts
    between ``drag_start`` and ``drop`` makes the session reject the move.
    """

    def __init__(self, target: ReorderTarget) -> None:
        self._target = target
        self._source: int | None = None

    @property
    def source(self) -> int | None:
        return self._source

    def drag_start(self, index: int) -> bool:
        """Remember ``index`` as the drag source. Returns False when inert."""
        if self._target.busy:
            logger.debug("Ignoring drag start during build", extra={"index": index})
            return False

        self._source = index
        return True

    def drop(self, index: int) -> bool:
        """Move the captured source onto ``index``.

        Returns:
            True if the store order changed
        """
        source, self._source = self._source, None
        if source is None or source == index:
            return False

        return self._target.reorder(source, index)

    def cancel(self) -> None:
        self._source = None
