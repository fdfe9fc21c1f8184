"""
Build state machine.

    Idle -> Preparing -> Requesting -> Completed -> Idle
                 |             |
                 +-> Failed <--+-> Idle

Busy is derived from the state: Preparing and Requesting are busy, every
other state is not. Progress is reset on reaching Completed or Failed.
"""

import threading
from collections.abc import Callable, Mapping

from aws_lambda_powertools import Logger

from core.models.deck import BuildProgress, BuildState, BuildStatus
from core.models.errors import InvalidStateTransitionError

logger = Logger(UTC=True)

StatusListener = Callable[[BuildStatus], None]

TRANSITIONS: Mapping[BuildState, frozenset[BuildState]] = {
    BuildState.IDLE: frozenset({BuildState.PREPARING}),
    BuildState.PREPARING: frozenset({BuildState.REQUESTING, BuildState.FAILED}),
    BuildState.REQUESTING: frozenset({BuildState.COMPLETED, BuildState.FAILED}),
    BuildState.COMPLETED: frozenset({BuildState.IDLE}),
    BuildState.FAILED: frozenset({BuildState.IDLE}),
}

BUSY_STATES = frozenset({BuildState.PREPARING, BuildState.REQUESTING})


class BuildTracker:
    """Guards build state transitions and publishes progress."""

    def __init__(self) -> None:
        self._state = BuildState.IDLE
        self._progress = BuildProgress()
        self._lock = threading.RLock()
        self._listeners: list[StatusListener] = []

    @property
    def state(self) -> BuildState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state in BUSY_STATES

    @property
    def progress(self) -> BuildProgress:
        return self._progress

    def status(self) -> BuildStatus:
        with self._lock:
            return BuildStatus(state=self._state, busy=self.busy, progress=self._progress)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register ``listener`` for every state or progress change.

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def begin(self, total: int) -> None:
        with self._lock:
            self._transition(BuildState.PREPARING)
            self._progress = BuildProgress(done=0, total=total)
        self._publish()

    def advance(self) -> None:
        """Count one transcoded image."""
        with self._lock:
            if self._state is not BuildState.PREPARING:
                raise InvalidStateTransitionError(
                    message="Progress can only advance while preparing",
                    details={"state": self._state.value},
                )
            if self._progress.done >= self._progress.total:
                raise InvalidStateTransitionError(
                    message="Progress cannot exceed the total",
                    details={"done": self._progress.done, "total": self._progress.total},
                )
            self._progress = BuildProgress(
                done=self._progress.done + 1, total=self._progress.total
            )
        self._publish()

    def start_request(self) -> None:
        with self._lock:
            self._transition(BuildState.REQUESTING)
        self._publish()

    def complete(self) -> None:
        with self._lock:
            self._transition(BuildState.COMPLETED)
            self._progress = BuildProgress()
        self._publish()

    def fail(self) -> None:
        with self._lock:
            self._transition(BuildState.FAILED)
            self._progress = BuildProgress()
        self._publish()

    def finish(self) -> None:
        """Return to Idle from a terminal state."""
        with self._lock:
            self._transition(BuildState.IDLE)
        self._publish()

    def _transition(self, target: BuildState) -> None:
        if target not in TRANSITIONS[self._state]:
            raise InvalidStateTransitionError(
                message=f"Cannot move build from {self._state.value} to {target.value}",
                details={"from": self._state.value, "to": target.value},
            )

        logger.debug(
            "Build state transition",
            extra={"from": self._state.value, "to": target.value},
        )
        self._state = target

    def _publish(self) -> None:
        status = self.status()
        for listener in list(self._listeners):
            listener(status)
