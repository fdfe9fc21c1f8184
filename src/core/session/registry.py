"""Process-local registry of staging sessions keyed by session id."""

import threading

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.session.context import StagingSession
from core.utils.config import PhotoDeckSettings

logger = Logger(UTC=True)


class SessionRegistry:
    """Keeps one :class:`StagingSession` per session id.

    State is volatile: nothing outlives the process.
    """

    def __init__(self, settings: PhotoDeckSettings | None = None) -> None:
        self._settings = settings
        self._sessions: dict[str, StagingSession] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> StagingSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = StagingSession(session_id, self._settings)
                self._sessions[session_id] = session
                logger.info("Session started", extra={"session_id": session_id})
            return session

    def get(self, session_id: str) -> StagingSession:
        """
        Raises:
            NotFoundError: If no session exists for ``session_id``
        """
        with self._lock:
            session = self._sessions.get(session_id)

        if session is None:
            raise NotFoundError(
                message=f"Session not found: {session_id}",
                details={"session_id": session_id},
            )
        return session

    def close(self, session_id: str) -> None:
        """
        Raises:
            NotFoundError: If no session exists for ``session_id``
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)

        if session is None:
            raise NotFoundError(
                message=f"Session not found: {session_id}",
                details={"session_id": session_id},
            )
        session.close()

    def close_all(self) -> None:
        with self._lock:
            sessions, self._sessions = list(self._sessions.values()), {}

        for session in sessions:
            session.close()

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


sessions = SessionRegistry()
