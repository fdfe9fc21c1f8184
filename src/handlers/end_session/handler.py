"""
Session action that tears a session down.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import require_session_id

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """End the session: every staged image is dropped and its preview released."""
    session_id = require_session_id(event)
    sessions.close(session_id)

    logger.info("Session ended", extra={"session_id": session_id})
    return ResponseBuilder.no_content()
