"""
Session action that removes every staged image.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.models.staging import StagingView
from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import require_session_id

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Clear the session's staged images, releasing every preview."""
    session_id = require_session_id(event)

    session = sessions.get(session_id)
    removed = session.clear()

    logger.info(
        "Staged images cleared",
        extra={"session_id": session_id, "removed": removed},
    )

    return ResponseBuilder.ok(StagingView.from_session(session).model_dump(mode="json"))
