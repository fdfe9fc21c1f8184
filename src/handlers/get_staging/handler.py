"""
Session action returning the staged order and build status.
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
    """
    Return the staging view of a session, starting an empty one if needed.

    The view lists the staged images in slide order with their preview urls,
    the totals, the limits, the busy flag, progress and the current message.
    """
    session_id = require_session_id(event)
    session = sessions.get_or_create(session_id)

    view = StagingView.from_session(session)
    logger.debug(
        "Staging view requested",
        extra={"session_id": session_id, "staged": view.total_count, "busy": view.busy},
    )

    return ResponseBuilder.ok(view.model_dump(mode="json"))
