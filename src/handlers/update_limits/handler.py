"""
Session action that changes the capacity and downscale bounds.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.models.staging import StagingView
from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, require_session_id, validate_request

from .models import UpdateLimitsRequest

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Update ``max_files`` and/or ``max_dimension`` for the session.

    The capacity cannot drop below the number of images already staged.

    Args:
        event: Action event carrying the session id and the new limits
        context: Invocation context

    Returns:
        Response with the updated staging view
    """
    session_id = require_session_id(event)
    request = validate_request(UpdateLimitsRequest, parse_json_body(event))

    session = sessions.get_or_create(session_id)
    session.update_limits(
        max_files=request.max_files,
        max_dimension=request.max_dimension,
    )

    logger.info(
        "Session limits updated",
        extra={
            "session_id": session_id,
            "max_files": session.capacity,
            "max_dimension": session.max_dimension,
        },
    )

    return ResponseBuilder.ok(StagingView.from_session(session).model_dump(mode="json"))
