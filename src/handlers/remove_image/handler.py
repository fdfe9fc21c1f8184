"""
Session action that removes one staged image.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.models.staging import StagingView
from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, require_session_id, validate_request

from .models import RemoveImageRequest

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Remove the image at ``index`` and release its preview.

    Rejected with 409 while a build is running and with 404 for a position
    that holds no image.

    Args:
        event: Action event carrying the session id and ``{"index": n}``
        context: Invocation context

    Returns:
        Response with the updated staging view
    """
    session_id = require_session_id(event)
    request = validate_request(RemoveImageRequest, parse_json_body(event))

    session = sessions.get(session_id)
    removed = session.remove(request.index)

    logger.info(
        "Staged image removed",
        extra={
            "session_id": session_id,
            "image_id": removed.image_id,
            "index": request.index,
        },
    )

    return ResponseBuilder.ok(StagingView.from_session(session).model_dump(mode="json"))
