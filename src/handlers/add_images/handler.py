"""
Session action that stages picked or dropped files.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, require_session_id, validate_request

from .models import AddImagesRequest, AddImagesResponse, CapacityNotice

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Handle a batch of files from the picker or a drop event.

    Non-image files are skipped silently. When the batch does not fit under
    the session's capacity, the files that fit are staged and the response
    carries a capacity notice.

    Expected event structure:
    {
        "pathParameters": {"session_id": "..."},
        "body": "{\"files\": [{\"name\", \"type\", \"size\", \"last_modified\", \"content\"}]}"
    }

    Args:
        event: Action event carrying the session id and the batch
        context: Invocation context

    Returns:
        Response with the admitted identifiers and any capacity notice
    """
    session_id = require_session_id(event)
    request = validate_request(AddImagesRequest, parse_json_body(event))

    logger.info(
        "Received add images request",
        extra={
            "session_id": session_id,
            "files": len(request.files),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    session = sessions.get_or_create(session_id)
    result = session.add_files(uploaded.to_source() for uploaded in request.files)

    notice = None
    if result.notice is not None:
        notice = CapacityNotice(
            error=result.notice.error_code,
            message=result.notice.message,
            capacity=result.notice.details["capacity"],
            dropped=result.notice.details["dropped"],
        )

    response = AddImagesResponse(
        admitted=[image.image_id for image in result.admitted],
        dropped=result.dropped,
        notice=notice,
        total_count=len(session.store),
    )

    return ResponseBuilder.ok(response.model_dump())
