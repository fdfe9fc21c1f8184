"""
Session action serving the preview bytes of one staged image.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.session.registry import sessions
from core.utils.constants import DEFAULT_ARTIFACT_CONTENT_TYPE
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import require_path_param, require_session_id

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Resolve the preview handle of ``image_id`` and return its bytes.

    Returns 404 once the image has been removed, since removal releases the
    preview.
    """
    session_id = require_session_id(event)
    image_id = require_path_param(event, "image_id")

    session = sessions.get(session_id)
    image = session.store.find(image_id)
    content, mime_type = session.previews.resolve(image.preview.url)

    logger.debug(
        "Serving preview",
        extra={"session_id": session_id, "image_id": image_id, "size": len(content)},
    )

    return ResponseBuilder.binary_response(
        content,
        content_type=mime_type or DEFAULT_ARTIFACT_CONTENT_TYPE,
    )
