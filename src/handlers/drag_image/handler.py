"""
Session action that feeds drag gestures to the reorder controller.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.session.registry import sessions
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, require_session_id, validate_request

from .models import DragImageRequest, DragImageResponse

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Handle one drag gesture.

    ``start`` captures the source row, ``drop`` moves it onto the target row
    with a single reorder, ``cancel`` forgets the source. Gestures are inert
    while a build is running.

    Args:
        event: Action event carrying the session id and the gesture
        context: Invocation context

    Returns:
        Response with whether the gesture took effect and the current order
    """
    session_id = require_session_id(event)
    request = validate_request(DragImageRequest, parse_json_body(event))

    session = sessions.get(session_id)
    controller = session.reorder_controller

    if request.gesture == "start":
        accepted = controller.drag_start(request.index)
    elif request.gesture == "drop":
        accepted = controller.drop(request.index)
    else:
        controller.cancel()
        accepted = True

    logger.debug(
        "Drag gesture handled",
        extra={
            "session_id": session_id,
            "gesture": request.gesture,
            "index": request.index,
            "accepted": accepted,
        },
    )

    response = DragImageResponse(
        gesture=request.gesture,
        accepted=accepted,
        order=session.store.ids(),
    )
    return ResponseBuilder.ok(response.model_dump())
