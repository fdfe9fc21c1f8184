"""
Session action that builds the deck from the staged images.
"""

import asyncio
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.session.registry import sessions
from core.utils.constants import (
    ERROR_CODE_BUILD_IN_PROGRESS,
    ERROR_CODE_CONVERSION_FAILED,
    ERROR_CODE_DECODE_FAILED,
    ERROR_CODE_NO_STAGED_IMAGES,
)
from core.utils.decorators import session_action_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, require_session_id, validate_request

from .models import BuildDeckRequest
from .service import BuildOrchestrator

logger = Logger(UTC=True)


@session_action_handler
def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Build the deck and return it as a download.

    The staged images are transcoded in slide order, sent to the conversion
    service with the presentation options, and the artifact comes back as an
    attachment named ``photos.zip`` for split builds or ``photos.pptx``
    otherwise. The staged images are kept, so a failed build can be retried.

    Args:
        event: Action event carrying the session id and the deck options
        context: Invocation context

    Returns:
        Binary attachment response, or an error response for a failed build
    """
    session_id = require_session_id(event)
    request = validate_request(BuildDeckRequest, parse_json_body(event))

    logger.info(
        "Received build request",
        extra={
            "session_id": session_id,
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    session = sessions.get(session_id)
    orchestrator = BuildOrchestrator(session)
    try:
        result = asyncio.run(orchestrator.build(request.to_options()))
    finally:
        orchestrator.close()

    if result is None:
        if session.busy:
            return ResponseBuilder.conflict(
                "A build is already in progress",
                error=ERROR_CODE_BUILD_IN_PROGRESS,
            )
        return ResponseBuilder.validation_error(
            message="Add at least one image before building",
            error=ERROR_CODE_NO_STAGED_IMAGES,
        )

    if result.artifact is not None:
        artifact = result.artifact
        return ResponseBuilder.binary_response(
            artifact.content,
            content_type=artifact.content_type,
            filename=artifact.filename,
        )

    message = result.message or ""
    if result.error_code == ERROR_CODE_DECODE_FAILED:
        return ResponseBuilder.validation_error(message=message, error=result.error_code)

    if result.error_code == ERROR_CODE_CONVERSION_FAILED:
        return ResponseBuilder.bad_gateway(message, error=result.error_code)

    return ResponseBuilder.error(
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        error=result.error_code,
        message=message,
    )
