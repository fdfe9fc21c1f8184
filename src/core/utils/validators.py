"""Request validation utilities."""

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel

from core.models.errors import ValidationError
from core.utils.constants import SESSION_ID_PATTERN

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for action responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input (which may hold whole base64 files)
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        # Friendly rewrites for common cases
        msg_lower = msg.lower()
        if "base64" in msg_lower:
            msg = "File must be a valid Base64-encoded string"
        elif "field required" in msg_lower:
            msg = "This field is required"
        elif "input should be" in msg_lower and "type" in err.get("type", ""):
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: Translated into a 422 by the action decorator
    """
    return model.model_validate(data)


def parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON body of an action event (empty body means ``{}``).

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValidationError(message="Invalid JSON body") from exc

    if not isinstance(body, dict):
        raise ValidationError(message="JSON body must be an object")
    return body


def require_path_param(event: dict[str, Any], name: str) -> str:
    """Return a required path parameter.

    Raises:
        ValidationError: If the parameter is missing or empty
    """
    value = (event.get("pathParameters") or {}).get(name)
    if not value or not str(value).strip():
        raise ValidationError(
            message=f"Missing required path parameter: {name}",
            details={"parameter": name},
        )
    return str(value).strip()


def require_session_id(event: dict[str, Any]) -> str:
    """
    Raises:
        ValidationError: If the session id is missing or malformed
    """
    session_id = require_path_param(event, "session_id")
    if not re.match(SESSION_ID_PATTERN, session_id) or len(session_id) > 128:
        raise ValidationError(
            message="Invalid session id",
            details={"parameter": "session_id"},
        )
    return session_id
