import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

SESSION_ID = "session-123"


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def session_id() -> str:
    return SESSION_ID


@pytest.fixture
def action_event() -> Callable[..., dict[str, Any]]:
    """
    Build a session action event.

    Usage:
        event = action_event({"index": 0})
        event = action_event(image_id="abc", session_id="other")
    """

    def _make(
        body: dict[str, Any] | None = None,
        *,
        session_id: str = SESSION_ID,
        **path_params: str,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "pathParameters": {"session_id": session_id, **path_params},
            "headers": {"Content-Type": "application/json"},
        }
        if body is not None:
            event["body"] = json.dumps(body)
        return event

    return _make


@pytest.fixture
def uploaded_file(image_bytes) -> Callable[..., dict[str, Any]]:
    """Picker / drop payload for one file."""

    def _make(
        name: str = "photo.png",
        mime_type: str = "image/png",
        content: bytes | None = None,
    ) -> dict[str, Any]:
        data = image_bytes() if content is None else content
        return {
            "name": name,
            "type": mime_type,
            "size": len(data),
            "last_modified": 1_700_000_000_000,
            "content": base64.b64encode(data).decode("utf-8"),
        }

    return _make


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}
    return json.loads(body)


@pytest.fixture
def body_of() -> Callable[[dict[str, Any]], dict[str, Any]]:
    return parse_body
