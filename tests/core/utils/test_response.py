import base64
import json
from http import HTTPStatus
from typing import Any, cast

import pytest

from core.utils.response import ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}

    return cast(dict[str, Any], json.loads(body))


def test_ok_response() -> None:
    resp = ResponseBuilder.ok({"foo": "bar"}, request_id="req-1")
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["headers"]["Content-Type"] == "application/json"
    assert parsed["foo"] == "bar"
    assert parsed["request_id"] == "req-1"


def test_no_content_response() -> None:
    resp = ResponseBuilder.no_content()

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""


@pytest.mark.parametrize(
    "func,status,error_name",
    [
        (ResponseBuilder.bad_request, HTTPStatus.BAD_REQUEST, "BAD_REQUEST"),
        (ResponseBuilder.not_found, HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (ResponseBuilder.conflict, HTTPStatus.CONFLICT, "CONFLICT"),
        (ResponseBuilder.bad_gateway, HTTPStatus.BAD_GATEWAY, "BAD_GATEWAY"),
        (
            ResponseBuilder.internal_error,
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
        ),
    ],
)
def test_error_responses_use_explicit_message(func, status, error_name) -> None:
    resp = func("Something happened")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error_name
    assert parsed["message"] == "Something happened"
    assert "timestamp" in parsed


def test_error_response_carries_code_and_details() -> None:
    resp = ResponseBuilder.conflict("Busy", error="BUILD_IN_PROGRESS", request_id="req-9")
    parsed = parse_body(resp)

    assert parsed["error"] == "BUILD_IN_PROGRESS"
    assert parsed["request_id"] == "req-9"


def test_validation_error_defaults_to_validation_code() -> None:
    resp = ResponseBuilder.validation_error(
        message="Invalid request payload",
        details={"errors": [{"field": "index", "message": "This field is required"}]},
    )
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY
    assert parsed["error"] == "VALIDATION_FAILED"
    assert parsed["details"]["errors"][0]["field"] == "index"


def test_binary_response_without_filename() -> None:
    resp = ResponseBuilder.binary_response(b"\x89PNGdata", content_type="image/png")

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["isBase64Encoded"] is True
    assert base64.b64decode(resp["body"]) == b"\x89PNGdata"
    assert resp["headers"]["Content-Type"] == "image/png"
    assert resp["headers"]["Content-Length"] == "8"
    assert "Content-Disposition" not in resp["headers"]


def test_binary_response_as_attachment() -> None:
    resp = ResponseBuilder.binary_response(
        b"PK",
        content_type="application/zip",
        filename="photos.zip",
        headers={"Cache-Control": "no-store"},
    )

    assert resp["headers"]["Content-Disposition"] == 'attachment; filename="photos.zip"'
    assert resp["headers"]["Cache-Control"] == "no-store"
