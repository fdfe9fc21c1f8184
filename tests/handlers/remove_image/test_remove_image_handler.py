from http import HTTPStatus

from core.session.registry import sessions
from handlers.remove_image.handler import handler


def stage(session_id, source_file) -> None:
    sessions.get_or_create(session_id).add_files(
        [source_file("a.png"), source_file("b.png"), source_file("c.png")]
    )


def test_remove_image(action_event, lambda_context, body_of, session_id, source_file) -> None:
    stage(session_id, source_file)

    resp = handler(action_event({"index": 1}), lambda_context)
    body = body_of(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert [image["name"] for image in body["images"]] == ["a.png", "c.png"]
    assert body["total_count"] == 2


def test_remove_image_out_of_range(action_event, lambda_context, session_id, source_file) -> None:
    stage(session_id, source_file)

    resp = handler(action_event({"index": 5}), lambda_context)

    assert resp["statusCode"] == HTTPStatus.NOT_FOUND


def test_remove_image_unknown_session(action_event, lambda_context) -> None:
    resp = handler(action_event({"index": 0}, session_id="nobody"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.NOT_FOUND


def test_remove_image_requires_integer_index(action_event, lambda_context, session_id, source_file) -> None:
    stage(session_id, source_file)

    resp = handler(action_event({"index": "1"}), lambda_context)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY
