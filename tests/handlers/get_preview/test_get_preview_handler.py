import base64
from http import HTTPStatus

from core.session.registry import sessions
from handlers.get_preview.handler import handler


def test_preview_returns_original_bytes(action_event, lambda_context, session_id, source_file) -> None:
    session = sessions.get_or_create(session_id)
    result = session.add_files([source_file("a.png")])
    image = result.admitted[0]

    resp = handler(action_event(image_id=image.image_id), lambda_context)

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["isBase64Encoded"] is True
    assert resp["headers"]["Content-Type"] == "image/png"
    assert base64.b64decode(resp["body"]) == image.source.data


def test_preview_gone_after_remove(action_event, lambda_context, session_id, source_file) -> None:
    session = sessions.get_or_create(session_id)
    image = session.add_files([source_file("a.png")]).admitted[0]
    session.remove(0)

    resp = handler(action_event(image_id=image.image_id), lambda_context)

    assert resp["statusCode"] == HTTPStatus.NOT_FOUND


def test_preview_requires_image_id(action_event, lambda_context, session_id) -> None:
    sessions.get_or_create(session_id)

    resp = handler(action_event(), lambda_context)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY
