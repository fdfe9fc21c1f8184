from http import HTTPStatus

from core.session.registry import sessions
from handlers.end_session.handler import handler


def test_end_session_releases_everything(action_event, lambda_context, session_id, source_file) -> None:
    session = sessions.get_or_create(session_id)
    session.add_files([source_file("a.png"), source_file("b.png")])

    resp = handler(action_event(), lambda_context)

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert session_id not in sessions
    assert session.closed
    assert len(session.previews) == 0


def test_end_unknown_session(action_event, lambda_context) -> None:
    resp = handler(action_event(session_id="nobody"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.NOT_FOUND
