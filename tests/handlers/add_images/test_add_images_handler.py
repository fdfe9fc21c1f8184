from http import HTTPStatus

from core.session.registry import sessions
from handlers.add_images.handler import handler


def test_add_images_stages_files(action_event, uploaded_file, lambda_context, body_of, session_id) -> None:
    event = action_event({"files": [uploaded_file("a.png"), uploaded_file("b.png")]})

    resp = handler(event, lambda_context)
    body = body_of(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert len(body["admitted"]) == 2
    assert body["dropped"] == 0
    assert body["notice"] is None
    assert body["total_count"] == 2
    assert sessions.get(session_id).store.ids() == body["admitted"]


def test_add_images_skips_non_images(action_event, uploaded_file, lambda_context, body_of) -> None:
    event = action_event(
        {
            "files": [
                uploaded_file("notes.txt", mime_type="text/plain", content=b"hello"),
                uploaded_file("a.png"),
            ]
        }
    )

    body = body_of(handler(event, lambda_context))

    assert len(body["admitted"]) == 1
    assert body["notice"] is None


def test_add_images_reports_capacity_notice(action_event, uploaded_file, lambda_context, body_of, session_id) -> None:
    sessions.get_or_create(session_id).update_limits(max_files=2)
    event = action_event({"files": [uploaded_file(f"{i}.png") for i in range(4)]})

    body = body_of(handler(event, lambda_context))

    assert len(body["admitted"]) == 2
    assert body["dropped"] == 2
    assert body["notice"] == {
        "error": "CAPACITY_EXCEEDED",
        "message": "The limit is 2 images. Increase the limit to add more.",
        "capacity": 2,
        "dropped": 2,
    }


def test_add_images_rejects_invalid_base64(action_event, uploaded_file, lambda_context, body_of) -> None:
    file = uploaded_file("a.png")
    file["content"] = "not-base64!!!"

    resp = handler(action_event({"files": [file]}), lambda_context)
    body = body_of(resp)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY
    assert body["details"]["errors"][0]["message"] == "File must be a valid Base64-encoded string"


def test_add_images_requires_files(action_event, lambda_context) -> None:
    resp = handler(action_event({}), lambda_context)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY


def test_add_images_rejected_while_building(action_event, uploaded_file, lambda_context, body_of, session_id) -> None:
    session = sessions.get_or_create(session_id)
    session.tracker.begin(1)

    resp = handler(action_event({"files": [uploaded_file()]}), lambda_context)

    assert resp["statusCode"] == HTTPStatus.CONFLICT
    assert body_of(resp)["error"] == "BUILD_IN_PROGRESS"
    assert len(session.store) == 0
