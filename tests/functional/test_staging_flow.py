import base64
import json
from http import HTTPStatus
from types import SimpleNamespace
from typing import Any

from handlers.add_images.handler import handler as add_images
from handlers.drag_image.handler import handler as drag_image
from handlers.end_session.handler import handler as end_session
from handlers.get_staging.handler import handler as get_staging
from handlers.remove_image.handler import handler as remove_image
from handlers.update_limits.handler import handler as update_limits

SESSION_ID = "flow-session"


def event(body: dict[str, Any] | None = None) -> dict[str, Any]:
    result: dict[str, Any] = {"pathParameters": {"session_id": SESSION_ID}}
    if body is not None:
        result["body"] = json.dumps(body)
    return result


def test_full_staging_lifecycle(image_bytes) -> None:
    context = SimpleNamespace(aws_request_id="flow")
    data = base64.b64encode(image_bytes()).decode()
    files = [
        {"name": name, "type": "image/png", "size": 10, "last_modified": 0, "content": data}
        for name in ("a.png", "b.png", "c.png", "d.png")
    ]

    assert update_limits(event({"max_files": 3}), context)["statusCode"] == HTTPStatus.OK

    added = json.loads(add_images(event({"files": files}), context)["body"])
    assert added["dropped"] == 1
    assert added["notice"]["capacity"] == 3

    drag_image(event({"gesture": "start", "index": 2}), context)
    drag_image(event({"gesture": "drop", "index": 0}), context)
    remove_image(event({"index": 1}), context)

    view = json.loads(get_staging(event(), context)["body"])
    assert [image["name"] for image in view["images"]] == ["c.png", "b.png"]
    assert view["message"] == "The limit is 3 images. Increase the limit to add more."

    assert end_session(event(), context)["statusCode"] == HTTPStatus.NO_CONTENT
    assert end_session(event(), context)["statusCode"] == HTTPStatus.NOT_FOUND
