#!/usr/bin/env python3
"""
Build a photo deck from local image files through the session actions.

Run:
    python scripts/make_deck.py photos/*.jpg \
      --output-dir out \
      --ratio 4:3 --layout fit --split-every 20
"""

import argparse
import base64
import json
import mimetypes
import os
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any

from aws_lambda_powertools import Logger

from core.utils.constants import (
    ALLOWED_LAYOUTS,
    ALLOWED_RATIOS,
    DEFAULT_LAYOUT,
    DEFAULT_RATIO,
    DEFAULT_TITLE_TEXT,
    ENV_CONVERSION_URL,
)
from core.utils.mime import detect_mime_type
from core.utils.time import epoch_millis
from handlers.add_images.handler import handler as add_images
from handlers.build_deck.handler import handler as build_deck
from handlers.end_session.handler import handler as end_session
from handlers.update_limits.handler import handler as update_limits

logger = Logger(service="photodeck")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn local photos into a slide deck")

    parser.add_argument("files", nargs="+", type=Path, help="Image files, in slide order")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory the deck (or zip of decks) is written to",
    )
    parser.add_argument("--ratio", choices=ALLOWED_RATIOS, default=DEFAULT_RATIO)
    parser.add_argument("--layout", choices=ALLOWED_LAYOUTS, default=DEFAULT_LAYOUT)
    parser.add_argument(
        "--no-title-slide",
        dest="title_slide",
        action="store_false",
        help="Do not prepend a title slide",
    )
    parser.add_argument("--title", "--title-text", dest="title_text", default=DEFAULT_TITLE_TEXT)
    parser.add_argument(
        "--split-every",
        type=int,
        default=0,
        help="Images per deck; 0 builds a single deck",
    )
    parser.add_argument("--max-files", type=int, default=None)
    parser.add_argument("--max-dimension", type=int, default=None)
    parser.add_argument(
        "--service-url",
        default=None,
        help=f"Conversion service base url (overrides {ENV_CONVERSION_URL})",
    )

    return parser.parse_args()


def guess_mime_type(path: Path, data: bytes) -> str:
    guessed, _ = mimetypes.guess_type(path.name)
    if guessed:
        return guessed

    try:
        return detect_mime_type(data)
    except ValueError:
        return ""


def describe_file(path: Path) -> dict[str, Any]:
    data = path.read_bytes()
    mime_type = guess_mime_type(path, data)
    modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    return {
        "name": path.name,
        "type": mime_type,
        "size": len(data),
        "last_modified": epoch_millis(modified),
        "content": base64.b64encode(data).decode("utf-8"),
    }


def action_event(session_id: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
    event: dict[str, Any] = {"pathParameters": {"session_id": session_id}}
    if body is not None:
        event["body"] = json.dumps(body)
    return event


def _check(response: dict[str, Any], action: str) -> dict[str, Any]:
    if response["statusCode"] >= 400:
        body = json.loads(response.get("body") or "{}")
        logger.error(
            f"{action} failed",
            extra={"status": response["statusCode"], "error": body.get("message")},
        )
        sys.exit(1)
    return response


def make_deck() -> None:
    args = parse_args()
    if args.service_url:
        os.environ[ENV_CONVERSION_URL] = args.service_url

    session_id = f"cli-{uuid.uuid4().hex}"
    context = SimpleNamespace(aws_request_id=session_id)

    missing = [str(path) for path in args.files if not path.is_file()]
    if missing:
        logger.error("Image file not found", extra={"paths": missing})
        sys.exit(1)

    try:
        limits = {
            key: value
            for key, value in (
                ("max_files", args.max_files),
                ("max_dimension", args.max_dimension),
            )
            if value is not None
        }
        if limits:
            _check(update_limits(action_event(session_id, limits), context), "Update limits")

        response = _check(
            add_images(
                action_event(
                    session_id, {"files": [describe_file(path) for path in args.files]}
                ),
                context,
            ),
            "Add images",
        )
        staged = json.loads(response["body"])
        if staged.get("notice"):
            logger.warning(staged["notice"]["message"])

        logger.info(
            "Building deck",
            extra={"images": staged["total_count"], "split_every": args.split_every},
        )

        response = _check(
            build_deck(
                action_event(
                    session_id,
                    {
                        "ratio": args.ratio,
                        "layout": args.layout,
                        "title_slide": args.title_slide,
                        "title_text": args.title_text,
                        "split_every": args.split_every,
                    },
                ),
                context,
            ),
            "Build",
        )

        disposition = response["headers"]["Content-Disposition"]
        filename = disposition.split("filename=", 1)[1].strip('"')

        args.output_dir.mkdir(parents=True, exist_ok=True)
        target = args.output_dir / filename
        target.write_bytes(base64.b64decode(response["body"]))

        logger.info("Deck written", extra={"path": str(target)})

    finally:
        end_session(action_event(session_id), context)


if __name__ == "__main__":
    make_deck()
