"""HTTP API of the feed service."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Flask, Response, jsonify, request

from telegafeed.abstractions import FeedService, FeedSourcesService, LlmService, UsersRepository
from telegafeed.entities import (
    NIL_UUID,
    ArticlePatch,
    FeedSource,
    FeedSourcePatch,
    option_from_nilable,
)

USER_ID_HEADER = "X-UserId"

logger = logging.getLogger(__name__)


class _BindError(ValueError):
    """Raised when a request body cannot be bound to the expected fields."""


def _no_content(status: int) -> Response:
    return Response(status=status)


def _parse_uuid(text: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(text)
    except ValueError:
        return None


def _bind(fields: dict[str, type]) -> dict[str, Any]:
    """Read the JSON body into the named fields; absent and null fields are left out."""
    data = request.get_data()
    if not data:
        return {}
    content_type = request.headers.get("Content-Type", "")
    if not content_type.startswith("application/json"):
        raise _BindError("unsupported media type")
    try:
        payload = json.loads(data)
    except ValueError as exc:
        raise _BindError(f"invalid JSON: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise _BindError("request body is not a JSON object")

    result: dict[str, Any] = {}
    for key, value in payload.items():
        name = key.lower()
        expected = fields.get(name)
        if expected is None:
            continue
        if value is None:
            result.pop(name, None)
            continue
        if not isinstance(value, expected):
            raise _BindError(f"field {key!r} must be of type {expected.__name__}")
        result[name] = value
    return result


def create_app(
    feed_service: FeedService,
    feed_sources_service: FeedSourcesService,
    llm_service: LlmService,
    users_repository: UsersRepository,
) -> Flask:
    """Build the Flask application with every endpoint registered."""
    app = Flask(__name__)

    def authenticated(view: Callable[..., Response]) -> Callable[..., Response]:
        """Require a known user in the X-UserId header and pass it as ``user_id``."""

        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Response:
            user_id = request.headers.get(USER_ID_HEADER, "")
            if not user_id:
                return _no_content(401)
            try:
                user = users_repository.get_user_by_id(user_id)
            except Exception as exc:
                logger.error("failed to look up user %s: %s", user_id, exc)
                return _no_content(500)
            if user is None:
                return _no_content(401)
            return view(user_id, *args, **kwargs)

        return wrapper

    @app.post("/api/feed-sources")
    @authenticated
    def add_feed_source(user_id: str) -> Response:
        try:
            body = _bind({"name": str, "feed_url": str})
        except _BindError as exc:
            logger.warning("failed to bind json to request: %s", exc)
            return _no_content(400)
        source = FeedSource(
            id=NIL_UUID,
            name=body.get("name", ""),
            feed_url=body.get("feed_url", ""),
            disabled=False,
        )
        try:
            feed_sources_service.add_source(user_id, source)
        except Exception as exc:
            logger.error("failed to add feed source: %s", exc)
            return _no_content(500)
        return _no_content(200)

    @app.delete("/api/feed-sources/<source_id>")
    @authenticated
    def delete_feed_source(user_id: str, source_id: str) -> Response:
        parsed = _parse_uuid(source_id)
        if parsed is None:
            return _no_content(400)
        try:
            feed_sources_service.delete_source(user_id, parsed)
        except Exception as exc:
            logger.error("failed to delete feed source: %s", exc)
            return _no_content(500)
        return _no_content(200)

    @app.get("/api/articles/<article_id>/summary")
    @authenticated
    def get_article_summary(user_id: str, article_id: str) -> Response:
        parsed = _parse_uuid(article_id)
        if parsed is None:
            return _no_content(400)
        try:
            summary = llm_service.get_article_summary(user_id, parsed)
        except Exception as exc:
            logger.error("failed to get summary by id: %s", exc)
            return _no_content(500)
        return jsonify(summary.to_json())

    @app.get("/api/feed")
    @authenticated
    def get_feed(user_id: str) -> Response:
        try:
            feed = feed_service.get_feed(user_id)
        except Exception as exc:
            logger.error("failed to fetch feed: %s", exc)
            return _no_content(500)
        return jsonify(feed.to_json())

    @app.get("/api/feed/digest")
    @authenticated
    def get_feed_digest(user_id: str) -> Response:
        try:
            digest = llm_service.get_daily_digest(user_id)
        except Exception as exc:
            logger.error("failed to get digest for user %s: %s", user_id, exc)
            return _no_content(500)
        return jsonify(digest)

    @app.get("/api/feed-sources/<source_id>")
    @authenticated
    def get_feed_source(user_id: str, source_id: str) -> Response:
        parsed = _parse_uuid(source_id)
        if parsed is None:
            return _no_content(400)
        try:
            source = feed_sources_service.get_source(user_id, parsed)
        except Exception:
            return _no_content(404)
        return jsonify(source.to_json())

    @app.get("/api/feed-sources")
    @authenticated
    def get_feed_sources(user_id: str) -> Response:
        try:
            sources = feed_sources_service.get_sources(user_id)
        except Exception as exc:
            logger.error("failed to fetch feed-sources: %s", exc)
            return _no_content(500)
        return jsonify([source.to_json() for source in sources])

    @app.patch("/api/articles/<article_id>")
    @authenticated
    def patch_article(user_id: str, article_id: str) -> Response:
        parsed = _parse_uuid(article_id)
        if parsed is None:
            return _no_content(400)
        try:
            body = _bind({"starred": bool, "read": bool})
        except _BindError:
            logger.warning("failed to bind json to request's model")
            return _no_content(400)
        patch = ArticlePatch(
            starred=option_from_nilable(body.get("starred")),
            read=option_from_nilable(body.get("read")),
        )
        try:
            feed_service.update_article(user_id, parsed, patch)
        except Exception as exc:
            logger.error("failed to update article: %s", exc)
            return _no_content(500)
        return _no_content(200)

    @app.patch("/api/feed-sources/<source_id>")
    @authenticated
    def patch_feed_source(user_id: str, source_id: str) -> Response:
        parsed = _parse_uuid(source_id)
        if parsed is None:
            return _no_content(400)
        try:
            body = _bind({"name": str, "disabled": bool})
        except _BindError as exc:
            logger.warning("failed to bind json to request: %s", exc)
            return _no_content(400)
        patch = FeedSourcePatch(
            name=option_from_nilable(body.get("name")),
            disabled=option_from_nilable(body.get("disabled")),
        )
        try:
            feed_sources_service.update_source(user_id, parsed, patch)
        except Exception as exc:
            logger.warning("failed to update feed source: %s", exc)
            return _no_content(500)
        return _no_content(200)

    @app.post("/api/execute/update-feed")
    def execute_update_feed() -> Response:
        try:
            feed_service.update_feed()
        except Exception as exc:
            logger.error("failed to update feed: %s", exc)
            return _no_content(500)
        return _no_content(200)

    return app