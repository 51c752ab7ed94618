"""
Feed error taxonomy.

Every failure the store can produce is a FeedError subclass carrying a
machine-readable ``kind`` and an HTTP status. Routes never build error
responses themselves; the handlers registered in ``create_app`` translate
these into ``{"error": ..., "kind": ...}`` payloads.
"""
from __future__ import annotations

from typing import Any

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_TOO_MANY_REQUESTS = 429
STATUS_INTERNAL_ERROR = 500

MSG_FEED_NOT_FOUND = "Feed not found"
MSG_POST_NOT_FOUND = "Post not found"
MSG_UNAUTHORIZED = "Unauthorized"
MSG_WRITE_KEY_REQUIRED = "Write key required"
MSG_CONTENT_REQUIRED = "Content required"
MSG_INVALID_BODY = "Invalid request body"
MSG_ALREADY_INITIALIZED = "Feed already exists"
MSG_INTERNAL = "Internal error"


class FeedError(Exception):
    kind = "internal"
    status_code = STATUS_INTERNAL_ERROR
    default_message = MSG_INTERNAL

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def headers(self) -> dict[str, str]:
        return {}

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class FeedNotFound(FeedError):
    kind = "not_found"
    status_code = STATUS_NOT_FOUND
    default_message = MSG_FEED_NOT_FOUND


class PostNotFound(FeedNotFound):
    default_message = MSG_POST_NOT_FOUND


class Unauthorized(FeedError):
    kind = "unauthorized"
    status_code = STATUS_UNAUTHORIZED
    default_message = MSG_UNAUTHORIZED


class InvalidInput(FeedError):
    kind = "invalid_input"
    status_code = STATUS_BAD_REQUEST
    default_message = MSG_INVALID_BODY


class AlreadyInitialized(FeedError):
    kind = "conflict"
    status_code = STATUS_CONFLICT
    default_message = MSG_ALREADY_INITIALIZED


class InternalError(FeedError):
    pass


class RateLimited(FeedError):
    kind = "rate_limited"
    status_code = STATUS_TOO_MANY_REQUESTS

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Wait {retry_after} seconds.")

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["retryAfter"] = self.retry_after
        return payload
