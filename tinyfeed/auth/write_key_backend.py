from fastapi import Request

from tinyfeed.auth.base import AuthBackend, WriteContext
from tinyfeed.core.config import settings
from tinyfeed.core.errors import MSG_WRITE_KEY_REQUIRED, Unauthorized
from tinyfeed.core.routing import resolve_feed_id



class WriteKeyAuthBackend(AuthBackend):
    """
    Pulls the write key from the request without verifying it; the store
    checks it against the feed's stored hash.
    """

    def __init__(self):
        self.header = settings.WRITE_KEY_HEADER

    async def authenticate(self, request: Request) -> WriteContext:
        feed_id = resolve_feed_id(request.path_params.get("feed_id", ""))

        key = request.headers.get(self.header, "").strip()

        if not key:
            auth = request.headers.get("Authorization", "")
            if auth.startswith("Bearer "):
                key = auth.removeprefix("Bearer ").strip()

        if not key:
            raise Unauthorized(MSG_WRITE_KEY_REQUIRED)

        return WriteContext(feed_id=feed_id, credential=key)
