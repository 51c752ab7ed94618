from fastapi import Depends, Request

from tinyfeed.auth.base import AuthBackend, WriteContext
from tinyfeed.auth.write_key_backend import WriteKeyAuthBackend
from tinyfeed.core.errors import MSG_WRITE_KEY_REQUIRED, Unauthorized
from tinyfeed.services.feed_store import FeedStore



def get_auth_backend() -> AuthBackend:
    return WriteKeyAuthBackend()

async def write_key_required(ctx: WriteContext = Depends(get_auth_backend().authenticate)) -> WriteContext:
    if not ctx or not ctx.credential:
        raise Unauthorized(MSG_WRITE_KEY_REQUIRED)
    return ctx


def get_store(request: Request) -> FeedStore:
    return request.app.state.store
