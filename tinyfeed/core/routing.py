import re
from fastapi import Request

from tinyfeed.core.config import settings
from tinyfeed.core.errors import FeedNotFound, PostNotFound

ID_PATTERN = re.compile(r"[A-Za-z0-9]+")



def resolve_feed_id(raw: str) -> str:
    """
    Map a path segment to the key of exactly one feed. Ids are generated
    lowercase and matched case-insensitively.
    """
    if not raw or not ID_PATTERN.fullmatch(raw):
        raise FeedNotFound()
    return raw.lower()

def resolve_post_id(raw: str) -> str:
    if not raw or not ID_PATTERN.fullmatch(raw):
        raise PostNotFound()
    return raw.lower()

def base_url(request: Request) -> str:
    if settings.PUBLIC_BASE_URL:
        return settings.PUBLIC_BASE_URL.rstrip("/")
    return f"{request.url.scheme}://{request.url.netloc}"
