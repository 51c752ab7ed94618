from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from tinyfeed.core.config import settings
from tinyfeed.core.errors import FeedNotFound
from tinyfeed.core.routing import base_url, resolve_feed_id
from tinyfeed.core.security import get_store
from tinyfeed.formats.json_feed import render_json_feed
from tinyfeed.formats.rss import render_rss
from tinyfeed.services.feed_store import FeedStore



router = APIRouter(tags=["public:formats"])

def _cache_headers() -> dict:
    return {"Cache-Control": f"public, max-age={settings.FEED_CACHE_SECONDS}"}

def _not_found() -> Response:
    return PlainTextResponse(FeedNotFound.default_message, status_code=FeedNotFound.status_code)

@router.get("/f/{feed_id}.rss")
async def rss(feed_id: str, request: Request, store: FeedStore = Depends(get_store)):
    try:
        feed = await store.read_public(resolve_feed_id(feed_id))
    except FeedNotFound:
        return _not_found()
    return Response(
        content=render_rss(feed, base_url(request)),
        media_type="application/rss+xml; charset=utf-8",
        headers=_cache_headers(),
    )

@router.get("/f/{feed_id}.json")
async def json_feed(feed_id: str, request: Request, store: FeedStore = Depends(get_store)):
    try:
        feed = await store.read_public(resolve_feed_id(feed_id))
    except FeedNotFound:
        return _not_found()
    return Response(
        content=render_json_feed(feed, base_url(request)),
        media_type="application/feed+json; charset=utf-8",
        headers=_cache_headers(),
    )
