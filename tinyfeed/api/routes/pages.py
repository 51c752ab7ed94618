from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from tinyfeed.core.errors import FeedNotFound
from tinyfeed.core.routing import base_url, resolve_feed_id
from tinyfeed.core.security import get_store
from tinyfeed.pages.client import contacts_page, home_page, restore_page
from tinyfeed.pages.feed import feed_page
from tinyfeed.pages.landing import landing_page
from tinyfeed.pages.not_found import not_found_page
from tinyfeed.services.feed_store import FeedStore



router = APIRouter(tags=["public:pages"], default_response_class=HTMLResponse)

def not_found_response() -> HTMLResponse:
    return HTMLResponse(not_found_page(), status_code=404)

@router.get("/")
async def landing():
    return landing_page()

@router.get("/home")
async def home():
    return home_page()

@router.get("/contacts")
async def contacts():
    return contacts_page()

@router.get("/import")
async def restore():
    return restore_page()

@router.get("/f/{feed_id}")
async def feed(feed_id: str, request: Request, store: FeedStore = Depends(get_store)):
    try:
        data = await store.read_public(resolve_feed_id(feed_id))
    except FeedNotFound:
        return not_found_response()
    return feed_page(data, base_url(request))
