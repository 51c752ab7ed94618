from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from tinyfeed.api.schemas import Ack, CreateFeedResponse, FeedPublic, Post, PostCreate, ProfilePatch
from tinyfeed.auth.base import WriteContext
from tinyfeed.core.routing import resolve_feed_id, resolve_post_id
from tinyfeed.core.security import get_store, write_key_required
from tinyfeed.services.feed_store import FeedStore



router = APIRouter(tags=["api:feed"])

@router.post("/feed", response_model=CreateFeedResponse)
async def create_feed(store: FeedStore = Depends(get_store)):
    """
    Create an empty feed. The write key in the response is never shown again.
    """
    return await store.create_feed()

@router.get("/feed/{feed_id}", response_model=FeedPublic)
async def get_feed(feed_id: str, store: FeedStore = Depends(get_store)):
    return await store.read_public(resolve_feed_id(feed_id))

@router.patch("/feed/{feed_id}", response_model=Ack)
async def update_profile(
    body: ProfilePatch,
    ctx: WriteContext = Depends(write_key_required),
    store: FeedStore = Depends(get_store),
):
    await store.update_profile(ctx.feed_id, ctx.credential, body)
    return Ack()

@router.post("/feed/{feed_id}/post", response_model=Post)
async def create_post(
    body: PostCreate,
    ctx: WriteContext = Depends(write_key_required),
    store: FeedStore = Depends(get_store),
):
    return await store.create_post(ctx.feed_id, ctx.credential, body)

@router.delete("/feed/{feed_id}/post/{post_id}", response_model=Ack)
async def delete_post(
    post_id: str,
    ctx: WriteContext = Depends(write_key_required),
    store: FeedStore = Depends(get_store),
):
    await store.delete_post(ctx.feed_id, ctx.credential, resolve_post_id(post_id))
    return Ack()

@router.get("/feed/{feed_id}/export")
async def export_feed(
    format: Optional[str] = Query(default="json"),
    ctx: WriteContext = Depends(write_key_required),
    store: FeedStore = Depends(get_store),
):
    doc = await store.export(ctx.feed_id, ctx.credential, format)
    return Response(
        content=doc.body,
        media_type=doc.media_type,
        headers={"Content-Disposition": doc.content_disposition},
    )
