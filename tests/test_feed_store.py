import asyncio
import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tinyfeed.api.schemas import PostCreate, ProfilePatch
from tinyfeed.core.errors import AlreadyInitialized, FeedNotFound, InternalError, InvalidInput, PostNotFound, RateLimited, Unauthorized
from tinyfeed.services.feed_store import FeedStore, feed_key

KEY = "secretkey123"


@pytest.fixture
async def feed_id(store):
    await store.initialize("feed2345", KEY)
    return "feed2345"


async def test_initialize_persists_hashed_key(store, fake_redis, feed_id):
    raw = json.loads(await fake_redis.get(feed_key(feed_id)))
    assert raw["id"] == feed_id
    assert raw["writeKeyHash"].startswith("scrypt$")
    assert KEY not in raw["writeKeyHash"]
    assert raw["posts"] == []


async def test_double_initialize_is_rejected(store, feed_id):
    with pytest.raises(AlreadyInitialized):
        await store.initialize(feed_id, "otherkey1234")
    # the original key still works
    await store.update_profile(feed_id, KEY, ProfilePatch(name="still mine"))


async def test_create_feed_returns_credentials(store):
    created = await store.create_feed()
    assert len(created.id) == 8
    assert len(created.write_key) == 12
    public = await store.read_public(created.id)
    assert public.id == created.id


async def test_create_feed_retries_on_id_collision(fake_redis, clock):
    ids = iter(["writekey0000", "taken222", "fresh333"])
    store = FeedStore(fake_redis, clock=clock, id_factory=lambda n: next(ids))
    await store.initialize("taken222", "whatever1234")

    created = await store.create_feed()
    assert created.id == "fresh333"


async def test_missing_feed(store):
    with pytest.raises(FeedNotFound):
        await store.read_public("nothere1")
    with pytest.raises(FeedNotFound):
        await store.create_post("nothere1", KEY, PostCreate(content="hi"))


async def test_wrong_key_is_unauthorized_everywhere(store, feed_id):
    with pytest.raises(Unauthorized):
        await store.update_profile(feed_id, "wrongkey1234", ProfilePatch(name="x"))
    with pytest.raises(Unauthorized):
        await store.create_post(feed_id, "wrongkey1234", PostCreate(content="x"))
    with pytest.raises(Unauthorized):
        await store.delete_post(feed_id, "wrongkey1234", "abcdef")
    with pytest.raises(Unauthorized):
        await store.export(feed_id, "wrongkey1234", "json")

    public = await store.read_public(feed_id)
    assert public.name == ""
    assert public.posts == []


async def test_post_lifecycle(store, clock, feed_id):
    post = await store.create_post(feed_id, KEY, PostCreate(content="hello", url="https://example.com"))
    public = await store.read_public(feed_id)
    assert [p.id for p in public.posts] == [post.id]
    assert public.posts[0].timestamp == clock.now

    await store.delete_post(feed_id, KEY, post.id)
    assert (await store.read_public(feed_id)).posts == []

    with pytest.raises(PostNotFound):
        await store.delete_post(feed_id, KEY, post.id)


async def test_second_post_within_window_is_rate_limited(store, clock, feed_id):
    await store.create_post(feed_id, KEY, PostCreate(content="first"))

    clock.advance(20_000)
    with pytest.raises(RateLimited) as exc:
        await store.create_post(feed_id, KEY, PostCreate(content="second"))
    assert exc.value.retry_after == 40

    clock.advance(40_000)
    await store.create_post(feed_id, KEY, PostCreate(content="second"))
    assert [p.content for p in (await store.read_public(feed_id)).posts] == ["second", "first"]


async def test_rejected_post_does_not_touch_rate_window(store, clock, feed_id):
    with pytest.raises(InvalidInput):
        await store.create_post(feed_id, KEY, PostCreate(content="   "))
    await store.create_post(feed_id, KEY, PostCreate(content="real"))


async def test_concurrent_posts_on_same_feed_are_serialized(store, feed_id):
    results = await asyncio.gather(
        store.create_post(feed_id, KEY, PostCreate(content="a")),
        store.create_post(feed_id, KEY, PostCreate(content="b")),
        return_exceptions=True,
    )
    accepted = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, RateLimited)]
    assert len(accepted) == 1
    assert len(rejected) == 1
    assert len((await store.read_public(feed_id)).posts) == 1


async def test_different_feeds_are_independent(store):
    await store.initialize("feedaaaa", KEY)
    await store.initialize("feedbbbb", KEY)
    await asyncio.gather(
        store.create_post("feedaaaa", KEY, PostCreate(content="a")),
        store.create_post("feedbbbb", KEY, PostCreate(content="b")),
    )
    assert len((await store.read_public("feedaaaa")).posts) == 1
    assert len((await store.read_public("feedbbbb")).posts) == 1


async def test_export_markdown(store, feed_id):
    await store.update_profile(feed_id, KEY, ProfilePatch(name="Ada", about="notes"))
    await store.create_post(feed_id, KEY, PostCreate(content="first thought", url="https://example.com"))

    doc = await store.export(feed_id, KEY, "md")
    lines = doc.body.split("\n")
    assert lines[0] == "# Ada"
    assert "*notes*" in lines
    assert "first thought" in lines
    assert "→ https://example.com" in lines
    assert doc.filename == f"{feed_id}.md"


async def test_storage_failure_is_internal_error(clock):
    class BrokenRedis:
        async def get(self, key):
            raise RedisConnectionError("down")

    with pytest.raises(InternalError):
        await FeedStore(BrokenRedis(), clock=clock).read_public("feed2345")
