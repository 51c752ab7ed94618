import asyncio
import logging
from typing import Callable, Optional, TypeVar

from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from tinyfeed.api.schemas import CreateFeedResponse, FeedPublic, FeedRecord, Post, PostCreate, ProfilePatch
from tinyfeed.core.config import settings
from tinyfeed.core.errors import AlreadyInitialized, FeedNotFound, InternalError
from tinyfeed.core.hashing import hash_write_key
from tinyfeed.services import feed
from tinyfeed.utils.ids import generate_id, now_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREATE_ATTEMPTS = 5



def feed_key(feed_id: str) -> str:
    return f"{settings.FEED_KEY_PREFIX}{feed_id}"

class FeedStore:
    """
    Durable state for feeds, one JSON record per feed id.

    Mutations are read-modify-write cycles under WATCH/MULTI on the feed's
    key, so two writers on the same id never interleave (the loser retries)
    while different ids never contend.
    """

    def __init__(
        self,
        r: Redis,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[int], str] = generate_id,
    ):
        self.redis = r
        self.clock = clock
        self.id_factory = id_factory

    async def _load(self, feed_id: str) -> FeedRecord:
        try:
            raw = await self.redis.get(feed_key(feed_id))
        except RedisError as exc:
            logger.exception("Failed to load feed=%s", feed_id)
            raise InternalError() from exc
        if raw is None:
            raise FeedNotFound()
        return FeedRecord.model_validate_json(raw)

    async def _mutate(
        self,
        feed_id: str,
        credential: Optional[str],
        apply: Callable[[FeedRecord, int], T],
    ) -> T:
        key = feed_key(feed_id)
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                for attempt in range(settings.STORE_MAX_RETRIES):
                    try:
                        await pipe.watch(key)
                        raw = await pipe.get(key)
                        if raw is None:
                            raise FeedNotFound()
                        record = FeedRecord.model_validate_json(raw)
                        await asyncio.to_thread(feed.authorize, record, credential)

                        result = apply(record, self.clock())

                        pipe.multi()
                        pipe.set(key, record.model_dump_json(by_alias=True))
                        await pipe.execute()
                        return result
                    except WatchError:
                        logger.debug("Concurrent write on feed=%s, retry %s", feed_id, attempt + 1)
        except RedisError as exc:
            logger.exception("Storage error on feed=%s", feed_id)
            raise InternalError() from exc

        logger.error("Gave up writing feed=%s after %s retries", feed_id, settings.STORE_MAX_RETRIES)
        raise InternalError()

    async def initialize(self, feed_id: str, write_key: str) -> None:
        write_key_hash = await asyncio.to_thread(hash_write_key, write_key)
        record = feed.new_record(feed_id, write_key_hash, self.clock())
        try:
            created = await self.redis.set(
                feed_key(feed_id), record.model_dump_json(by_alias=True), nx=True
            )
        except RedisError as exc:
            logger.exception("Failed to initialize feed=%s", feed_id)
            raise InternalError() from exc
        if not created:
            raise AlreadyInitialized()

    async def create_feed(self) -> CreateFeedResponse:
        """Generate an id and write key and persist an empty feed under them."""
        write_key = self.id_factory(settings.WRITE_KEY_LENGTH)
        for _ in range(CREATE_ATTEMPTS):
            feed_id = self.id_factory(settings.FEED_ID_LENGTH)
            try:
                await self.initialize(feed_id, write_key)
            except AlreadyInitialized:
                logger.warning("Feed id collision on %s, generating another", feed_id)
                continue
            logger.info("Created feed=%s", feed_id)
            return CreateFeedResponse(id=feed_id, write_key=write_key)
        raise InternalError("Failed to create feed")

    async def read_public(self, feed_id: str) -> FeedPublic:
        return feed.public_view(await self._load(feed_id))

    async def update_profile(self, feed_id: str, credential: Optional[str], patch: ProfilePatch) -> None:
        await self._mutate(feed_id, credential, lambda record, now: feed.apply_profile(record, patch))

    async def create_post(self, feed_id: str, credential: Optional[str], body: PostCreate) -> Post:
        def apply(record: FeedRecord, now: int) -> Post:
            feed.check_rate_limit(record, now)
            return feed.apply_post(record, body, now, self.id_factory)

        post = await self._mutate(feed_id, credential, apply)
        logger.info("Created post=%s on feed=%s", post.id, feed_id)
        return post

    async def delete_post(self, feed_id: str, credential: Optional[str], post_id: str) -> None:
        await self._mutate(feed_id, credential, lambda record, now: feed.remove_post(record, post_id))
        logger.info("Deleted post=%s on feed=%s", post_id, feed_id)

    async def export(self, feed_id: str, credential: Optional[str], fmt: Optional[str]) -> feed.ExportDocument:
        record = await self._load(feed_id)
        await asyncio.to_thread(feed.authorize, record, credential)
        return feed.export_document(record, fmt, self.clock())
