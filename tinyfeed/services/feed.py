"""
State transitions for a single feed.

Functions here only look at and modify a FeedRecord; loading, locking and
saving the record is FeedStore's job. Time and id generation are passed in
so the rules (truncation, rate window, retention cap) are deterministic.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable

from tinyfeed.api.schemas import FeedExport, FeedPublic, FeedRecord, Post, PostCreate, ProfilePatch
from tinyfeed.core.config import settings
from tinyfeed.core.errors import InvalidInput, MSG_CONTENT_REQUIRED, PostNotFound, RateLimited, Unauthorized
from tinyfeed.core.hashing import verify_write_key
from tinyfeed.formats.markdown import render_markdown
from tinyfeed.utils.ids import generate_id

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "json": "application/json",
    "md": "text/markdown",
}


@dataclass
class ExportDocument:
    body: str
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def new_record(feed_id: str, write_key_hash: str, now: int) -> FeedRecord:
    return FeedRecord(
        id=feed_id,
        name="",
        about="",
        created_at=now,
        posts=[],
        write_key_hash=write_key_hash,
        last_post_at=0,
    )


def public_view(record: FeedRecord) -> FeedPublic:
    return FeedPublic(
        id=record.id,
        name=record.name,
        about=record.about,
        created_at=record.created_at,
        posts=list(record.posts),
    )


def authorize(record: FeedRecord, credential: str | None) -> None:
    if not credential or not verify_write_key(credential, record.write_key_hash):
        logger.info("Rejected write key for feed=%s", record.id)
        raise Unauthorized()


def apply_profile(record: FeedRecord, patch: ProfilePatch) -> None:
    if patch.name is not None:
        record.name = patch.name[: settings.MAX_NAME_LENGTH]
    if patch.about is not None:
        record.about = patch.about[: settings.MAX_ABOUT_LENGTH]


def check_rate_limit(record: FeedRecord, now: int) -> None:
    elapsed = now - record.last_post_at
    window = settings.POST_RATE_LIMIT_MS
    if elapsed < window:
        wait = math.ceil((window - elapsed) / 1000)
        logger.debug("Rate limited feed=%s wait=%ss", record.id, wait)
        raise RateLimited(wait)


def _new_post_id(record: FeedRecord, id_factory: Callable[[int], str]) -> str:
    taken = {p.id for p in record.posts}
    while True:
        post_id = id_factory(settings.POST_ID_LENGTH)
        if post_id not in taken:
            return post_id


def apply_post(
    record: FeedRecord,
    body: PostCreate,
    now: int,
    id_factory: Callable[[int], str] = generate_id,
) -> Post:
    """
    Prepend a post and enforce the retention cap.
    Callers are expected to have run check_rate_limit first.
    """
    content = body.content or ""
    if not content.strip():
        raise InvalidInput(MSG_CONTENT_REQUIRED)

    url = body.url
    if url is not None and not url.strip():
        url = None

    post = Post(
        id=_new_post_id(record, id_factory),
        content=content[: settings.MAX_CONTENT_LENGTH],
        url=url[: settings.MAX_URL_LENGTH] if url else None,
        timestamp=now,
    )

    record.posts.insert(0, post)
    record.last_post_at = now
    if len(record.posts) > settings.MAX_POSTS:
        del record.posts[settings.MAX_POSTS:]
    return post


def remove_post(record: FeedRecord, post_id: str) -> None:
    for i, post in enumerate(record.posts):
        if post.id == post_id:
            del record.posts[i]
            return
    raise PostNotFound()


def export_document(record: FeedRecord, fmt: str | None, now: int) -> ExportDocument:
    """Markdown for ``md``; anything else falls back to the JSON export."""
    if fmt == "md":
        body = render_markdown(record)
    else:
        fmt = "json"
        export = FeedExport(
            id=record.id,
            name=record.name,
            about=record.about,
            created_at=record.created_at,
            exported_at=now,
            posts=list(record.posts),
        )
        body = export.model_dump_json(by_alias=True, indent=2)

    return ExportDocument(
        body=body,
        media_type=EXPORT_FORMATS[fmt],
        filename=f"{record.id}.{fmt}",
    )
