import json

import pytest

from tinyfeed.api.schemas import PostCreate, ProfilePatch
from tinyfeed.core.errors import InvalidInput, PostNotFound, RateLimited, Unauthorized
from tinyfeed.core.hashing import hash_write_key
from tinyfeed.services import feed

from conftest import START_MS


@pytest.fixture
def record():
    return feed.new_record("abcd2345", hash_write_key("secretkey123"), START_MS)


def test_new_record_is_empty(record):
    assert record.name == ""
    assert record.about == ""
    assert record.posts == []
    assert record.last_post_at == 0
    assert record.created_at == START_MS


def test_public_view_hides_write_key_hash(record):
    public = feed.public_view(record).model_dump(by_alias=True)
    assert set(public) == {"id", "name", "about", "createdAt", "posts"}


def test_authorize(record):
    feed.authorize(record, "secretkey123")
    with pytest.raises(Unauthorized):
        feed.authorize(record, "wrongkey1234")
    with pytest.raises(Unauthorized):
        feed.authorize(record, None)


def test_profile_fields_are_independent_and_truncated(record):
    feed.apply_profile(record, ProfilePatch(name="n" * 40))
    assert record.name == "n" * 30
    assert record.about == ""

    feed.apply_profile(record, ProfilePatch(about="a" * 200))
    assert record.name == "n" * 30
    assert record.about == "a" * 160


def test_post_truncates_content_and_url(record, counting_ids):
    post = feed.apply_post(
        record,
        PostCreate(content="x" * 600, url="https://example.com/" + "u" * 3000),
        START_MS,
        counting_ids,
    )
    assert len(post.content) == 500
    assert post.content == "x" * 500
    assert len(post.url) == 2000
    assert post.url.startswith("https://example.com/")
    assert post.timestamp == START_MS
    assert record.last_post_at == START_MS
    assert record.posts[0] == post


@pytest.mark.parametrize("url", [None, "", "   "])
def test_blank_url_is_stored_as_none(record, url):
    post = feed.apply_post(record, PostCreate(content="hi", url=url), START_MS)
    assert post.url is None


@pytest.mark.parametrize("content", [None, "", "  \n\t "])
def test_empty_content_is_rejected(record, content):
    with pytest.raises(InvalidInput):
        feed.apply_post(record, PostCreate(content=content), START_MS)
    assert record.posts == []
    assert record.last_post_at == 0


def test_post_ids_are_unique_within_feed(record):
    ids = iter(["aaaaaa", "aaaaaa", "bbbbbb"])
    feed.apply_post(record, PostCreate(content="one"), START_MS, lambda n: next(ids))
    second = feed.apply_post(record, PostCreate(content="two"), START_MS + 1, lambda n: next(ids))
    assert second.id == "bbbbbb"


def test_rate_limit_wait_is_rounded_up(record):
    record.last_post_at = START_MS
    with pytest.raises(RateLimited) as exc:
        feed.check_rate_limit(record, START_MS + 1500)
    # ceil((60000 - 1500) / 1000)
    assert exc.value.retry_after == 59
    assert exc.value.headers() == {"Retry-After": "59"}

    with pytest.raises(RateLimited) as exc:
        feed.check_rate_limit(record, START_MS + 59_999)
    assert exc.value.retry_after == 1

    feed.check_rate_limit(record, START_MS + 60_000)


def test_first_post_is_never_rate_limited(record):
    feed.check_rate_limit(record, START_MS)


def test_retention_keeps_newest_thousand(record, counting_ids):
    for i in range(1001):
        feed.apply_post(record, PostCreate(content=f"post {i}"), START_MS + i, counting_ids)

    assert len(record.posts) == 1000
    assert record.posts[0].content == "post 1000"
    assert record.posts[-1].content == "post 1"
    timestamps = [p.timestamp for p in record.posts]
    assert timestamps == sorted(timestamps, reverse=True)


def test_remove_post(record, counting_ids):
    keep = feed.apply_post(record, PostCreate(content="keep"), START_MS, counting_ids)
    drop = feed.apply_post(record, PostCreate(content="drop"), START_MS + 1, counting_ids)

    feed.remove_post(record, drop.id)
    assert [p.id for p in record.posts] == [keep.id]

    with pytest.raises(PostNotFound):
        feed.remove_post(record, drop.id)


def test_markdown_export_of_empty_feed(record):
    doc = feed.export_document(record, "md", START_MS)
    assert doc.media_type == "text/markdown"
    assert doc.filename == "abcd2345.md"
    assert doc.content_disposition == 'attachment; filename="abcd2345.md"'
    assert doc.body.startswith("# abcd2345\n")
    assert "---" in doc.body
    assert "—" not in doc.body


def test_json_export_of_empty_feed(record):
    doc = feed.export_document(record, "json", START_MS + 5)
    data = json.loads(doc.body)
    assert doc.media_type == "application/json"
    assert doc.filename == "abcd2345.json"
    assert data["posts"] == []
    assert data["exportedAt"] == START_MS + 5
    assert data["createdAt"] == START_MS
    assert "writeKeyHash" not in data


@pytest.mark.parametrize("fmt", [None, "xml", "JSON"])
def test_unknown_export_format_falls_back_to_json(record, fmt):
    doc = feed.export_document(record, fmt, START_MS)
    assert doc.filename.endswith(".json")
    json.loads(doc.body)
