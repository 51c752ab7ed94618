import pytest

from tinyfeed.core.errors import FeedNotFound, PostNotFound
from tinyfeed.core.routing import resolve_feed_id, resolve_post_id


def test_ids_are_lowercased():
    assert resolve_feed_id("AbC234") == "abc234"
    assert resolve_post_id("XyZ9") == "xyz9"


@pytest.mark.parametrize("raw", ["", "abc\n", "bad-id!", "abc def", "ab/cd"])
def test_malformed_feed_ids_are_not_found(raw):
    with pytest.raises(FeedNotFound):
        resolve_feed_id(raw)


@pytest.mark.parametrize("raw", ["", "abc\n", "p_1"])
def test_malformed_post_ids_are_not_found(raw):
    with pytest.raises(PostNotFound):
        resolve_post_id(raw)
