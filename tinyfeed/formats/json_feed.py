import json
from typing import Any, Dict

from tinyfeed.api.schemas import FeedPublic
from tinyfeed.formats.escape import feed_url
from tinyfeed.utils.ids import ms_to_iso

# https://www.jsonfeed.org/version/1.1/
JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"



def build_json_feed(feed: FeedPublic, base_url: str) -> Dict[str, Any]:
    url = feed_url(base_url, feed.id)

    items = []
    for post in feed.posts:
        item: Dict[str, Any] = {
            "id": post.id,
            "content_text": post.content,
            "url": f"{url}#{post.id}",
            "date_published": ms_to_iso(post.timestamp),
        }
        if post.url:
            item["external_url"] = post.url
        items.append(item)

    doc: Dict[str, Any] = {
        "version": JSON_FEED_VERSION,
        "title": feed.name or feed.id,
        "home_page_url": url,
        "feed_url": f"{url}.json",
    }
    if feed.about:
        doc["description"] = feed.about
    doc["items"] = items
    return doc

def render_json_feed(feed: FeedPublic, base_url: str) -> str:
    return json.dumps(build_json_feed(feed, base_url), indent=2, ensure_ascii=False)
