from email.utils import format_datetime
from typing import Optional

from tinyfeed.api.schemas import FeedPublic, Post
from tinyfeed.formats.escape import feed_url, xml_text
from tinyfeed.utils.ids import ms_to_datetime, now_ms

TITLE_LENGTH = 100



def _rfc822(ms: int) -> str:
    return format_datetime(ms_to_datetime(ms), usegmt=True)

def _item(post: Post, url: str) -> str:
    title = xml_text(post.content[:TITLE_LENGTH])
    if len(post.content) > TITLE_LENGTH:
        title += "..."

    description = xml_text(post.content)
    if post.url:
        description += f"\n\n→ {xml_text(post.url)}"

    link = post.url or url
    guid = f"{url}#{post.id}"

    return (
        "    <item>\n"
        f"      <title>{title}</title>\n"
        f"      <description><![CDATA[{description}]]></description>\n"
        f"      <link>{xml_text(link)}</link>\n"
        f'      <guid isPermaLink="false">{xml_text(guid)}</guid>\n'
        f"      <pubDate>{_rfc822(post.timestamp)}</pubDate>\n"
        "    </item>"
    )

def render_rss(feed: FeedPublic, base_url: str, now: Optional[int] = None) -> str:
    """RSS 2.0 document; ``now`` is only used for lastBuildDate of an empty feed."""
    url = feed_url(base_url, feed.id)
    name = feed.name or feed.id
    description = feed.about or f"Posts from {name}"

    if feed.posts:
        last_build = _rfc822(feed.posts[0].timestamp)
    else:
        last_build = _rfc822(now if now is not None else now_ms())

    items = "\n".join(_item(post, url) for post in feed.posts)

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">\n'
        "  <channel>\n"
        f"    <title>{xml_text(name)}</title>\n"
        f"    <link>{xml_text(url)}</link>\n"
        f"    <description>{xml_text(description)}</description>\n"
        f"    <lastBuildDate>{last_build}</lastBuildDate>\n"
        f'    <atom:link href="{xml_text(url)}.rss" rel="self" type="application/rss+xml"/>\n'
        f"{items}\n"
        "  </channel>\n"
        "</rss>"
    )
