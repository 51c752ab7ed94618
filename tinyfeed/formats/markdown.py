from tinyfeed.api.schemas import FeedPublic
from tinyfeed.utils.ids import ms_to_datetime



def render_markdown(feed: FeedPublic) -> str:
    lines = [f"# {feed.name or feed.id}", ""]

    if feed.about:
        lines += [f"*{feed.about}*", ""]

    lines += ["---", ""]

    for post in feed.posts:
        lines.append(post.content)
        if post.url:
            lines.append(f"→ {post.url}")
        lines += [f"— {ms_to_datetime(post.timestamp).date().isoformat()}", ""]

    return "\n".join(lines)
