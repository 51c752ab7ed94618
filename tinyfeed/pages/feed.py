from urllib.parse import urlparse

from tinyfeed.api.schemas import FeedPublic, Post
from tinyfeed.core.config import settings
from tinyfeed.formats.escape import escape_html, feed_url
from tinyfeed.pages.layout import DEFAULT_DESCRIPTION, OpenGraph, base_html, format_date, page_title

OG_DESCRIPTION_LENGTH = 150



def _link_label(url: str) -> str:
    return urlparse(url).hostname or url

def _post_html(post: Post) -> str:
    link = ""
    if post.url:
        link = (
            f'<a class="post-link" href="{escape_html(post.url)}" target="_blank" rel="noopener">'
            f"{escape_html(_link_label(post.url))}</a>"
        )
    return f"""
      <article class="post" id="post-{escape_html(post.id)}">
        <p class="post-content">{escape_html(post.content)}</p>
        {link}
        <div class="post-meta">
          <time class="post-time">{format_date(post.timestamp)}</time>
          <span class="post-delete write-only" data-post-id="{escape_html(post.id)}" title="delete">✕</span>
        </div>
      </article>"""

def feed_page(feed: FeedPublic, base_url: str) -> str:
    """Read view of a feed; the script switches to write mode when the URL carries ``#s=<key>``."""
    name = feed.name or feed.id
    url = feed_url(base_url, feed.id)

    if feed.about:
        og_description = feed.about
    elif feed.posts:
        og_description = feed.posts[0].content[:OG_DESCRIPTION_LENGTH]
    else:
        og_description = DEFAULT_DESCRIPTION

    og = OpenGraph(title=page_title(name), description=og_description, url=url)

    if feed.posts:
        posts = "".join(_post_html(post) for post in feed.posts)
    else:
        posts = '<p class="empty">no posts yet</p>'

    about = f'<p class="feed-about">{escape_html(feed.about)}</p>' if feed.about else ""

    content = f"""
    <header class="header">
      <div class="header-top">
        <h1 class="feed-name">{escape_html(name)}</h1>
        <div class="header-actions">
          <button id="add-contact-btn" class="btn">+ contact</button>
        </div>
      </div>
      {about}
      <button id="edit-profile-btn" class="edit-profile-btn btn">edit profile</button>
    </header>

    <section class="posts">
      {posts}
    </section>

    <div class="composer write-only">
      <textarea id="composer-input" class="composer-input" placeholder="write something..."
        maxlength="{settings.MAX_CONTENT_LENGTH}" rows="1"></textarea>
      <div class="composer-extras">
        <input type="url" id="composer-url" class="composer-url" placeholder="link (optional)">
        <div class="composer-meta">
          <span class="char-count" id="char-count">0/{settings.MAX_CONTENT_LENGTH}</span>
          <span class="composer-hint">⌘↵ to post</span>
        </div>
        <button id="submit-btn" class="composer-submit">post</button>
      </div>
    </div>

    <footer class="footer">
      <div class="subscribe-links">
        <span>subscribe:</span>
        <a href="{escape_html(url)}.rss">rss</a>
        <span>·</span>
        <a href="{escape_html(url)}.json">json</a>
      </div>
    </footer>
    """

    body_attrs = (
        f'data-feed-id="{escape_html(feed.id)}" '
        f'data-feed-name="{escape_html(feed.name)}" '
        f'data-feed-about="{escape_html(feed.about)}" '
        f'data-max-chars="{settings.MAX_CONTENT_LENGTH}"'
    )

    return base_html(content, title=page_title(name), script="feed.js", og=og, body_attrs=body_attrs)
