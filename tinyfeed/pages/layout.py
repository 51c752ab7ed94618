"""
Shared page shell for the HTML views.

Pages are plain strings: every dynamic value goes through escape_html
before it is embedded. Styles and behaviour live in ``tinyfeed/static``.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from tinyfeed.core.config import settings
from tinyfeed.formats.escape import escape_html
from tinyfeed.utils.ids import ms_to_datetime

MONTHS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]
DEFAULT_DESCRIPTION = "a feed is a url"

FAVICON = (
    "data:image/svg+xml,<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'>"
    "<rect fill='%23c45d3a' rx='12' width='100' height='100'/>"
    "<circle cx='25' cy='75' r='10' fill='%23faf9f7'/>"
    "<path d='M25 45 v-10 a40 40 0 0 1 40 40 h-10 a30 30 0 0 0 -30 -30z' fill='%23faf9f7'/>"
    "<path d='M25 20 v-10 a65 65 0 0 1 65 65 h-10 a55 55 0 0 0 -55 -55z' fill='%23faf9f7'/></svg>"
)


@dataclass
class OpenGraph:
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None


def format_date(ms: int, now: Optional[datetime] = None) -> str:
    """``oct 17, 3:04pm`` within the current year, ``oct 17, 2025`` otherwise (UTC)."""
    date = ms_to_datetime(ms)
    now = now or datetime.now(timezone.utc)
    month = MONTHS[date.month - 1]
    if date.year != now.year:
        return f"{month} {date.day}, {date.year}"
    hour12 = date.hour % 12 or 12
    ampm = "pm" if date.hour >= 12 else "am"
    return f"{month} {date.day}, {hour12}:{date.minute:02d}{ampm}"


def page_title(*parts: str) -> str:
    return " — ".join([*parts, settings.APP_NAME])


def _og_tags(og: OpenGraph, title: str) -> str:
    og_title = escape_html(og.title or title)
    og_description = escape_html(og.description or DEFAULT_DESCRIPTION)
    tags = [
        f'<meta property="og:title" content="{og_title}">',
        f'<meta property="og:description" content="{og_description}">',
        '<meta property="og:type" content="website">',
    ]
    if og.url:
        tags.append(f'<meta property="og:url" content="{escape_html(og.url)}">')
    tags += [
        '<meta name="twitter:card" content="summary">',
        f'<meta name="twitter:title" content="{og_title}">',
        f'<meta name="twitter:description" content="{og_description}">',
    ]
    return "\n  ".join(tags)


def base_html(
    content: str,
    title: Optional[str] = None,
    script: Optional[str] = None,
    og: Optional[OpenGraph] = None,
    body_attrs: str = "",
) -> str:
    title = title or settings.APP_NAME
    head_extra = f"\n  {_og_tags(og, title)}" if og else ""
    script_tag = f'\n  <script src="/static/{script}"></script>' if script else ""
    attrs = f" {body_attrs}" if body_attrs else ""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape_html(title)}</title>{head_extra}
  <link rel="icon" href="{FAVICON}">
  <link rel="stylesheet" href="/static/style.css">
</head>
<body{attrs}>
  <div class="container">
    {content}
  </div>
  <div class="toast" id="toast"></div>
  <script src="/static/common.js"></script>{script_tag}
</body>
</html>"""
