import html
import re

# Code points outside the XML 1.0 Char production
XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")



def escape_html(value: str) -> str:
    """Escape ``& < > " '`` for HTML/XML bodies and attribute values."""
    return html.escape(value, quote=True)

def xml_text(value: str) -> str:
    """Escaped text that is always a well-formed XML 1.0 text node."""
    return escape_html(XML_INVALID_CHARS.sub("", value))

def feed_url(base_url: str, feed_id: str) -> str:
    return f"{base_url.rstrip('/')}/f/{feed_id}"
