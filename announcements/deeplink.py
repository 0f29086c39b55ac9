"""
announcements/deeplink.py

`?showAnnouncement=<id>` is how a notification click reaches a page that was
not open yet. The parameter is single use: the page consumes it once and
removes it from the address bar.
"""
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEEP_LINK_PARAM = "showAnnouncement"


def consume_deep_link(url: str):
    """Return (announcement_id or None, url without the parameter)."""
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    found = None
    kept = []
    for key, value in query:
        if key == DEEP_LINK_PARAM:
            if found is None and value.strip():
                found = value.strip()
            continue
        kept.append((key, value))
    cleaned = urlunsplit(parts._replace(query=urlencode(kept)))
    return found, cleaned


def with_deep_link(url: str, announcement_id) -> str:
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != DEEP_LINK_PARAM]
    query.append((DEEP_LINK_PARAM, str(announcement_id)))
    return urlunsplit(parts._replace(query=urlencode(query)))
