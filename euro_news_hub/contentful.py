import logging
from typing import Any, List, Optional

import requests

from .config import Settings
from .models import EditorialHeadline

log = logging.getLogger(__name__)


CONTENTFUL_CDN_BASE = "https://cdn.contentful.com"
HEADLINES_CONTENT_TYPE = "headlines"


def _entries_url(settings: Settings) -> str:
    return (
        f"{CONTENTFUL_CDN_BASE}/spaces/{settings.contentful_space_id}"
        f"/environments/{settings.contentful_environment}/entries"
    )


def entry_to_headline(item: Any) -> Optional[EditorialHeadline]:
    """Shape one Contentful entry into an EditorialHeadline, with defaults for
    any missing field. Returns ``None`` when the entry is not a mapping."""
    if not isinstance(item, dict):
        return None
    fields = item.get("fields")
    if not isinstance(fields, dict):
        fields = {}
    sys_meta = item.get("sys")
    if not isinstance(sys_meta, dict):
        sys_meta = {}

    return EditorialHeadline(
        title=fields.get("title") or "No Title",
        author=fields.get("author") or "Unknown Author",
        link=fields.get("url") or fields.get("link") or "#",
        date=fields.get("date") or sys_meta.get("createdAt") or "",
    )


def fetch_editorial_headlines(settings: Settings, limit: int = 20) -> List[EditorialHeadline]:
    """Fetch the newest published entries of the ``headlines`` content type.

    Returns ``[]`` when credentials are missing or the request fails, so an
    unavailable CMS only empties its own panel.
    """
    if not settings.has_contentful_credentials:
        log.warning("Contentful: space id or access token missing, skipping headlines")
        return []

    params = {
        "content_type": HEADLINES_CONTENT_TYPE,
        "order": "-sys.createdAt",
        "limit": limit,
    }
    headers = {"Authorization": f"Bearer {settings.contentful_access_token}"}

    try:
        resp = requests.get(
            _entries_url(settings), params=params, headers=headers,
            timeout=settings.http_timeout,
        )
    except requests.RequestException as exc:
        log.warning("Contentful: request failed: %s", exc)
        return []

    if resp.status_code != 200:
        log.warning("Contentful: API error %s %s", resp.status_code, resp.reason)
        return []

    try:
        data = resp.json()
    except ValueError:
        log.warning("Contentful: response is not valid JSON")
        return []

    items = data.get("items") if isinstance(data, dict) else None
    if not items:
        log.warning("Contentful: no entries of type '%s' found", HEADLINES_CONTENT_TYPE)
        return []

    headlines = [h for h in (entry_to_headline(item) for item in items) if h is not None]
    log.info("Contentful: %d headlines fetched", len(headlines))
    return headlines
