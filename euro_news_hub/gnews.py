import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from .models import Article, Country

log = logging.getLogger(__name__)


GNEWS_TOP_HEADLINES_URL = "https://gnews.io/api/v4/top-headlines"

DEFAULT_LANG = "en"
DEFAULT_CATEGORY = "world"
DEFAULT_MAX_RESULTS = 10

EUROPEAN_COUNTRIES: Dict[str, Country] = {
    "fr": Country(code="fr", name="France", flag="🇫🇷", display_code="FR"),
    "de": Country(code="de", name="Germany", flag="🇩🇪", display_code="DE"),
    "it": Country(code="it", name="Italy", flag="🇮🇹", display_code="IT"),
    "es": Country(code="es", name="Spain", flag="🇪🇸", display_code="ES"),
    "gb": Country(code="gb", name="United Kingdom", flag="🇬🇧", display_code="UK"),
    "nl": Country(code="nl", name="Netherlands", flag="🇳🇱", display_code="NL"),
    "pt": Country(code="pt", name="Portugal", flag="🇵🇹", display_code="PT"),
    "se": Country(code="se", name="Sweden", flag="🇸🇪", display_code="SE"),
    "no": Country(code="no", name="Norway", flag="🇳🇴", display_code="NO"),
    "ie": Country(code="ie", name="Ireland", flag="🇮🇪", display_code="IE"),
}

UNKNOWN_SOURCE = "Unknown Source"
UNTITLED = "Untitled"


def resolve_countries(codes: Iterable[str]) -> List[Country]:
    """Map configured country codes to Country records, keeping their order.
    Codes outside the known table still work, with the code as display name."""
    countries: List[Country] = []
    for code in codes:
        key = code.strip().lower()
        if not key:
            continue
        countries.append(
            EUROPEAN_COUNTRIES.get(key)
            or Country(code=key, name=key.upper(), flag="", display_code=key.upper())
        )
    return countries


def fetch_top_headlines(
    api_key: str,
    country: str,
    max_results: int = DEFAULT_MAX_RESULTS,
    lang: str = DEFAULT_LANG,
    category: str = DEFAULT_CATEGORY,
    timeout: float = 10,
) -> List[dict]:
    """Fetch raw top-headline records for one country.

    Fails soft: a missing key, a transport error, a non-200 status or a body
    that is not JSON all log and return ``[]``. One request, no retries.
    """
    if not api_key:
        log.warning("GNews: no API key configured, skipping %s", country)
        return []

    params = {
        "apikey": api_key,
        "lang": lang,
        "country": country,
        "category": category,
        "max": max_results,
    }

    try:
        resp = requests.get(GNEWS_TOP_HEADLINES_URL, params=params, timeout=timeout)
    except requests.RequestException as exc:
        # The message carries the request URL, and with it the apikey param.
        log.warning("GNews: request for %s failed: %s", country, type(exc).__name__)
        return []

    if resp.status_code != 200:
        log.warning("GNews: API error for %s: %s %s", country, resp.status_code, resp.reason)
        return []

    try:
        data = resp.json()
    except ValueError:
        log.warning("GNews: response for %s is not valid JSON", country)
        return []

    articles = data.get("articles") if isinstance(data, dict) else None
    if not isinstance(articles, list):
        return []

    log.info("GNews: %s returned %d articles", country, len(articles))
    return articles


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def normalize_article(raw: Any, country_code: str) -> Optional[Article]:
    """Shape one raw GNews record into an Article.

    Expected keys are ``title``, ``url``, ``publishedAt`` and ``source.name``,
    all optional; missing ones get placeholder values. Returns ``None`` only
    when the record is not a mapping at all.
    """
    if not isinstance(raw, dict):
        return None

    source = raw.get("source")
    source_name = source.get("name") if isinstance(source, dict) else None

    return Article(
        title=_text(raw.get("title"), UNTITLED),
        source_name=_text(source_name, UNKNOWN_SOURCE),
        url=_text(raw.get("url"), "#"),
        published_at=_text(raw.get("publishedAt"), ""),
        source_country=country_code.upper(),
    )


def fetch_country_articles(
    api_key: str,
    country: Country,
    max_results: int = DEFAULT_MAX_RESULTS,
    timeout: float = 10,
) -> List[Article]:
    raw_articles = fetch_top_headlines(
        api_key, country.code, max_results=max_results, timeout=timeout,
    )
    articles: List[Article] = []
    for raw in raw_articles:
        article = normalize_article(raw, country.display_code)
        if article is not None:
            articles.append(article)
    return articles
