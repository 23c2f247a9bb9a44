"""News pipeline: parallel per-country fetch, merge, dedupe, select, format, cache."""

import concurrent.futures
import logging
import random
import threading
from typing import Callable, Dict, List, Optional, Sequence

from .cache import NewsCache, utc_now
from .config import Settings, get_settings
from .dedup import deduplicate, title_similarity
from .gnews import fetch_country_articles, resolve_countries
from .models import Article, CachedResult, Country, DisplayArticle
from .selection import select_balanced

log = logging.getLogger(__name__)


class NoArticlesError(RuntimeError):
    """Raised when a refresh produced nothing at all (missing key or every source failed)."""


Fetcher = Callable[[Settings, Country], List[Article]]


def _fetch_country(settings: Settings, country: Country) -> List[Article]:
    return fetch_country_articles(
        settings.gnews_api_key,
        country,
        max_results=settings.per_country,
        timeout=settings.http_timeout,
    )


def fetch_all_countries(
    settings: Settings,
    countries: Sequence[Country],
    fetch: Fetcher = _fetch_country,
) -> Dict[str, List[Article]]:
    """Run one fetch per country in parallel and wait for all of them.

    A country whose fetch raises is logged and contributes no articles; it
    never cancels the others. Returns results keyed by display code in the
    configured country order.
    """
    results: Dict[str, List[Article]] = {c.display_code: [] for c in countries}
    if not countries:
        return results

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(countries)) as executor:
        future_to_country = {
            executor.submit(fetch, settings, country): country
            for country in countries
        }
        for future in concurrent.futures.as_completed(future_to_country):
            country = future_to_country[future]
            try:
                results[country.display_code] = list(future.result())
            except Exception as exc:
                log.warning("Fetch for %s raised %s", country.name, type(exc).__name__)

    for country in countries:
        log.info("  %s %s: %d articles", country.flag, country.name, len(results[country.display_code]))
    return results


def format_articles(articles: Sequence[Article], countries: Sequence[Country]) -> List[DisplayArticle]:
    by_code = {c.display_code: c for c in countries}
    formatted: List[DisplayArticle] = []
    for number, article in enumerate(articles, start=1):
        country = by_code.get(article.source_country)
        formatted.append(
            DisplayArticle(
                number=number,
                title=article.title,
                author=article.source_name,
                link=article.url,
                published_at=article.published_at,
                country=article.source_country,
                country_name=country.name if country else article.source_country,
                country_flag=country.flag if country else "",
                similarity=article.similarity_score,
            )
        )
    return formatted


def build_european_news(
    settings: Settings,
    rng: Optional[random.Random] = None,
    fetch: Fetcher = _fetch_country,
) -> CachedResult:
    """Run the full pipeline once and return a live result.

    Raises NoArticlesError when no country returned anything, so the cache
    can fall back to its last good result.
    """
    if not settings.has_gnews_key:
        raise NoArticlesError("Missing GNEWS_API_KEY environment variable")

    countries = resolve_countries(settings.countries)
    log.info("Fetching world news from %d European countries...", len(countries))

    per_country = fetch_all_countries(settings, countries, fetch=fetch)
    pooled = [article for code in per_country for article in per_country[code]]
    if not pooled:
        raise NoArticlesError("No articles returned by any country")

    unique = deduplicate(pooled, threshold=settings.similarity_threshold)
    selected = select_balanced(unique, countries, limit=settings.max_articles, rng=rng)

    return CachedResult(
        articles=format_articles(selected, countries),
        generated_at=utc_now(),
        from_cache=False,
        total_source_articles=len(pooled),
        unique_after_filtering=len(unique),
    )


# ── Process-wide cache ──

_CACHE: Optional[NewsCache] = None
_CACHE_LOCK = threading.Lock()


def get_cache(settings: Optional[Settings] = None) -> NewsCache:
    global _CACHE
    with _CACHE_LOCK:
        if _CACHE is None:
            _CACHE = NewsCache(ttl=(settings or get_settings()).cache_ttl)
        return _CACHE


def set_cache(cache: Optional[NewsCache]) -> None:
    """Swap the process-wide cache (``None`` resets it to be rebuilt lazily)."""
    global _CACHE
    with _CACHE_LOCK:
        _CACHE = cache


def get_european_news(
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    fetch: Fetcher = _fetch_country,
) -> CachedResult:
    """Best available European headlines. Never raises; empty when nothing is available."""
    settings = settings or get_settings()
    cache = get_cache(settings)
    result = cache.get_or_refresh(lambda: build_european_news(settings, rng=rng, fetch=fetch))
    if result is None:
        return CachedResult(articles=[], generated_at=utc_now(), from_cache=False)
    log.info(
        "European news: %d articles (%s)",
        len(result.articles), "cached" if result.from_cache else "live",
    )
    return result


def get_top_headlines(settings: Optional[Settings] = None) -> List[dict]:
    """Display-ready headline dicts for the news panel."""
    return [a.as_dict() for a in get_european_news(settings).articles]


def clear_news_cache() -> None:
    get_cache().clear()


def get_cache_status() -> dict:
    return get_cache().status()


def similarity_report(title_a: str, title_b: str) -> dict:
    """Debug helper: score two headlines and say whether they count as duplicates."""
    settings = get_settings()
    score = title_similarity(title_a, title_b)
    return {
        "title_a": title_a,
        "title_b": title_b,
        "similarity": round(score, 4),
        "percent": round(score * 100),
        "duplicate": score > settings.similarity_threshold,
    }
