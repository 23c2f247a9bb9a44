import random
from datetime import timedelta

import pytest
import requests

from euro_news_hub import aggregate, gnews
from euro_news_hub.aggregate import (
    NoArticlesError,
    build_european_news,
    clear_news_cache,
    fetch_all_countries,
    get_european_news,
    get_top_headlines,
    set_cache,
    similarity_report,
)
from euro_news_hub.cache import NewsCache
from euro_news_hub.config import Settings
from euro_news_hub.gnews import resolve_countries
from euro_news_hub.models import Article

from conftest import FakeResponse


SCENARIO = {
    "FR": ["Macron visits Berlin", "Economy grows 2%"],
    "DE": ["Macron visits Berlin today", "Climate summit begins"],
}


def _settings(**overrides):
    values = dict(gnews_api_key="test-key", countries=("fr", "de"))
    values.update(overrides)
    return Settings(**values)


class _FakeFetch:
    def __init__(self, titles_by_country, failing=()):
        self.titles_by_country = titles_by_country
        self.failing = set(failing)
        self.calls = 0

    def __call__(self, settings, country):
        self.calls += 1
        if country.display_code in self.failing:
            raise requests.ConnectionError(f"{country.name} unreachable")
        return [
            Article(
                title=title, source_name=f"{country.name} Daily",
                url=f"https://example.com/{country.code}/{i}",
                published_at="2026-10-19T08:00:00Z",
                source_country=country.display_code,
            )
            for i, title in enumerate(self.titles_by_country.get(country.display_code, []))
        ]


def test_macron_scenario_dedupes_and_balances():
    fetch = _FakeFetch(SCENARIO)
    result = build_european_news(_settings(), rng=random.Random(5), fetch=fetch)

    titles = {a.title for a in result.articles}
    assert len(result.articles) == 3
    assert not {"Macron visits Berlin", "Macron visits Berlin today"} <= titles
    assert {"Economy grows 2%", "Climate summit begins"} <= titles
    assert {a.country for a in result.articles} == {"FR", "DE"}
    assert result.total_source_articles == 4
    assert result.unique_after_filtering == 3
    assert [a.number for a in result.articles] == [1, 2, 3]


def test_one_country_failing_does_not_cancel_others():
    fetch = _FakeFetch(SCENARIO, failing={"DE"})
    per_country = fetch_all_countries(_settings(), resolve_countries(["fr", "de"]), fetch=fetch)
    assert fetch.calls == 2
    assert len(per_country["FR"]) == 2
    assert per_country["DE"] == []


def test_build_raises_when_every_country_fails():
    fetch = _FakeFetch(SCENARIO, failing={"FR", "DE"})
    with pytest.raises(NoArticlesError):
        build_european_news(_settings(), fetch=fetch)


def test_total_outage_without_cache_returns_empty_list():
    fetch = _FakeFetch(SCENARIO, failing={"FR", "DE"})
    result = get_european_news(_settings(), fetch=fetch)
    assert result.articles == []
    assert result.from_cache is False


def test_missing_key_never_touches_network(monkeypatch):
    def fail_get(*args, **kwargs):
        raise AssertionError("network must not be called")

    monkeypatch.setattr(gnews.requests, "get", fail_get)
    result = get_european_news(_settings(gnews_api_key=""))
    assert result.articles == []


def test_second_read_within_ttl_is_cached():
    fetch = _FakeFetch(SCENARIO)
    settings = _settings()

    first = get_european_news(settings, fetch=fetch)
    second = get_european_news(settings, fetch=fetch)

    assert fetch.calls == 2  # one per country, first read only
    assert first.from_cache is False
    assert second.from_cache is True
    assert second.articles == first.articles


def test_clear_then_read_fetches_live():
    fetch = _FakeFetch(SCENARIO)
    settings = _settings()

    get_european_news(settings, fetch=fetch)
    clear_news_cache()
    result = get_european_news(settings, fetch=fetch)

    assert fetch.calls == 4
    assert result.from_cache is False


def test_outage_after_expiry_serves_last_good_result(clock):
    set_cache(NewsCache(ttl=timedelta(minutes=60), clock=clock))
    settings = _settings()
    good = get_european_news(settings, fetch=_FakeFetch(SCENARIO))

    clock.advance(minutes=61)
    result = get_european_news(settings, fetch=_FakeFetch(SCENARIO, failing={"FR", "DE"}))

    assert result.stale is True
    assert result.from_cache is True
    assert result.articles == good.articles


def test_get_top_headlines_returns_display_dicts(monkeypatch):
    payloads = {
        "fr": [{"title": "Paris hosts summit", "url": "https://a.fr/1",
                "publishedAt": "2026-10-19T07:00:00Z", "source": {"name": "Le Monde"}}],
        "de": [{"title": "Berlin budget passes", "url": "https://b.de/1"}],
    }

    def fake_get(url, params=None, timeout=None):
        return FakeResponse({"articles": payloads[params["country"]]})

    monkeypatch.setattr(gnews.requests, "get", fake_get)
    headlines = get_top_headlines(_settings())

    assert len(headlines) == 2
    by_country = {h["country"]: h for h in headlines}
    assert by_country["FR"]["author"] == "Le Monde"
    assert by_country["FR"]["link"] == "https://a.fr/1"
    assert by_country["FR"]["countryName"] == "France"
    assert by_country["DE"]["author"] == "Unknown Source"
    assert by_country["DE"]["publishedAt"] == ""
    assert set(by_country["FR"]) >= {"title", "author", "link", "publishedAt", "country"}


def test_similarity_report_flags_duplicates():
    report = similarity_report("Macron visits Berlin", "Macron visits Berlin today")
    assert report["duplicate"] is True
    assert report["percent"] == 77


def test_process_cache_is_built_from_settings_ttl():
    cache = aggregate.get_cache(_settings(cache_ttl_minutes=30))
    assert cache.ttl == timedelta(minutes=30)
