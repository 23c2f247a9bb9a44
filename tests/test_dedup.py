"""Tests for headline similarity and near-duplicate filtering."""

from itertools import combinations

import pytest

from euro_news_hub.dedup import deduplicate, normalize_title, title_similarity
from euro_news_hub.models import Article


def _article(title, country="FR", url="https://example.com"):
    return Article(
        title=title, source_name="Test", url=url,
        published_at="2026-10-19T08:00:00Z", source_country=country,
    )


# ── normalize_title ──

def test_normalize_title_strips_punctuation_and_spaces():
    assert normalize_title("  Macron:   visits, BERLIN! ") == "macron visits berlin"


def test_normalize_title_empty():
    assert normalize_title("") == ""
    assert normalize_title(None) == ""


# ── title_similarity ──

def test_similarity_identical_after_normalization():
    assert title_similarity("Hello World", "hello, world!") == 1.0


def test_similarity_containment_is_length_ratio():
    a = "Macron visits Berlin"
    b = "Macron visits Berlin today"
    expected = len("macron visits berlin") / len("macron visits berlin today")
    assert title_similarity(a, b) == pytest.approx(expected)
    assert title_similarity(b, a) == pytest.approx(expected)


def test_similarity_empty_is_zero():
    assert title_similarity("", "Anything") == 0.0
    assert title_similarity("Anything", "") == 0.0
    assert title_similarity("", "") == 0.0
    assert title_similarity("!!!", "???") == 0.0


def test_similarity_unrelated_is_zero():
    assert title_similarity("Economy grows 2%", "Climate summit begins") == 0.0


def test_similarity_entity_bonus():
    # one shared word out of ten, plus the shared "ukraine" entity
    score = title_similarity(
        "Putin warns NATO over Ukraine",
        "Ukraine receives new tanks from Germany",
    )
    assert score == pytest.approx(0.1 + 0.25)


def test_similarity_length_penalty():
    # 3 shared words out of 10, shorter title under half the length
    score = title_similarity(
        "Floods hit Spain",
        "Severe floods hit southern Spain leaving thousands without power overnight",
    )
    assert score == pytest.approx(0.3 - 0.1)


def test_similarity_never_negative():
    assert title_similarity("War", "A completely unrelated long headline about gardening tips") == 0.0


def test_similarity_is_symmetric_and_bounded():
    titles = [
        "Macron visits Berlin",
        "Macron visits Berlin today",
        "Putin warns NATO over Ukraine",
        "Ukraine receives new tanks from Germany",
        "EU leaders agree climate deal",
        "Climate deal agreed by EU leaders in Brussels",
        "",
    ]
    for a, b in combinations(titles, 2):
        score = title_similarity(a, b)
        assert 0.0 <= score <= 1.0
        assert score == pytest.approx(title_similarity(b, a))


# ── deduplicate ──

def test_deduplicate_macron_scenario():
    pool = [
        _article("Macron visits Berlin", "FR"),
        _article("Economy grows 2%", "FR"),
        _article("Macron visits Berlin today", "DE"),
        _article("Climate summit begins", "DE"),
    ]
    result = deduplicate(pool, threshold=0.6)
    titles = [a.title for a in result]
    assert titles == ["Macron visits Berlin", "Economy grows 2%", "Climate summit begins"]


def test_deduplicate_records_best_similarity():
    pool = [
        _article("Putin warns NATO over Ukraine"),
        _article("Ukraine receives new tanks from Germany", "DE"),
    ]
    result = deduplicate(pool)
    assert result[0].similarity_score == 0.0
    assert result[1].similarity_score == pytest.approx(0.35)


def test_deduplicate_is_idempotent():
    pool = [
        _article("Macron visits Berlin"),
        _article("Macron visits Berlin today", "DE"),
        _article("EU leaders agree climate deal", "IT"),
        _article("Climate deal agreed by EU leaders in Brussels", "ES"),
        _article("Floods hit Spain", "ES"),
    ]
    once = deduplicate(pool)
    assert deduplicate(once) == once


def test_deduplicate_respects_threshold():
    pool = [
        _article("Macron visits Berlin"),
        _article("Macron visits Berlin today", "DE"),
        _article("Macron visits Berlin today for talks", "IT"),
        _article("Putin warns NATO over Ukraine", "FR"),
        _article("Putin warns NATO over Ukraine war", "DE"),
        _article("Ukraine receives new tanks from Germany", "ES"),
        _article("Economy grows 2%", "IT"),
    ]
    threshold = 0.65
    result = deduplicate(pool, threshold=threshold)
    for a, b in combinations(result, 2):
        assert title_similarity(a.title, b.title) <= threshold


def test_deduplicate_keeps_unique():
    pool = [
        _article("Google unveils quantum computing breakthrough"),
        _article("New recipe book wins culinary award"),
        _article("FIFA World Cup 2030 venues announced"),
    ]
    assert len(deduplicate(pool)) == 3


def test_deduplicate_empty():
    assert deduplicate([]) == []


def test_deduplicate_does_not_touch_input():
    pool = [_article("Macron visits Berlin"), _article("Economy grows 2%")]
    deduplicate(pool)
    assert all(a.similarity_score == 0.0 for a in pool)
