"""Near-duplicate filtering — drops stories several country feeds report with almost the same headline."""

import logging
import re
from dataclasses import replace
from typing import List, Sequence

from .models import Article

log = logging.getLogger(__name__)

# Articles with title similarity above this threshold are considered duplicates
_SIMILARITY_THRESHOLD = 0.65

# Flat bonus when both titles talk about the same salient topic
_ENTITY_BONUS = 0.25

# Penalty when the shorter title is under half the length of the longer one
_LENGTH_PENALTY = 0.1

KEY_ENTITIES = (
    "ukraine", "russia", "putin", "trump", "biden", "china", "israel", "gaza",
    "palestine", "nato", "eu", "europe", "brexit", "covid", "climate",
    "economy", "election",
)

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(text: str) -> str:
    """Lower-case, turn punctuation into spaces and collapse whitespace."""
    if not text:
        return ""
    text = _PUNCTUATION.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def _content_words(normalized: str) -> set:
    return {w for w in normalized.split(" ") if len(w) > 2}


def _entities(normalized: str) -> set:
    """Salient entities mentioned in a title; a word counts when it starts with the entity."""
    words = normalized.split(" ")
    return {e for e in KEY_ENTITIES if any(w.startswith(e) for w in words)}


def title_similarity(a: str, b: str) -> float:
    """Similarity score in [0, 1] between two headlines.

    Exact match after normalization scores 1.0 and containment scores the
    length ratio. Anything else is the Jaccard index over words longer than
    two characters, plus a bonus for a shared key entity and minus a penalty
    for very different lengths.
    """
    norm_a = normalize_title(a)
    norm_b = normalize_title(b)
    if not norm_a or not norm_b:
        return 0.0

    if norm_a == norm_b:
        return 1.0

    shorter, longer = sorted((norm_a, norm_b), key=len)
    if shorter in longer:
        return len(shorter) / len(longer)

    words_a = _content_words(norm_a)
    words_b = _content_words(norm_b)
    union = words_a | words_b
    jaccard = len(words_a & words_b) / len(union) if union else 0.0

    bonus = _ENTITY_BONUS if _entities(norm_a) & _entities(norm_b) else 0.0
    penalty = _LENGTH_PENALTY if len(shorter) / len(longer) < 0.5 else 0.0

    return min(1.0, max(0.0, jaccard + bonus - penalty))


def deduplicate(
    articles: Sequence[Article],
    threshold: float = _SIMILARITY_THRESHOLD,
) -> List[Article]:
    """Remove near-duplicate articles, keeping the first version seen.

    Each candidate is compared against every article kept so far. If the best
    match exceeds *threshold* the candidate is dropped, otherwise it is kept
    with that best score recorded in ``similarity_score``. Preserves order.
    """
    kept: List[Article] = []

    for article in articles:
        best_score = 0.0
        best_match = None
        for existing in kept:
            score = title_similarity(article.title, existing.title)
            if score > best_score:
                best_score = score
                best_match = existing

        if best_match is not None and best_score > threshold:
            log.info(
                "Dedup: dropped '%s' [%s] as %d%% similar to '%s' [%s]",
                article.title, article.source_country, round(best_score * 100),
                best_match.title, best_match.source_country,
            )
            continue

        kept.append(replace(article, similarity_score=best_score))

    log.info("Deduplicated %d → %d articles", len(articles), len(kept))
    return kept
