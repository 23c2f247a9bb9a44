"""Source-balanced random selection of the headlines to display."""

import logging
import random
from typing import List, Optional, Sequence

from .models import Article, Country

log = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def select_balanced(
    articles: Sequence[Article],
    countries: Sequence[Country],
    limit: int = DEFAULT_LIMIT,
    rng: Optional[random.Random] = None,
) -> List[Article]:
    """Pick ``min(limit, len(articles))`` articles, one per country first.

    The first pass walks *countries* in order and takes one random article
    from each country that still has candidates. The second pass fills the
    remaining slots at random from whatever is left. The result is shuffled
    so the grouping does not show in display order. Pass a seeded *rng* for
    reproducible output.
    """
    rng = rng or random.Random()
    remaining = list(articles)
    selected: List[Article] = []

    for country in countries:
        if len(selected) >= limit:
            break
        candidates = [i for i, a in enumerate(remaining) if a.source_country == country.display_code]
        if not candidates:
            continue
        picked = remaining.pop(rng.choice(candidates))
        selected.append(picked)
        log.debug("Selected from %s: '%s'", country.name, picked.title[:50])

    while len(selected) < limit and remaining:
        picked = remaining.pop(rng.randrange(len(remaining)))
        selected.append(picked)
        log.debug("Randomly selected: '%s' [%s]", picked.title[:50], picked.source_country)

    rng.shuffle(selected)
    log.info(
        "Selected %d of %d articles: %s",
        len(selected), len(articles), ", ".join(a.source_country for a in selected),
    )
    return selected
