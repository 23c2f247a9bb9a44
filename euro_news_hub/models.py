from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass(frozen=True)
class Country:
    code: str  # lower-case GNews country parameter, e.g. "fr"
    name: str
    flag: str
    display_code: str  # upper-case tag shown next to headlines, e.g. "FR"


@dataclass(frozen=True)
class Article:
    title: str
    source_name: str
    url: str
    published_at: str
    source_country: str
    similarity_score: float = 0.0  # informational, set by deduplicate()


@dataclass(frozen=True)
class DisplayArticle:
    number: int
    title: str
    author: str
    link: str
    published_at: str
    country: str
    country_name: str
    country_flag: str
    similarity: float = 0.0

    def as_dict(self) -> dict:
        return {
            "number": self.number,
            "title": self.title,
            "author": self.author,
            "link": self.link,
            "publishedAt": self.published_at,
            "country": self.country,
            "countryName": self.country_name,
            "countryFlag": self.country_flag,
            "similarity": self.similarity,
        }


@dataclass(frozen=True)
class CachedResult:
    articles: List[DisplayArticle]
    generated_at: datetime
    from_cache: bool = False
    stale: bool = False  # served from the slot after a failed refresh
    total_source_articles: int = 0
    unique_after_filtering: int = 0


@dataclass(frozen=True)
class ElectionEntry:
    country_code: str
    country_name: str
    next_election: date
    election_type: str


@dataclass(frozen=True)
class EditorialHeadline:
    title: str
    author: str
    link: str
    date: str  # ISO string, entry date or creation time


@dataclass
class DashboardData:
    headlines_by_day: List[dict] = field(default_factory=list)
    top_headlines: List[DisplayArticle] = field(default_factory=list)
    from_cache: bool = False
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
