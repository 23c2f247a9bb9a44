import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    gnews_api_key: str = ""
    contentful_space_id: str = ""
    contentful_access_token: str = ""
    contentful_environment: str = "master"
    cache_ttl_minutes: int = 60
    max_articles: int = 5
    per_country: int = 10
    similarity_threshold: float = 0.65
    countries: Tuple[str, ...] = ("fr", "de", "it", "es")
    http_timeout: float = 10.0
    project_root: Path = Path(__file__).resolve().parent.parent

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_ttl_minutes)

    @property
    def has_gnews_key(self) -> bool:
        return bool(self.gnews_api_key)

    @property
    def has_contentful_credentials(self) -> bool:
        return bool(self.contentful_space_id and self.contentful_access_token)


def _parse_countries(raw: str) -> Tuple[str, ...]:
    codes = [c.strip().lower() for c in raw.split(",")]
    return tuple(dict.fromkeys(c for c in codes if c))


def get_settings() -> Settings:
    # Missing keys are not fatal here: every adapter degrades to empty results.
    return Settings(
        gnews_api_key=os.getenv("GNEWS_API_KEY", ""),
        contentful_space_id=os.getenv("CONTENTFUL_SPACE_ID", ""),
        contentful_access_token=os.getenv("CONTENTFUL_ACCESS_TOKEN", ""),
        contentful_environment=os.getenv("CONTENTFUL_ENVIRONMENT", "master"),
        cache_ttl_minutes=int(os.getenv("NEWS_CACHE_TTL_MINUTES", "60")),
        max_articles=int(os.getenv("NEWS_MAX_ARTICLES", "5")),
        per_country=int(os.getenv("NEWS_PER_COUNTRY", "10")),
        similarity_threshold=float(os.getenv("NEWS_SIMILARITY_THRESHOLD", "0.65")),
        countries=_parse_countries(os.getenv("NEWS_COUNTRIES", "fr,de,it,es")) or ("fr", "de", "it", "es"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
    )
