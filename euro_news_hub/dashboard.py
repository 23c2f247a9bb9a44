import concurrent.futures
import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .aggregate import get_european_news
from .cache import utc_now
from .config import Settings, get_settings
from .contentful import fetch_editorial_headlines
from .elections import upcoming
from .models import DashboardData, EditorialHeadline

log = logging.getLogger(__name__)


TEMPLATE_DIR = Path(__file__).resolve().parent / "template"

HEADLINE_DAYS = 5
HEADLINES_PER_DAY = 3
NEWS_PANEL_MAX = 8

UI_STRINGS = {
    "title": "European News & Elections Hub",
    "subtitle": "Live European news and election tracking",
    "headlines_title": "Recent Headlines",
    "map_title": "Election Countdown Map",
    "news_title": "European News",
    "no_headlines": "No headlines available",
    "cached": "Cached",
    "live": "Live",
    "footer": "Updates every hour",
    "refresh": "Refresh News",
}


def _headline_day(headline: EditorialHeadline) -> Optional[date]:
    raw = (headline.date or "").strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def _day_label(day: date) -> str:
    return f"{day:%a}, {day:%b} {day.day}"


def group_headlines_by_day(
    headlines: Sequence[EditorialHeadline],
    today: Optional[date] = None,
    days: int = HEADLINE_DAYS,
) -> List[Dict]:
    """Bucket headlines into today and the previous ``days - 1`` days, newest first.
    Headlines with unparseable dates or outside the window are left out."""
    today = today or date.today()
    buckets: List[Dict] = []
    for offset in range(days):
        day = today - timedelta(days=offset)
        buckets.append({
            "date": _day_label(day),
            "day": day.isoformat(),
            "articles": [h for h in headlines if _headline_day(h) == day],
        })
    return buckets


def load_dashboard(settings: Optional[Settings] = None, today: Optional[date] = None) -> DashboardData:
    """Load both news panels side by side; one panel failing leaves the other intact."""
    settings = settings or get_settings()
    data = DashboardData()
    errors: List[str] = []

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        headlines_future = executor.submit(fetch_editorial_headlines, settings)
        news_future = executor.submit(get_european_news, settings)

        try:
            data.headlines_by_day = group_headlines_by_day(headlines_future.result(), today=today)
        except Exception as exc:
            log.error("Loading editorial headlines failed: %s", exc)
            data.headlines_by_day = group_headlines_by_day([], today=today)
            errors.append(str(exc))

        try:
            news = news_future.result()
            data.top_headlines = list(news.articles)
            data.from_cache = news.from_cache
        except Exception as exc:
            log.error("Loading European news failed: %s", exc)
            errors.append(str(exc))

    data.last_updated = utc_now()
    data.error = "; ".join(errors) or None
    return data


def _get_env() -> Environment:
    loader = FileSystemLoader(str(TEMPLATE_DIR))
    env = Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "html.j2"]))
    return env


def render_dashboard(data: DashboardData, today: Optional[date] = None) -> str:
    env = _get_env()
    template = env.get_template("dashboard.html.j2")
    today = today or date.today()

    return template.render(
        ui=UI_STRINGS,
        headlines_by_day=data.headlines_by_day,
        headlines_per_day=HEADLINES_PER_DAY,
        elections=upcoming(today),
        top_headlines=data.top_headlines[:NEWS_PANEL_MAX],
        from_cache=data.from_cache,
        last_updated=data.last_updated.strftime("%H:%M:%S") if data.last_updated else None,
        error=data.error,
        today=today.isoformat(),
    )
