"""Static table of upcoming national elections, keyed by the map's country codes."""

from datetime import date
from typing import Dict, List, Optional

from .models import ElectionEntry


def _entry(code: str, name: str, when: str, kind: str) -> ElectionEntry:
    return ElectionEntry(
        country_code=code,
        country_name=name,
        next_election=date.fromisoformat(when),
        election_type=kind,
    )


ELECTIONS: Dict[str, ElectionEntry] = {
    e.country_code: e
    for e in (
        # 2025
        _entry("DE", "Germany", "2025-02-23", "Federal Election (Bundestag) - COMPLETED"),
        _entry("RO", "Romania", "2025-05-18", "Presidential Election (2nd Round) - COMPLETED"),
        _entry("PL", "Poland", "2025-06-01", "Presidential Election (2nd Round)"),
        _entry("NO", "Norway", "2025-09-08", "Parliamentary Election"),
        _entry("CZ", "Czech Republic", "2025-10-11", "Parliamentary Election"),
        # 2026
        _entry("PT", "Portugal", "2026-01-11", "Presidential Election"),
        _entry("IE", "Ireland", "2026-02-07", "General Election"),
        _entry("NL", "Netherlands", "2026-03-15", "General Election"),
        _entry("FI", "Finland", "2026-04-19", "Parliamentary Election"),
        _entry("HU", "Hungary", "2026-04-26", "Parliamentary Election"),
        _entry("DK", "Denmark", "2026-06-05", "General Election"),
        _entry("SE", "Sweden", "2026-09-13", "General Election"),
        # 2027
        _entry("BG", "Bulgaria", "2027-04-04", "Parliamentary Election"),
        _entry("FR", "France", "2027-04-10", "Presidential Election (1st Round)"),
        _entry("IT", "Italy", "2027-06-07", "General Election"),
        _entry("GR", "Greece", "2027-06-25", "Parliamentary Election"),
        _entry("CH", "Switzerland", "2027-10-17", "Federal Election"),
        _entry("ES", "Spain", "2027-12-20", "General Election"),
        # 2028+
        _entry("BE", "Belgium", "2028-05-26", "Federal Election"),
        # No fixed date: latest possible after the 2024 election
        _entry("UK", "United Kingdom", "2029-01-28", "General Election (latest possible date)"),
        _entry("AT", "Austria", "2029-09-29", "National Council Election"),
    )
}


def get_election(code: Optional[str]) -> Optional[ElectionEntry]:
    """Exact lookup by map shape id; ids are matched upper-cased."""
    if not code:
        return None
    return ELECTIONS.get(code.strip().upper())


def days_until(entry: ElectionEntry, today: Optional[date] = None) -> int:
    """Calendar days from *today* to the election; negative once it has passed."""
    today = today or date.today()
    return (entry.next_election - today).days


def countdown_label(days: int) -> str:
    if days > 0:
        return f"{days} day remaining" if days == 1 else f"{days} days remaining"
    return "Election day has passed"


def format_election_date(when: date) -> str:
    return f"{when:%B} {when.day}, {when.year}"


def tooltip(code: Optional[str], today: Optional[date] = None) -> Optional[dict]:
    entry = get_election(code)
    if entry is None:
        return None
    days = days_until(entry, today)
    return {
        "code": entry.country_code,
        "name": entry.country_name,
        "election_type": entry.election_type,
        "date": entry.next_election.isoformat(),
        "date_label": format_election_date(entry.next_election),
        "days_remaining": days,
        "passed": days <= 0,
        "countdown": countdown_label(days),
    }


def upcoming(today: Optional[date] = None, include_passed: bool = True) -> List[dict]:
    """Tooltip data for every country, soonest election first."""
    rows = [tooltip(code, today) for code in ELECTIONS]
    rows.sort(key=lambda r: r["date"])
    if not include_passed:
        rows = [r for r in rows if not r["passed"]]
    return rows
