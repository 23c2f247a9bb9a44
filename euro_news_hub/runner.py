import json
import logging
from datetime import date

import click

from .aggregate import get_european_news, similarity_report
from .config import get_settings
from .dashboard import load_dashboard, render_dashboard
from .elections import tooltip


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Log pipeline details.")
def main(verbose):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
def news():
    """Print the current European headline selection as JSON."""
    result = get_european_news()
    click.echo(json.dumps({
        "articles": [a.as_dict() for a in result.articles],
        "lastUpdated": result.generated_at.isoformat(),
        "fromCache": result.from_cache,
        "totalSourceArticles": result.total_source_articles,
        "uniqueAfterFiltering": result.unique_after_filtering,
    }, indent=2, ensure_ascii=False))


@main.command()
@click.option("--date", "run_date", default=None, help="Override today's date YYYY-MM-DD.")
def render(run_date):
    """Write the dashboard page to output/dashboard.html."""
    settings = get_settings()
    today = date.fromisoformat(run_date) if run_date else date.today()
    html = render_dashboard(load_dashboard(settings, today=today), today=today)

    output_path = settings.project_root / "output" / "dashboard.html"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    click.echo(f"Generated dashboard -> {output_path}")


@main.command()
@click.argument("code")
def election(code):
    """Show the election countdown for one country code."""
    info = tooltip(code)
    if info is None:
        raise click.ClickException(f"No election data for '{code}'")
    click.echo(f"{info['name']}: {info['election_type']} on {info['date_label']} ({info['countdown']})")


@main.command()
@click.argument("title_a")
@click.argument("title_b")
def similarity(title_a, title_b):
    """Score two headlines with the duplicate detector."""
    report = similarity_report(title_a, title_b)
    verdict = "duplicate" if report["duplicate"] else "distinct"
    click.echo(f"{report['percent']}% similar ({verdict})")


if __name__ == "__main__":
    main()
