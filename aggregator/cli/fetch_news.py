# aggregator/cli/fetch_news.py
"""
CLI for pulling articles from the news APIs.

Usage:
    python -m aggregator.cli.fetch_news
    python -m aggregator.cli.fetch_news newsapi --category technology
    python -m aggregator.cli.fetch_news guardian --query climate
    python -m aggregator.cli.fetch_news nyt --endpoint top_stories --section world

Exit status is 0 only when every requested source stored at least one article.
"""

import argparse
import sys

from dotenv import load_dotenv

load_dotenv()


def get_db_session():
    """Get a database session."""
    from aggregator.database import SessionLocal

    return SessionLocal()


def build_fetch_params(args):
    """Turn CLI options into FetchParams; empty options are dropped."""
    from aggregator.services.news_adapters import FetchParams

    query_params = {
        key: value
        for key, value in (("category", args.category), ("q", args.query))
        if value
    }
    path_params = {"section": args.section} if args.section else {}
    return FetchParams(
        endpoint=args.endpoint or None,
        path_params=path_params,
        query_params=query_params,
    )


def cmd_fetch(args) -> int:
    """Fetch one source, or all of them, and print a pass/fail line per source."""
    from aggregator.config import get_settings
    from aggregator.logging_config import configure_logging
    from aggregator.services.ingestion import IngestionService
    from aggregator.source_profiles import build_source_profiles

    settings = get_settings()
    configure_logging(json_format=settings.LOG_JSON, level=settings.LOG_LEVEL)

    profiles = build_source_profiles(settings)
    sources = [args.source] if args.source else list(profiles)
    params = build_fetch_params(args)

    service = IngestionService(profiles)
    db = get_db_session()
    try:
        results = service.run_all(db, sources, params)
    finally:
        db.close()
        service.close()

    for source, ok in results.items():
        if ok:
            print(f"Successfully fetched articles from {source}")
        else:
            print(f"Failed to fetch articles from {source}")

    return 0 if results and all(results.values()) else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Fetch news articles from configured sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every configured source
  python -m aggregator.cli.fetch_news

  # One source with a category filter
  python -m aggregator.cli.fetch_news newsapi --category business

  # NYT top stories for a section
  python -m aggregator.cli.fetch_news nyt --endpoint top_stories --section science
        """,
    )
    parser.add_argument("source", nargs="?", help="Source identifier (newsapi, guardian, nyt); all when omitted")
    parser.add_argument("--category", help="Category filter passed to the API")
    parser.add_argument("--query", help="Keyword query passed to the API")
    parser.add_argument("--endpoint", help="Endpoint key from the source profile")
    parser.add_argument("--section", help="Section for endpoints with a {section} path segment")
    parser.set_defaults(func=cmd_fetch)

    args = parser.parse_args(argv)
    if not args.source and (args.endpoint or args.section):
        parser.error("--endpoint and --section need a source; endpoint keys differ per source")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
