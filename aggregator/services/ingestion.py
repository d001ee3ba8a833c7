# aggregator/services/ingestion.py
"""
News API ingestion service.

Pipeline, per source:
1. Resolve the source profile and its adapter
2. Fetch the API response and extract raw articles
3. Transform each raw article through the profile's field mapping
4. Resolve category and author (get-or-create)
5. Upsert the article keyed by url_hash, one commit per article

A source run either processes at least one article (True) or fails with a
log line (False). Nothing raises out of run() or run_all().
"""

import logging
from typing import Any, Iterable, Mapping

from sqlalchemy.orm import Session

from aggregator.config import get_settings
from aggregator.errors import ConfigurationError, FetchError
from aggregator.logging_config import log_stage, new_trace_id
from aggregator.services.http_fetcher import HttpFetcher
from aggregator.services.lookups import get_or_create_author, get_or_create_category
from aggregator.services.news_adapters import FetchParams, SourceAdapter, create_adapter
from aggregator.services.persistence import find_source_by_identifier, upsert_article
from aggregator.services.transformer import is_valid, transform
from aggregator.source_profiles import SourceProfile

logger = logging.getLogger(__name__)


class IngestionService:
    """Fetches news API sources and stores their articles."""

    def __init__(
        self,
        profiles: Mapping[str, SourceProfile],
        fetcher: HttpFetcher | None = None,
    ):
        self.profiles = profiles
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or HttpFetcher.from_settings(get_settings())

    def run(
        self,
        db: Session,
        source_identifier: str,
        params: FetchParams | None = None,
    ) -> bool:
        """
        Ingest one source.

        Returns:
            True if at least one article was created or updated
        """
        profile = self.profiles.get(source_identifier)
        if profile is None:
            logger.error(
                f"News source profile '{source_identifier}' not found.",
                extra={"event": "source_failed", "source": source_identifier},
            )
            return False

        try:
            adapter = create_adapter(profile, self.fetcher)
            if adapter is None:
                raise ConfigurationError(f"No adapter found for profile '{source_identifier}'")

            source = find_source_by_identifier(db, source_identifier)
            if source is None:
                raise ConfigurationError(f"Source not found for profile: {source_identifier}")
            source_id = source.id

            logger.info(
                f"Fetching articles from {profile.name}",
                extra={"event": "source_start", "source": source_identifier},
            )
            articles = adapter.fetch_articles(params)
        except (ConfigurationError, FetchError) as e:
            db.rollback()
            logger.error(
                f"Failed to fetch from {profile.name}: {e}",
                extra={"event": "source_failed", "source": source_identifier},
            )
            return False
        except Exception as e:
            db.rollback()
            logger.error(
                f"Failed to fetch from {profile.name}: {e}",
                extra={"event": "source_failed", "source": source_identifier},
                exc_info=True,
            )
            return False

        if not articles:
            logger.warning(
                f"No articles found in response from {profile.name}",
                extra={"event": "extraction_empty", "source": source_identifier},
            )
            return False

        return self._process_articles(db, adapter, source_id, articles)

    def _process_articles(
        self,
        db: Session,
        adapter: SourceAdapter,
        source_id: int,
        articles: list[dict[str, Any]],
    ) -> bool:
        profile = adapter.profile
        stats = {"received": len(articles), "processed": 0, "skipped": 0, "failed": 0}

        for raw in articles:
            try:
                article = transform(raw, profile.field_mapping, profile.image_prefix)
                if not is_valid(article):
                    stats["skipped"] += 1
                    continue

                category = get_or_create_category(db, article.category_name)
                author = get_or_create_author(db, article.author_name, source_id)

                upsert_article(
                    db,
                    article,
                    source_id=source_id,
                    category_id=category.id if category else None,
                    author_id=author.id if author else None,
                )
                db.commit()
                stats["processed"] += 1

            except Exception as e:
                db.rollback()  # Reset session so the next article can proceed
                stats["failed"] += 1
                logger.warning(
                    f"Error processing article from {profile.name}: {e}",
                    extra={"event": "item_failed", "source": profile.identifier},
                )

        logger.info(
            f"Processed {stats['processed']} articles from {adapter.name()}",
            extra={
                "event": "source_complete",
                "source": profile.identifier,
                "items_received": stats["received"],
                "items_processed": stats["processed"],
                "items_skipped": stats["skipped"],
                "items_failed": stats["failed"],
            },
        )
        return stats["processed"] > 0

    def run_all(
        self,
        db: Session,
        source_identifiers: Iterable[str] | None = None,
        params: FetchParams | None = None,
    ) -> dict[str, bool]:
        """
        Ingest several sources one after another (default: every profile).

        Each source succeeds or fails on its own. Returns identifier -> result.
        """
        identifiers = list(source_identifiers) if source_identifiers is not None else list(self.profiles)
        trace_id = new_trace_id()
        results: dict[str, bool] = {}

        for identifier in identifiers:
            with log_stage(f"ingest:{identifier}", trace_id=trace_id):
                results[identifier] = self.run(db, identifier, params)

        succeeded = sum(1 for ok in results.values() if ok)
        logger.info(
            f"Ingestion finished: {succeeded}/{len(results)} sources succeeded",
            extra={"event": "run_complete"},
        )
        return results

    def close(self) -> None:
        """Close the fetcher if this service created it."""
        if self._owns_fetcher:
            self.fetcher.close()
