# aggregator/services/news_adapters/__init__.py
"""
Adapters for the external news APIs.

Each supported source contributes one pure extractor function; the
SourceAdapter combines it with the source's profile and the shared HTTP
fetcher. Adding a source = one profile in aggregator/source_profiles.py
plus one entry in ARTICLE_EXTRACTORS.

Supported APIs:
- NewsAPI.org ("newsapi")
- The Guardian ("guardian")
- New York Times ("nyt")
"""

from types import MappingProxyType

from aggregator.services.http_fetcher import HttpFetcher
from aggregator.services.news_adapters import guardian, newsapi, nyt
from aggregator.services.news_adapters.base import (
    ArticleExtractor,
    FetchParams,
    RawArticle,
    SourceAdapter,
)
from aggregator.source_profiles import SourceProfile

ARTICLE_EXTRACTORS: MappingProxyType[str, ArticleExtractor] = MappingProxyType({
    "newsapi": newsapi.extract_articles,
    "guardian": guardian.extract_articles,
    "nyt": nyt.extract_articles,
})


def create_adapter(profile: SourceProfile, fetcher: HttpFetcher) -> SourceAdapter | None:
    """Adapter for the profile's identifier, or None when no extractor exists."""
    extractor = ARTICLE_EXTRACTORS.get(profile.identifier)
    if extractor is None:
        return None
    return SourceAdapter(profile, fetcher, extractor)


__all__ = [
    "ARTICLE_EXTRACTORS",
    "FetchParams",
    "RawArticle",
    "SourceAdapter",
    "create_adapter",
]
