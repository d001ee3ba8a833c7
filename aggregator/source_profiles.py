# aggregator/source_profiles.py
"""
Static descriptors for the external news APIs.

Each SourceProfile says how to call one API (base URL, endpoints, auth query
parameter, default params) and how to read its articles (field mapping from
our field names to dot-paths in the API's article objects).

Profiles are built once at startup from Settings and handed to the
IngestionService as a read-only mapping. Adding a source means adding one
entry here plus one extractor in aggregator/services/news_adapters/.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from aggregator.config import Settings

DEFAULT_API_KEY_PARAM = "apiKey"


@dataclass(frozen=True)
class SourceProfile:
    """Immutable per-source access pattern and schema mapping."""

    identifier: str
    name: str
    base_url: str
    endpoints: Mapping[str, str]
    field_mapping: Mapping[str, str | None]
    api_key: str | None = None
    api_key_param: str = DEFAULT_API_KEY_PARAM
    default_params: Mapping[str, object] = field(default_factory=dict)
    default_endpoint: str | None = None
    default_path_params: Mapping[str, str] = field(default_factory=dict)
    image_prefix: str | None = None
    # Informational only; nothing enforces these in-process
    rate_limit: Mapping[str, int] = field(default_factory=dict)
    website_url: str | None = None
    description: str | None = None

    def __post_init__(self):
        if not self.endpoints:
            raise ValueError(f"Source profile '{self.identifier}' declares no endpoints")
        if self.default_endpoint and self.default_endpoint not in self.endpoints:
            raise ValueError(
                f"Source profile '{self.identifier}' default endpoint "
                f"'{self.default_endpoint}' is not declared"
            )
        # Freeze nested mappings so a loaded profile can't be mutated through them
        for attr in ("endpoints", "field_mapping", "default_params", "default_path_params", "rate_limit"):
            object.__setattr__(self, attr, MappingProxyType(dict(getattr(self, attr))))

    def resolve_endpoint(self, endpoint: str | None = None) -> str:
        """Endpoint key to call: explicit > profile default > first declared."""
        if endpoint:
            return endpoint
        if self.default_endpoint:
            return self.default_endpoint
        return next(iter(self.endpoints))


def build_source_profiles(settings: Settings) -> Mapping[str, SourceProfile]:
    """Build the identifier -> SourceProfile table for all supported news APIs."""
    profiles = [
        SourceProfile(
            identifier="newsapi",
            name="NewsAPI.org",
            base_url="https://newsapi.org/v2/",
            api_key=settings.NEWSAPI_KEY,
            endpoints={
                "top_headlines": "top-headlines",
                "everything": "everything",
            },
            default_endpoint="top_headlines",
            default_params={
                "language": "en",
                "pageSize": 100,
            },
            field_mapping={
                "title": "title",
                "description": "description",
                "content": "content",
                "url": "url",
                "image_url": "urlToImage",
                "published_at": "publishedAt",
                "author": "author",
                "source_name": "source.name",
            },
            rate_limit={
                "requests_per_day": 1000,
                "requests_per_hour": 100,
            },
            website_url="https://newsapi.org",
            description="70,000+ news sources from around the world",
        ),
        SourceProfile(
            identifier="guardian",
            name="The Guardian",
            base_url="https://content.guardianapis.com/",
            api_key=settings.GUARDIAN_API_KEY,
            api_key_param="api-key",
            endpoints={
                "search": "search",
            },
            default_params={
                "show-fields": "thumbnail,trailText,body",
                "page-size": 50,
            },
            field_mapping={
                "title": "webTitle",
                "description": "fields.trailText",
                "content": "fields.body",
                "url": "webUrl",
                "image_url": "fields.thumbnail",
                "published_at": "webPublicationDate",
                "author": None,
                "source_name": "sectionName",
            },
            rate_limit={
                "requests_per_day": 5000,
                "requests_per_second": 5,
            },
            website_url="https://www.theguardian.com",
            description="British daily newspaper with comprehensive news coverage",
        ),
        SourceProfile(
            identifier="nyt",
            name="New York Times",
            base_url="https://api.nytimes.com/svc/",
            api_key=settings.NYT_API_KEY,
            api_key_param="api-key",
            endpoints={
                "top_stories": "topstories/v2/{section}.json",
                "article_search": "search/v2/articlesearch.json",
                "most_popular": "mostpopular/v2/viewed/{period}.json",
            },
            default_endpoint="top_stories",
            default_path_params={
                "section": "home",
                "period": "1",
            },
            field_mapping={
                "title": "title",
                "description": "abstract",
                "content": "abstract",
                "url": "url",
                "image_url": "multimedia.0.url",
                "published_at": "published_date",
                "author": "byline",
                "source_name": "section",
            },
            image_prefix="https://www.nytimes.com/",
            rate_limit={
                "requests_per_day": 4000,
                "requests_per_minute": 10,
            },
            website_url="https://www.nytimes.com",
            description="American newspaper with global news coverage",
        ),
    ]
    return MappingProxyType({p.identifier: p for p in profiles})
