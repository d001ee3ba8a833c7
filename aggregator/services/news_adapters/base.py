# aggregator/services/news_adapters/base.py
"""
Source adapter shared by every news API.

A SourceAdapter pairs a SourceProfile (how to call the API) with a pure
extractor function (where the articles live in that API's response
envelope). Request building, key injection and transport errors are the
same for every source, so there is a single adapter class rather than one
subclass per API.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from aggregator.errors import ConfigurationError
from aggregator.services.http_fetcher import HttpFetcher
from aggregator.source_profiles import SourceProfile

logger = logging.getLogger(__name__)

RawArticle = dict[str, Any]
ArticleExtractor = Callable[[Any], list[RawArticle]]

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


@dataclass
class FetchParams:
    """
    Caller-supplied request options.

    endpoint: endpoint key from the profile (None = profile default)
    path_params: values for {placeholder} tokens in the endpoint path
    query_params: extra query string values (override profile defaults)
    """

    endpoint: str | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, Any] = field(default_factory=dict)


def as_article_list(value: Any) -> list[RawArticle]:
    """Keep only the dict items of a list; anything else yields []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class SourceAdapter:
    """Fetches one source's response and extracts its raw articles."""

    def __init__(
        self,
        profile: SourceProfile,
        fetcher: HttpFetcher,
        extractor: ArticleExtractor,
    ):
        self.profile = profile
        self.fetcher = fetcher
        self.extractor = extractor

    def name(self) -> str:
        return self.profile.identifier

    def build_request(self, params: FetchParams | None = None) -> tuple[str, dict[str, Any]]:
        """
        Build the request URL and query string for one call.

        Query precedence: profile defaults < caller params < API key.

        Raises:
            ConfigurationError: unknown endpoint key, missing API key, or a
                path placeholder with no value
        """
        params = params or FetchParams()
        profile = self.profile

        endpoint_key = profile.resolve_endpoint(params.endpoint)
        if endpoint_key not in profile.endpoints:
            raise ConfigurationError(
                f"Unknown endpoint '{endpoint_key}' for source '{profile.identifier}'"
            )

        if not profile.api_key:
            raise ConfigurationError(f"No API key configured for {profile.name}")

        path_values = {**profile.default_path_params, **params.path_params}
        path = profile.endpoints[endpoint_key]

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in path_values or path_values[key] in (None, ""):
                raise ConfigurationError(
                    f"Missing path parameter '{key}' for {profile.name} endpoint '{endpoint_key}'"
                )
            return str(path_values[key])

        url = profile.base_url + _PLACEHOLDER_RE.sub(substitute, path)

        query: dict[str, Any] = dict(profile.default_params)
        query.update(params.query_params)
        query[profile.api_key_param] = profile.api_key

        return url, query

    def fetch(self, params: FetchParams | None = None) -> Any:
        """
        Call the API and return the parsed JSON body.

        Raises:
            ConfigurationError: see build_request
            FetchError: transport failure or unusable response
        """
        url, query = self.build_request(params)
        logger.info(
            f"Fetching from {self.profile.name}: {url}",
            extra={"event": "fetch_start", "source": self.profile.identifier, "url": url},
        )
        return self.fetcher.get_json(url, query).body

    def extract_articles(self, body: Any) -> list[RawArticle]:
        return self.extractor(body)

    def fetch_articles(self, params: FetchParams | None = None) -> list[RawArticle]:
        """fetch + extract_articles."""
        return self.extract_articles(self.fetch(params))
