"""
Business logic services.
"""

from aggregator.services.article_service import ArticleService
from aggregator.services.http_fetcher import HttpFetcher
from aggregator.services.ingestion import IngestionService

__all__ = [
    "ArticleService",
    "HttpFetcher",
    "IngestionService",
]
