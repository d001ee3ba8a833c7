# aggregator/services/news_adapters/newsapi.py
"""
NewsAPI.org response envelope.

    {"status": "ok", "totalResults": N, "articles": [...]}

API Documentation: https://newsapi.org/docs/endpoints
"""

from typing import Any

from aggregator.services.news_adapters.base import RawArticle, as_article_list


def extract_articles(body: Any) -> list[RawArticle]:
    if not isinstance(body, dict):
        return []
    return as_article_list(body.get("articles"))
