# aggregator/services/news_adapters/nyt.py
"""
New York Times API response envelopes.

Top Stories and Most Popular return {"results": [...]}; Article Search
returns {"response": {"docs": [...]}}.
"""

from typing import Any

from aggregator.services.news_adapters.base import RawArticle, as_article_list


def extract_articles(body: Any) -> list[RawArticle]:
    if not isinstance(body, dict):
        return []

    results = body.get("results")
    if results is not None:
        return as_article_list(results)

    response = body.get("response")
    if isinstance(response, dict):
        return as_article_list(response.get("docs"))
    return []
