# aggregator/services/news_adapters/guardian.py
"""
Guardian Content API response envelope.

    {"response": {"status": "ok", "results": [...]}}

Article fields requested through show-fields come back nested under
"fields" (thumbnail, trailText, body).
"""

from typing import Any

from aggregator.services.news_adapters.base import RawArticle, as_article_list


def extract_articles(body: Any) -> list[RawArticle]:
    if not isinstance(body, dict):
        return []
    response = body.get("response")
    if not isinstance(response, dict):
        return []
    return as_article_list(response.get("results"))
