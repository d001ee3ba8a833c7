"""
Pydantic schemas for API request/response validation.
"""

from aggregator.schemas.articles import (
    ArticleAuthorRef,
    ArticleCategoryRef,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleSourceRef,
)
from aggregator.schemas.preferences import (
    PreferenceResponse,
    PreferenceUpdate,
)

__all__ = [
    "ArticleAuthorRef",
    "ArticleCategoryRef",
    "ArticleDetailResponse",
    "ArticleListResponse",
    "ArticleResponse",
    "ArticleSourceRef",
    "PreferenceResponse",
    "PreferenceUpdate",
]
