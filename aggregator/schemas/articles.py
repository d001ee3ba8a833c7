# aggregator/schemas/articles.py
"""
Schemas for article endpoints.

GET /v1/articles               - Paginated article list
GET /v1/articles/search        - Keyword search
GET /v1/articles/personalized  - Feed filtered by user preferences
GET /v1/articles/{id}          - Single article with content
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ArticleSourceRef(BaseModel):
    """Source summary embedded in an article."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    api_identifier: str


class ArticleCategoryRef(BaseModel):
    """Category summary embedded in an article."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class ArticleAuthorRef(BaseModel):
    """Author summary embedded in an article."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ArticleResponse(BaseModel):
    """An article as listed in feeds and search results."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    url: str
    image_url: str | None = None
    published_at: datetime | None = None
    source: ArticleSourceRef
    category: ArticleCategoryRef | None = None
    author: ArticleAuthorRef | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ArticleDetailResponse(ArticleResponse):
    """A single article, including its content."""

    content: str | None = None


class ArticleListResponse(BaseModel):
    """One page of articles."""

    data: list[ArticleResponse]
    page: int = Field(..., description="Current page (1-based)")
    per_page: int = Field(..., description="Page size")
    total: int = Field(..., description="Total matching articles")
    last_page: int = Field(..., description="Last page number (1 when empty)")
