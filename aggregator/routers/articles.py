# aggregator/routers/articles.py
"""
Article endpoints.

GET /v1/articles               - Paginated list, newest first
GET /v1/articles/search        - Keyword search
GET /v1/articles/personalized  - Feed filtered by a user's preferences
GET /v1/articles/{article_id}  - Single article
"""

from datetime import date, datetime, time

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from aggregator.database import get_db
from aggregator.schemas.articles import ArticleDetailResponse, ArticleListResponse
from aggregator.services.article_service import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    ArticleFilters,
    ArticleService,
)

router = APIRouter(prefix="/v1/articles", tags=["articles"])


def article_filters(
    source_id: int | None = Query(None, ge=1, description="Only articles from this source"),
    category_id: int | None = Query(None, ge=1, description="Only articles in this category"),
    from_date: date | None = Query(None, description="Published on or after (YYYY-MM-DD)"),
    to_date: date | None = Query(None, description="Published on or before (YYYY-MM-DD)"),
) -> ArticleFilters:
    """Shared filter query params. Dates are whole days, to_date inclusive."""
    if from_date and to_date and from_date > to_date:
        raise HTTPException(status_code=422, detail="from_date must be on or before to_date")
    return ArticleFilters(
        source_id=source_id,
        category_id=category_id,
        from_date=datetime.combine(from_date, time.min) if from_date else None,
        to_date=datetime.combine(to_date, time.max) if to_date else None,
    )


@router.get("", response_model=ArticleListResponse)
def list_articles(
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    filters: ArticleFilters = Depends(article_filters),
    db: Session = Depends(get_db),
) -> ArticleListResponse:
    """List articles, newest first."""
    return ArticleService(db).list_articles(filters, page=page, per_page=per_page)


@router.get("/search", response_model=ArticleListResponse)
def search_articles(
    keyword: str = Query(..., min_length=1, max_length=255, description="Text to look for"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    filters: ArticleFilters = Depends(article_filters),
    db: Session = Depends(get_db),
) -> ArticleListResponse:
    """Search title, description and content."""
    return ArticleService(db).search_articles(keyword, filters, page=page, per_page=per_page)


@router.get("/personalized", response_model=ArticleListResponse)
def personalized_feed(
    user_id: int = Query(..., ge=1),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    filters: ArticleFilters = Depends(article_filters),
    db: Session = Depends(get_db),
) -> ArticleListResponse:
    return ArticleService(db).personalized_feed(user_id, filters, page=page, per_page=per_page)


@router.get("/{article_id}", response_model=ArticleDetailResponse)
def get_article(
    article_id: int,
    db: Session = Depends(get_db),
) -> ArticleDetailResponse:
    article = ArticleService(db).get_article(article_id)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")
    return ArticleDetailResponse.model_validate(article)
