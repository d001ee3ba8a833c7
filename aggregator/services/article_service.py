# aggregator/services/article_service.py
"""
Read queries over ingested articles, plus user preference storage.

Provides:
- Paginated listing with source/category/date filters
- Keyword search (case-insensitive substring over title, description, content)
- Personalized feed: any preferred source OR category OR author, AND the filters
- Preference read/update with id validation
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from aggregator import models
from aggregator.schemas.articles import ArticleListResponse, ArticleResponse
from aggregator.schemas.preferences import PreferenceResponse, PreferenceUpdate

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 12
MAX_PER_PAGE = 100

# preference field -> model whose ids it holds
PREFERENCE_TARGETS = {
    "preferred_sources": models.Source,
    "preferred_categories": models.Category,
    "preferred_authors": models.Author,
}


class InvalidPreferencesError(ValueError):
    """Preference update references ids that don't exist."""

    def __init__(self, errors: dict[str, list[int]]):
        self.errors = errors
        details = "; ".join(f"{field}: unknown ids {ids}" for field, ids in errors.items())
        super().__init__(f"Invalid preferences - {details}")


@dataclass
class ArticleFilters:
    """Optional filters shared by list, search and personalized feed."""

    source_id: int | None = None
    category_id: int | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None


class ArticleService:
    """Queries the article store for the serving API."""

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # Articles
    # -------------------------------------------------------------------------

    def _base_query(self) -> Query:
        return self.db.query(models.Article).options(
            joinedload(models.Article.source),
            joinedload(models.Article.category),
            joinedload(models.Article.author),
        )

    @staticmethod
    def _apply_filters(query: Query, filters: ArticleFilters | None) -> Query:
        if filters is None:
            return query
        if filters.source_id:
            query = query.filter(models.Article.source_id == filters.source_id)
        if filters.category_id:
            query = query.filter(models.Article.category_id == filters.category_id)
        if filters.from_date:
            query = query.filter(models.Article.published_at >= filters.from_date)
        if filters.to_date:
            query = query.filter(models.Article.published_at <= filters.to_date)
        return query

    @staticmethod
    def _paginate(query: Query, page: int, per_page: int) -> ArticleListResponse:
        per_page = max(1, min(per_page, MAX_PER_PAGE))
        page = max(1, page)

        total = query.order_by(None).count()
        articles = (
            query.order_by(
                models.Article.published_at.desc().nullslast(),
                models.Article.id.desc(),
            )
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )

        return ArticleListResponse(
            data=[ArticleResponse.model_validate(a) for a in articles],
            page=page,
            per_page=per_page,
            total=total,
            last_page=max(1, math.ceil(total / per_page)),
        )

    def list_articles(
        self,
        filters: ArticleFilters | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> ArticleListResponse:
        """Newest articles first."""
        query = self._apply_filters(self._base_query(), filters)
        return self._paginate(query, page, per_page)

    def search_articles(
        self,
        keyword: str,
        filters: ArticleFilters | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> ArticleListResponse:
        """Articles whose title, description or content contains the keyword."""
        needle = keyword.strip()
        query = self._base_query()
        if needle:
            query = query.filter(
                or_(
                    models.Article.title.icontains(needle, autoescape=True),
                    models.Article.description.icontains(needle, autoescape=True),
                    models.Article.content.icontains(needle, autoescape=True),
                )
            )
        query = self._apply_filters(query, filters)
        return self._paginate(query, page, per_page)

    def personalized_feed(
        self,
        user_id: int,
        filters: ArticleFilters | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> ArticleListResponse:
        """
        Articles matching any of the user's preferences.

        Users without stored preferences (or with all lists empty) get the
        plain list.
        """
        prefs = self._find_preferences(user_id)
        query = self._base_query()

        if prefs is not None:
            conditions = []
            if prefs.preferred_sources:
                conditions.append(models.Article.source_id.in_(prefs.preferred_sources))
            if prefs.preferred_categories:
                conditions.append(models.Article.category_id.in_(prefs.preferred_categories))
            if prefs.preferred_authors:
                conditions.append(models.Article.author_id.in_(prefs.preferred_authors))
            if conditions:
                query = query.filter(or_(*conditions))

        query = self._apply_filters(query, filters)
        return self._paginate(query, page, per_page)

    def get_article(self, article_id: int) -> models.Article | None:
        return self._base_query().filter(models.Article.id == article_id).first()

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def _find_preferences(self, user_id: int) -> models.UserPreference | None:
        return (
            self.db.query(models.UserPreference)
            .filter(models.UserPreference.user_id == user_id)
            .first()
        )

    def get_preferences(self, user_id: int) -> PreferenceResponse:
        prefs = self._find_preferences(user_id)
        if prefs is None:
            return PreferenceResponse(user_id=user_id)
        return PreferenceResponse.model_validate(prefs)

    def update_preferences(self, user_id: int, update: PreferenceUpdate) -> PreferenceResponse:
        """
        Store the given preference lists for the user.

        Raises:
            InvalidPreferencesError: if any id doesn't exist
        """
        changes = update.model_dump(exclude_none=True)

        errors: dict[str, list[int]] = {}
        for field, ids in changes.items():
            model = PREFERENCE_TARGETS[field]
            wanted = set(ids)
            found = {
                row_id
                for (row_id,) in self.db.query(model.id).filter(model.id.in_(wanted)).all()
            } if wanted else set()
            missing = sorted(wanted - found)
            if missing:
                errors[field] = missing
        if errors:
            raise InvalidPreferencesError(errors)

        prefs = self._find_preferences(user_id)
        if prefs is None:
            prefs = models.UserPreference(
                user_id=user_id,
                preferred_sources=[],
                preferred_categories=[],
                preferred_authors=[],
            )
            self.db.add(prefs)

        for field, ids in changes.items():
            # De-duplicate, keep caller order
            setattr(prefs, field, list(dict.fromkeys(ids)))

        self.db.commit()
        self.db.refresh(prefs)
        logger.info(f"Updated preferences for user {user_id}")
        return PreferenceResponse.model_validate(prefs)
