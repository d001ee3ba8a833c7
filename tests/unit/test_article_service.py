# tests/unit/test_article_service.py
"""
Unit tests for ArticleService.

Tests listing, filtering, pagination, keyword search, the personalized
feed and preference validation against in-memory SQLite.
"""

from datetime import datetime

import pytest

from aggregator import models
from aggregator.schemas.preferences import PreferenceUpdate
from aggregator.services.article_service import (
    ArticleFilters,
    ArticleService,
    InvalidPreferencesError,
)
from aggregator.services.transformer import generate_url_hash


@pytest.fixture
def catalog(db, sources):
    """Two categories, two authors and four articles across three sources."""
    world = models.Category(name="World", slug="world")
    tech = models.Category(name="Technology", slug="technology")
    db.add_all([world, tech])
    db.flush()

    ann = models.Author(name="Ann Lee", source_id=sources["nyt"].id)
    bob = models.Author(name="Bob Ray", source_id=sources["newsapi"].id)
    db.add_all([ann, bob])
    db.flush()

    def article(title, source, published_at, category=None, author=None, description=None, content=None):
        url = f"https://example.test/{title.lower().replace(' ', '-')}"
        return models.Article(
            title=title,
            url=url,
            url_hash=generate_url_hash(url),
            description=description,
            content=content,
            source_id=sources[source].id,
            category_id=category.id if category else None,
            author_id=author.id if author else None,
            published_at=published_at,
        )

    rows = {
        "oldest": article("Election Recap", "guardian", datetime(2024, 1, 1), category=world),
        "middle": article("Chip Shortage", "newsapi", datetime(2024, 2, 1), category=tech, author=bob,
                          description="Semiconductor supply"),
        "newest": article("Summit Opens", "nyt", datetime(2024, 3, 1), category=world, author=ann,
                          content="Leaders discuss 100% tariffs"),
        "undated": article("Undated Note", "guardian", None),
    }
    db.add_all(rows.values())
    db.commit()
    return {"world": world, "tech": tech, "ann": ann, "bob": bob, **rows}


@pytest.fixture
def service(db):
    return ArticleService(db)


def titles(page):
    return [a.title for a in page.data]


class TestListArticles:
    """Tests for list_articles."""

    def test_newest_first_undated_last(self, service, catalog):
        page = service.list_articles()

        assert titles(page) == ["Summit Opens", "Chip Shortage", "Election Recap", "Undated Note"]
        assert page.total == 4
        assert page.last_page == 1

    def test_embeds_relations(self, service, catalog):
        newest = service.list_articles().data[0]

        assert newest.source.api_identifier == "nyt"
        assert newest.category.slug == "world"
        assert newest.author.name == "Ann Lee"

    def test_pagination(self, service, catalog):
        page = service.list_articles(page=2, per_page=3)

        assert titles(page) == ["Undated Note"]
        assert page.total == 4
        assert page.last_page == 2
        assert page.per_page == 3

    def test_per_page_clamped(self, service, catalog):
        assert service.list_articles(per_page=1000).per_page == 100

    def test_empty_store(self, service):
        page = service.list_articles()

        assert page.data == []
        assert page.total == 0
        assert page.last_page == 1

    def test_filters(self, service, catalog, sources):
        assert titles(service.list_articles(ArticleFilters(source_id=sources["guardian"].id))) == [
            "Election Recap",
            "Undated Note",
        ]
        assert titles(service.list_articles(ArticleFilters(category_id=catalog["tech"].id))) == ["Chip Shortage"]
        assert titles(service.list_articles(ArticleFilters(from_date=datetime(2024, 2, 1)))) == [
            "Summit Opens",
            "Chip Shortage",
        ]
        assert titles(service.list_articles(ArticleFilters(to_date=datetime(2024, 1, 31)))) == ["Election Recap"]


class TestSearchArticles:
    """Tests for search_articles."""

    def test_matches_title_case_insensitive(self, service, catalog):
        assert titles(service.search_articles("summit")) == ["Summit Opens"]

    def test_matches_description_and_content(self, service, catalog):
        assert titles(service.search_articles("semiconductor")) == ["Chip Shortage"]
        assert titles(service.search_articles("tariffs")) == ["Summit Opens"]

    def test_wildcards_are_literal(self, service, catalog):
        assert titles(service.search_articles("100%")) == ["Summit Opens"]
        assert titles(service.search_articles("%")) == ["Summit Opens"]

    def test_non_ascii_keyword(self, service, db, sources):
        url = "https://example.test/zurich"
        db.add(models.Article(
            title="Zürich École news",
            url=url,
            url_hash=generate_url_hash(url),
            source_id=sources["guardian"].id,
        ))
        db.commit()

        assert titles(service.search_articles("École")) == ["Zürich École news"]
        assert titles(service.search_articles("zürich")) == ["Zürich École news"]
        assert service.search_articles("news").total == 1

    def test_search_with_filter(self, service, catalog):
        page = service.search_articles("e", ArticleFilters(category_id=catalog["world"].id))
        assert titles(page) == ["Summit Opens", "Election Recap"]


class TestPersonalizedFeed:
    """Tests for personalized_feed."""

    def test_no_preferences_returns_everything(self, service, catalog):
        assert service.personalized_feed(user_id=7).total == 4

    def test_preferences_are_ored(self, service, catalog, sources):
        service.update_preferences(7, PreferenceUpdate(
            preferred_sources=[sources["guardian"].id],
            preferred_authors=[catalog["bob"].id],
        ))

        assert titles(service.personalized_feed(7)) == ["Chip Shortage", "Election Recap", "Undated Note"]

    def test_filters_are_anded(self, service, catalog, sources):
        service.update_preferences(7, PreferenceUpdate(preferred_categories=[catalog["world"].id]))

        page = service.personalized_feed(7, ArticleFilters(source_id=sources["nyt"].id))
        assert titles(page) == ["Summit Opens"]

    def test_all_lists_empty_returns_everything(self, service, catalog):
        service.update_preferences(7, PreferenceUpdate(preferred_sources=[]))
        assert service.personalized_feed(7).total == 4


class TestPreferences:
    """Tests for get_preferences / update_preferences."""

    def test_defaults_when_missing(self, service):
        prefs = service.get_preferences(3)

        assert prefs.user_id == 3
        assert prefs.preferred_sources == []
        assert prefs.preferred_categories == []
        assert prefs.preferred_authors == []

    def test_update_and_partial_update(self, service, catalog, sources):
        service.update_preferences(3, PreferenceUpdate(
            preferred_sources=[sources["nyt"].id, sources["nyt"].id],
            preferred_categories=[catalog["tech"].id],
        ))
        prefs = service.update_preferences(3, PreferenceUpdate(preferred_authors=[catalog["ann"].id]))

        assert prefs.preferred_sources == [sources["nyt"].id]
        assert prefs.preferred_categories == [catalog["tech"].id]
        assert prefs.preferred_authors == [catalog["ann"].id]
        assert service.get_preferences(3) == prefs

    def test_unknown_ids_rejected(self, service, catalog, db):
        with pytest.raises(InvalidPreferencesError) as exc_info:
            service.update_preferences(3, PreferenceUpdate(preferred_categories=[catalog["world"].id, 999]))

        assert exc_info.value.errors == {"preferred_categories": [999]}
        assert db.query(models.UserPreference).count() == 0


class TestGetArticle:
    def test_found_and_missing(self, service, catalog):
        assert service.get_article(catalog["newest"].id).title == "Summit Opens"
        assert service.get_article(99999) is None
