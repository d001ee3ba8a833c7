# tests/test_api.py
"""
Contract tests for API responses.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from aggregator import models
from aggregator.database import get_db
from aggregator.main import app
from aggregator.services.transformer import generate_url_hash


@pytest.fixture
def client(db):
    """Test client bound to the in-memory session."""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def stored_article(db, sources):
    category = models.Category(name="World", slug="world")
    db.add(category)
    db.flush()
    author = models.Author(name="Ann Lee", source_id=sources["nyt"].id)
    db.add(author)
    db.flush()

    article = models.Article(
        title="Summit Opens",
        description="Leaders meet",
        content="Full body",
        url="https://example.test/summit",
        url_hash=generate_url_hash("https://example.test/summit"),
        image_url="https://example.test/summit.jpg",
        published_at=datetime(2024, 3, 1, 9, 0),
        source_id=sources["nyt"].id,
        category_id=category.id,
        author_id=author.id,
    )
    db.add(article)
    db.commit()
    return article


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health(self, client):
        """Test /health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "news-aggregator"


class TestArticlesEndpoint:
    """Test article endpoint contracts."""

    def test_list_shape(self, client, stored_article):
        response = client.get("/v1/articles")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["per_page"] == 12
        item = data["data"][0]
        assert item["title"] == "Summit Opens"
        assert item["source"]["api_identifier"] == "nyt"
        assert item["category"]["slug"] == "world"
        assert item["author"]["name"] == "Ann Lee"
        assert "content" not in item

    def test_list_empty(self, client, sources):
        data = client.get("/v1/articles").json()
        assert data["data"] == []
        assert data["last_page"] == 1

    def test_date_filters(self, client, stored_article):
        assert client.get("/v1/articles", params={"to_date": "2024-03-01"}).json()["total"] == 1
        assert client.get("/v1/articles", params={"from_date": "2024-03-02"}).json()["total"] == 0

    def test_reversed_date_range_rejected(self, client, sources):
        response = client.get("/v1/articles", params={"from_date": "2024-03-02", "to_date": "2024-03-01"})
        assert response.status_code == 422

    @pytest.mark.parametrize("params", [{"per_page": 0}, {"per_page": 101}, {"page": 0}])
    def test_pagination_bounds(self, client, params):
        assert client.get("/v1/articles", params=params).status_code == 422

    def test_search(self, client, stored_article):
        data = client.get("/v1/articles/search", params={"keyword": "summit"}).json()
        assert [a["title"] for a in data["data"]] == ["Summit Opens"]

        data = client.get("/v1/articles/search", params={"keyword": "nothing-like-this"}).json()
        assert data["total"] == 0

    def test_search_requires_keyword(self, client):
        assert client.get("/v1/articles/search").status_code == 422

    def test_detail(self, client, stored_article):
        response = client.get(f"/v1/articles/{stored_article.id}")
        assert response.status_code == 200
        assert response.json()["content"] == "Full body"

    def test_detail_404(self, client, sources):
        response = client.get("/v1/articles/12345")
        assert response.status_code == 404
        assert "detail" in response.json()

    def test_personalized(self, client, stored_article, sources):
        client.put("/v1/users/5/preferences", json={"preferred_sources": [sources["guardian"].id]})
        assert client.get("/v1/articles/personalized", params={"user_id": 5}).json()["total"] == 0

        client.put("/v1/users/5/preferences", json={"preferred_sources": [sources["nyt"].id]})
        assert client.get("/v1/articles/personalized", params={"user_id": 5}).json()["total"] == 1


class TestSourcesAndCategories:
    """Test source and category listings."""

    def test_sources_active_only(self, client, db, sources):
        sources["guardian"].is_active = False
        db.commit()

        data = client.get("/v1/sources").json()
        assert data["total"] == 2
        assert {s["api_identifier"] for s in data["sources"]} == {"newsapi", "nyt"}

    def test_categories(self, client, stored_article):
        data = client.get("/v1/categories").json()
        assert data["categories"] == [{"id": stored_article.category_id, "name": "World", "slug": "world"}]


class TestPreferencesEndpoint:
    """Test user preference endpoints."""

    def test_defaults(self, client):
        response = client.get("/v1/users/9/preferences")
        assert response.status_code == 200
        assert response.json() == {
            "user_id": 9,
            "preferred_sources": [],
            "preferred_categories": [],
            "preferred_authors": [],
        }

    def test_update(self, client, sources):
        response = client.put("/v1/users/9/preferences", json={"preferred_sources": [sources["nyt"].id]})
        assert response.status_code == 200
        assert response.json()["preferred_sources"] == [sources["nyt"].id]

    def test_unknown_ids_422(self, client, sources):
        response = client.put("/v1/users/9/preferences", json={"preferred_authors": [404]})
        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {"preferred_authors": [404]}

    def test_invalid_payload_422(self, client):
        response = client.put("/v1/users/9/preferences", json={"preferred_sources": ["abc"]})
        assert response.status_code == 422
