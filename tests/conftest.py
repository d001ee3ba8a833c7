# tests/conftest.py
"""
Pytest configuration and fixtures.
"""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment before any aggregator module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from aggregator import models
from aggregator.config import Settings
from aggregator.database import Base
from aggregator.services.http_fetcher import FetchResult, HttpFetcher
from aggregator.source_profiles import build_source_profiles


@pytest.fixture
def db():
    """Fresh in-memory SQLite session with the schema created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def test_settings():
    """Settings with dummy API keys for every source."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        NEWSAPI_KEY="test-newsapi-key",
        GUARDIAN_API_KEY="test-guardian-key",
        NYT_API_KEY="test-nyt-key",
    )


@pytest.fixture
def profiles(test_settings):
    return build_source_profiles(test_settings)


@pytest.fixture
def sources(db, profiles):
    """One Source row per profile, keyed by identifier."""
    rows = {}
    for profile in profiles.values():
        source = models.Source(
            name=profile.name,
            api_identifier=profile.identifier,
            website_url=profile.website_url,
            description=profile.description,
            is_active=True,
        )
        db.add(source)
        rows[profile.identifier] = source
    db.commit()
    return rows


@pytest.fixture
def mock_fetcher():
    """HttpFetcher stand-in; set .get_json.return_value / .side_effect per test."""
    fetcher = MagicMock(spec=HttpFetcher)
    fetcher.get_json.return_value = FetchResult(status_code=200, body={}, url="https://example.test")
    return fetcher

