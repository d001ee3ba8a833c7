# aggregator/models.py
"""
News Aggregator Database Models

Tables:
- Source: External news APIs articles are pulled from (one row per profile)
- Category: Section/category labels reported by sources, keyed by slug
- Author: Bylines, scoped per source
- Article: Normalized articles, keyed by url_hash for upserts
- UserPreference: Preferred sources/categories/authors for personalized feeds
"""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from aggregator.database import Base


# -----------------------------------------------------------------------------
# Source
# -----------------------------------------------------------------------------

class Source(Base):
    """News API sources - one row per configured source profile."""
    __tablename__ = "sources"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    api_identifier = Column(String(64), unique=True, nullable=False)  # e.g., "newsapi", "nyt"
    website_url = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    articles = relationship("Article", back_populates="source")
    authors = relationship("Author", back_populates="source")


# -----------------------------------------------------------------------------
# Category
# -----------------------------------------------------------------------------

class Category(Base):
    """Section labels as reported by sources. First writer's name wins."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    articles = relationship("Article", back_populates="category")


# -----------------------------------------------------------------------------
# Author
# -----------------------------------------------------------------------------

class Author(Base):
    """Bylines. The same display name under two sources is two authors."""
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    source_id = Column(Integer, ForeignKey("sources.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    source = relationship("Source", back_populates="authors")
    articles = relationship("Article", back_populates="author")

    __table_args__ = (
        UniqueConstraint("name", "source_id", name="uq_authors_name_source"),
    )


# -----------------------------------------------------------------------------
# Article
# -----------------------------------------------------------------------------

class Article(Base):
    """
    Normalized articles.

    Written only by the ingestion pipeline (upsert on url_hash); the serving
    API reads them.
    """
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_id = Column(Integer, ForeignKey("sources.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    url = Column(Text, nullable=False)
    url_hash = Column(String(64), unique=True, nullable=False)  # SHA256 of URL, upsert key
    image_url = Column(String(1000), nullable=True)
    published_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    source = relationship("Source", back_populates="articles")
    category = relationship("Category", back_populates="articles")
    author = relationship("Author", back_populates="articles")

    __table_args__ = (
        Index("ix_articles_published_at", "published_at"),
        Index("ix_articles_source_id", "source_id"),
        Index("ix_articles_category_id", "category_id"),
    )


# -----------------------------------------------------------------------------
# UserPreference
# -----------------------------------------------------------------------------

class UserPreference(Base):
    """Per-user feed preferences (lists of ids). Read by the personalized feed."""
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, unique=True, nullable=False)
    preferred_sources = Column(JSON, nullable=False, default=list)
    preferred_categories = Column(JSON, nullable=False, default=list)
    preferred_authors = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
