# aggregator/services/persistence.py
"""
Storage operations for the ingestion pipeline.

Writes go through INSERT ... ON CONFLICT so that concurrent runs touching
the same key resolve in the database: Article upserts are last-write-wins
on url_hash. PostgreSQL and SQLite are supported.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from aggregator.errors import UnsupportedDialectError
from aggregator.models import Article, Source
from aggregator.services.transformer import NormalizedArticle

TITLE_MAX_LENGTH = 500
IMAGE_URL_MAX_LENGTH = 1000

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# Columns refreshed when an existing url_hash is seen again (created_at is kept)
UPSERT_UPDATE_COLUMNS = (
    "source_id",
    "category_id",
    "author_id",
    "title",
    "description",
    "content",
    "url",
    "image_url",
    "published_at",
    "updated_at",
)


def dialect_insert(db: Session):
    """The dialect-specific insert() construct for the session's database."""
    dialect = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect]
    except KeyError:
        raise UnsupportedDialectError(
            f"Dialect '{dialect}' has no INSERT ... ON CONFLICT support"
        ) from None


def find_source_by_identifier(db: Session, api_identifier: str) -> Source | None:
    return db.execute(
        select(Source).where(Source.api_identifier == api_identifier)
    ).scalar_one_or_none()


def upsert_article(
    db: Session,
    article: NormalizedArticle,
    source_id: int,
    category_id: int | None = None,
    author_id: int | None = None,
) -> int:
    """
    Insert or update the article keyed by its url_hash.

    Does not commit. Returns the article id.
    """
    now = datetime.utcnow()
    url_hash = article.url_hash

    image_url = article.image_url
    if image_url and len(image_url) > IMAGE_URL_MAX_LENGTH:
        image_url = None

    values = {
        "source_id": source_id,
        "category_id": category_id,
        "author_id": author_id,
        "title": article.title[:TITLE_MAX_LENGTH],
        "description": article.description,
        "content": article.content,
        "url": article.url,
        "url_hash": url_hash,
        "image_url": image_url,
        "published_at": article.published_at,
        "created_at": now,
        "updated_at": now,
    }

    insert = dialect_insert(db)
    stmt = insert(Article).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=["url_hash"],
        set_={col: stmt.excluded[col] for col in UPSERT_UPDATE_COLUMNS},
    )
    db.execute(stmt)

    return db.execute(
        select(Article.id).where(Article.url_hash == url_hash)
    ).scalar_one()
