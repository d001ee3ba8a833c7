# aggregator/services/lookups.py
"""
Get-or-create for the side entities an article points at.

Categories are global and keyed by slug; authors are keyed by
(name, source_id). Both are INSERT ... ON CONFLICT DO NOTHING followed by a
select, so two runs creating the same key at once end up with one row and
the first writer's name.
"""

import re
import unicodedata

from sqlalchemy import select
from sqlalchemy.orm import Session

from aggregator.models import Author, Category
from aggregator.services.persistence import dialect_insert

NAME_MAX_LENGTH = 255


def slugify(name: str) -> str:
    """'World News' -> 'world-news'. Non-ASCII letters are transliterated where possible."""
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower())
    return slug.strip("-")


def get_or_create_category(db: Session, name: str | None) -> Category | None:
    """
    Category for the given display name, creating it on first sighting.

    Returns None for an empty name, or a name that slugifies to nothing.
    Does not commit.
    """
    name = (name or "").strip()[:NAME_MAX_LENGTH]
    if not name:
        return None

    slug = slugify(name)[:NAME_MAX_LENGTH]
    if not slug:
        return None

    insert = dialect_insert(db)
    db.execute(
        insert(Category)
        .values(name=name, slug=slug)
        .on_conflict_do_nothing(index_elements=["slug"])
    )
    return db.execute(select(Category).where(Category.slug == slug)).scalar_one()


def get_or_create_author(db: Session, name: str | None, source_id: int) -> Author | None:
    """
    Author with this name under this source, creating it on first sighting.

    Returns None for an empty name. Does not commit.
    """
    name = (name or "").strip()[:NAME_MAX_LENGTH]
    if not name:
        return None

    insert = dialect_insert(db)
    db.execute(
        insert(Author)
        .values(name=name, source_id=source_id)
        .on_conflict_do_nothing(index_elements=["name", "source_id"])
    )
    return db.execute(
        select(Author).where(Author.name == name, Author.source_id == source_id)
    ).scalar_one()
