# aggregator/services/transformer.py
"""
Article transformer.

Maps a raw article from any source into the normalized article shape using
the source's field mapping (our field name -> dot-path into their JSON).
Pure functions only; nothing here touches the network or the database.
"""

import hashlib
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

# Mapping keys that feed a dedicated NormalizedArticle field
TEXT_FIELDS = ("title", "url", "description", "content", "image_url")
AUTHOR_FIELD = "author"
CATEGORY_FIELD = "source_name"
PUBLISHED_FIELD = "published_at"

_BY_PREFIX_RE = re.compile(r"^(By|by)\s+", re.IGNORECASE)
_AUTHOR_SPLIT_RE = re.compile(r"\s+and\s+|,\s*", re.IGNORECASE)

_MISSING = object()


@dataclass
class NormalizedArticle:
    """Source-independent article, transient between transform and upsert."""

    title: str | None = None
    url: str | None = None
    description: str | None = None
    content: str | None = None
    image_url: str | None = None
    published_at: datetime | None = None
    author_name: str | None = None
    category_name: str | None = None

    @property
    def url_hash(self) -> str | None:
        return generate_url_hash(self.url) if self.url else None


def resolve_path(data: Any, path: str | None) -> Any:
    """
    Look up a dot-path in nested dicts/lists.

    "multimedia.0.url" walks dict keys and list indexes. A key that itself
    contains dots is matched literally before the path is split. Anything
    absent resolves to None; this never raises.
    """
    if path is None or data is None:
        return None

    if isinstance(data, Mapping) and path in data:
        return data[path]

    current = data
    for segment in path.split("."):
        current = _step(current, segment)
        if current is _MISSING:
            return None
    return current


def _step(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, _MISSING)
    if isinstance(node, list) and segment.isdigit():
        index = int(segment)
        return node[index] if index < len(node) else _MISSING
    return _MISSING


def _as_text(value: Any) -> str | None:
    """Scalar -> stripped string; containers and blanks -> None."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def clean_author_name(author: Any) -> str | None:
    """
    Reduce a byline to one author name.

    "By Jane Doe and John Smith" -> "Jane Doe"
    "by Jane Doe, John Smith"   -> "Jane Doe"
    """
    if isinstance(author, list):
        author = author[0] if author else None
    if author is None or isinstance(author, (dict, list, bool)):
        return None

    author = _BY_PREFIX_RE.sub("", str(author).lstrip())
    first = _AUTHOR_SPLIT_RE.split(author)[0].strip()
    return first or None


def parse_published_at(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into naive UTC. Unparseable -> None."""
    text = _as_text(value)
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def transform(
    raw: Mapping[str, Any],
    field_mapping: Mapping[str, str | None],
    image_prefix: str | None = None,
) -> NormalizedArticle:
    """Apply a source's field mapping to one raw article. Keys that name no article field are ignored."""
    article = NormalizedArticle()

    for our_field, their_path in field_mapping.items():
        value = resolve_path(raw, their_path) if their_path is not None else None

        if our_field in TEXT_FIELDS:
            text = _as_text(value)
            if our_field == "image_url" and image_prefix and text:
                text = image_prefix + text
            setattr(article, our_field, text)
        elif our_field == PUBLISHED_FIELD:
            article.published_at = parse_published_at(value)
        elif our_field == AUTHOR_FIELD:
            article.author_name = clean_author_name(value)
        elif our_field == CATEGORY_FIELD:
            article.category_name = _as_text(value)

    return article


def is_valid(article: NormalizedArticle) -> bool:
    """Title and url are required for persistence."""
    return bool(article.title) and bool(article.url)


def generate_url_hash(url: str) -> str:
    """Generate SHA256 hash of URL."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()
