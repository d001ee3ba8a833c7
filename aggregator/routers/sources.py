# aggregator/routers/sources.py
"""
Source endpoints.

GET /v1/sources - List active news sources
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from aggregator import models
from aggregator.database import get_db

router = APIRouter(prefix="/v1/sources", tags=["sources"])


# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------


class SourceResponse(BaseModel):
    """Source response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    api_identifier: str
    website_url: str | None
    description: str | None
    is_active: bool
    created_at: datetime


class SourceListResponse(BaseModel):
    """List of sources."""

    sources: list[SourceResponse]
    total: int


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.get("", response_model=SourceListResponse)
def list_sources(db: Session = Depends(get_db)) -> SourceListResponse:
    """List active sources."""
    sources = (
        db.query(models.Source)
        .filter(models.Source.is_active.is_(True))
        .order_by(models.Source.name)
        .all()
    )
    return SourceListResponse(
        sources=[SourceResponse.model_validate(s) for s in sources],
        total=len(sources),
    )
