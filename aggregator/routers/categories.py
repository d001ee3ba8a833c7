# aggregator/routers/categories.py
"""
Category endpoints.

GET /v1/categories - List categories seen so far
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from aggregator import models
from aggregator.database import get_db

router = APIRouter(prefix="/v1/categories", tags=["categories"])


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    total: int


@router.get("", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)) -> CategoryListResponse:
    """Categories are created by ingestion, so this grows as sources report new sections."""
    categories = db.query(models.Category).order_by(models.Category.name).all()
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories),
    )
