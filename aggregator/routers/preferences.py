# aggregator/routers/preferences.py
"""
User preference endpoints.

GET /v1/users/{user_id}/preferences - Stored preferences (empty lists if none)
PUT /v1/users/{user_id}/preferences - Replace preference lists
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from aggregator.database import get_db
from aggregator.schemas.preferences import PreferenceResponse, PreferenceUpdate
from aggregator.services.article_service import ArticleService, InvalidPreferencesError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/users", tags=["preferences"])


@router.get("/{user_id}/preferences", response_model=PreferenceResponse)
def get_preferences(
    user_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
) -> PreferenceResponse:
    return ArticleService(db).get_preferences(user_id)


@router.put("/{user_id}/preferences", response_model=PreferenceResponse)
def update_preferences(
    request: PreferenceUpdate,
    user_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
) -> PreferenceResponse:
    try:
        return ArticleService(db).update_preferences(user_id, request)
    except InvalidPreferencesError as e:
        logger.warning(f"Rejected preferences for user {user_id}: {e}")
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})
