# aggregator/schemas/preferences.py
"""
Schemas for user preference endpoints.

GET /v1/users/{user_id}/preferences
PUT /v1/users/{user_id}/preferences
"""

from pydantic import BaseModel, ConfigDict, Field


class PreferenceUpdate(BaseModel):
    """Replace a user's preferences. Omitted lists are left unchanged."""

    preferred_sources: list[int] | None = Field(None, description="Source ids")
    preferred_categories: list[int] | None = Field(None, description="Category ids")
    preferred_authors: list[int] | None = Field(None, description="Author ids")


class PreferenceResponse(BaseModel):
    """A user's stored preferences (empty lists when none are stored)."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    preferred_sources: list[int] = Field(default_factory=list)
    preferred_categories: list[int] = Field(default_factory=list)
    preferred_authors: list[int] = Field(default_factory=list)
