"""User schemas"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A reviewer known to the service.

    ``team_name`` is the single source of truth for team membership and
    ``is_active`` the single source of truth for availability.
    """
    user_id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(default="", max_length=255)
    team_name: Optional[str] = Field(None, max_length=255)
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class SetIsActiveRequest(BaseModel):
    """Schema for toggling a user's active flag."""
    user_id: str = Field(..., min_length=1)
    is_active: bool


class BatchDeactivateRequest(BaseModel):
    """Schema for deactivating several users of one team."""
    team_name: str = Field(..., min_length=1)
    user_ids: list[str] = Field(..., min_length=1, description="Users to deactivate")


class BatchDeactivateError(BaseModel):
    """A user the batch could not deactivate."""
    user_id: str
    error: str


class BatchDeactivateResult(BaseModel):
    """Outcome of a batch deactivation."""
    deactivated_count: int = 0
    reassigned_count: int = 0
    errors: list[BatchDeactivateError] = Field(default_factory=list)
