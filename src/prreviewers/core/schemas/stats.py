"""Statistics schemas"""
from pydantic import BaseModel, Field


class StatusBreakdown(BaseModel):
    """Pull request count per status."""
    open: int = 0
    merged: int = 0


class Statistics(BaseModel):
    """Reviewer load derived from every stored pull request."""
    total_assignments: int = 0
    by_user: dict[str, int] = Field(default_factory=dict)
    by_status: StatusBreakdown = Field(default_factory=StatusBreakdown)
