"""Pydantic schemas for domain values and API validation."""
from .pull_request import (
    PullRequest,
    PullRequestCreate,
    PullRequestMerge,
    PullRequestReassign,
    PullRequestShort,
    PullRequestStatus,
)
from .stats import Statistics, StatusBreakdown
from .team import Team, TeamMember
from .user import (
    BatchDeactivateError,
    BatchDeactivateRequest,
    BatchDeactivateResult,
    SetIsActiveRequest,
    User,
)

__all__ = [
    # Pull request schemas
    "PullRequest",
    "PullRequestCreate",
    "PullRequestMerge",
    "PullRequestReassign",
    "PullRequestShort",
    "PullRequestStatus",
    # Statistics schemas
    "Statistics",
    "StatusBreakdown",
    # Team schemas
    "Team",
    "TeamMember",
    # User schemas
    "User",
    "SetIsActiveRequest",
    "BatchDeactivateRequest",
    "BatchDeactivateError",
    "BatchDeactivateResult",
]
