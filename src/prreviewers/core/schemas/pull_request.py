"""Pull request schemas"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ReviewerInvariantError


class PullRequestStatus(str, Enum):
    """Lifecycle state of a pull request."""
    OPEN = "OPEN"
    MERGED = "MERGED"


class PullRequest(BaseModel):
    """A pull request and the reviewers currently assigned to it."""
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(default="", max_length=500)
    author_id: str = Field(..., min_length=1, max_length=255)
    status: PullRequestStatus = PullRequestStatus.OPEN
    assigned_reviewers: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_open(self) -> bool:
        return self.status == PullRequestStatus.OPEN

    def check_reviewers(self) -> None:
        """Reject a reviewer list that holds the author or any id twice.

        Raises:
            ReviewerInvariantError: If the reviewer list is invalid
        """
        if self.author_id in self.assigned_reviewers:
            raise ReviewerInvariantError(
                f"author {self.author_id} cannot review PR {self.pull_request_id}"
            )
        if len(set(self.assigned_reviewers)) != len(self.assigned_reviewers):
            raise ReviewerInvariantError(
                f"duplicate reviewer on PR {self.pull_request_id}: {self.assigned_reviewers}"
            )


class PullRequestShort(BaseModel):
    """Compact pull request view used in per-reviewer listings."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus

    model_config = ConfigDict(from_attributes=True)


class PullRequestCreate(BaseModel):
    """Schema for creating a pull request."""
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(..., max_length=500)
    author_id: str = Field(..., min_length=1, max_length=255)


class PullRequestMerge(BaseModel):
    """Schema for merging a pull request."""
    pull_request_id: str = Field(..., min_length=1)


class PullRequestReassign(BaseModel):
    """Schema for replacing one reviewer on a pull request."""
    pull_request_id: str = Field(..., min_length=1)
    old_user_id: str = Field(..., min_length=1)
