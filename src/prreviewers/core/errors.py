"""Error taxonomy for reviewer assignment.

Every error carries a stable ``code`` and the HTTP ``status_code`` the API
layer answers with, so callers can tell the kinds apart without string
matching.
"""
from typing import Optional


class ReviewerServiceError(Exception):
    """Base class for all errors raised by the assignment core."""

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Kinds

class NotFoundError(ReviewerServiceError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "resource not found"


class ConflictError(ReviewerServiceError):
    status_code = 409


class InvalidStateError(ReviewerServiceError):
    status_code = 409


class NoCandidateError(ReviewerServiceError):
    code = "NO_CANDIDATE"
    status_code = 409


class StorageError(ReviewerServiceError):
    """Underlying persistence failure, propagated without retry."""

    default_message = "storage failure"


# Not found

class PRNotFoundError(NotFoundError):
    default_message = "PR not found"


class TeamNotFoundError(NotFoundError):
    default_message = "team not found"


class UserNotFoundError(NotFoundError):
    default_message = "user not found"


class AuthorNotFoundError(NotFoundError):
    default_message = "author not found"


class AuthorHasNoTeamError(NotFoundError):
    default_message = "author has no team"


# Conflicts

class TeamExistsError(ConflictError):
    code = "TEAM_EXISTS"
    status_code = 400
    default_message = "team_name already exists"


class PRExistsError(ConflictError):
    code = "PR_EXISTS"
    default_message = "PR id already exists"


# Invalid state

class PRAlreadyMergedError(InvalidStateError):
    code = "PR_MERGED"
    default_message = "cannot reassign on merged PR"


class ReviewerNotAssignedError(InvalidStateError):
    code = "NOT_ASSIGNED"
    default_message = "reviewer is not assigned to this PR"


class ReviewerInvariantError(InvalidStateError):
    """Raised at write time when a reviewer list would contain the author or a duplicate."""

    code = "INVALID_REVIEWERS"
    default_message = "reviewer list violates assignment invariants"


# No candidate

class NoReplacementCandidateError(NoCandidateError):
    default_message = "no active replacement candidate in team"


class NoReplacementPoolError(NoCandidateError):
    code = "NO_REPLACEMENT_POOL"
    default_message = "no active users left in team to take over reviews"
