"""prreviewers - pull request reviewer assignment service.

Assigns reviewers to pull requests from the author's team, replaces
reviewers on request and rebalances open reviews when team members are
deactivated in bulk.
"""
__version__ = "0.1.0"

from .core.assignment import (
    AssignmentEngine,
    BatchDeactivationOrchestrator,
    StatisticsAggregator,
    eligible_reviewers,
    pick_indices,
)
from .core.config import ReviewerServiceConfig, configure_logging, get_config, init_config
from .core.errors import (
    AuthorHasNoTeamError,
    AuthorNotFoundError,
    ConflictError,
    InvalidStateError,
    NoCandidateError,
    NoReplacementCandidateError,
    NoReplacementPoolError,
    NotFoundError,
    PRAlreadyMergedError,
    PRExistsError,
    PRNotFoundError,
    ReviewerInvariantError,
    ReviewerNotAssignedError,
    ReviewerServiceError,
    StorageError,
    TeamExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)
from .core.schemas import (
    BatchDeactivateError,
    BatchDeactivateResult,
    PullRequest,
    PullRequestShort,
    PullRequestStatus,
    Statistics,
    StatusBreakdown,
    Team,
    TeamMember,
    User,
)
from .core.services import Services, create_services
from .core.storage import Repositories, create_repositories

__all__ = [
    # Version
    "__version__",
    # Config
    "ReviewerServiceConfig",
    "configure_logging",
    "get_config",
    "init_config",
    # Assignment core
    "AssignmentEngine",
    "BatchDeactivationOrchestrator",
    "StatisticsAggregator",
    "eligible_reviewers",
    "pick_indices",
    # Schemas
    "BatchDeactivateError",
    "BatchDeactivateResult",
    "PullRequest",
    "PullRequestShort",
    "PullRequestStatus",
    "Statistics",
    "StatusBreakdown",
    "Team",
    "TeamMember",
    "User",
    # Services and storage
    "Repositories",
    "Services",
    "create_repositories",
    "create_services",
    # Errors
    "ReviewerServiceError",
    "NotFoundError",
    "ConflictError",
    "InvalidStateError",
    "NoCandidateError",
    "StorageError",
    "PRNotFoundError",
    "TeamNotFoundError",
    "UserNotFoundError",
    "AuthorNotFoundError",
    "AuthorHasNoTeamError",
    "TeamExistsError",
    "PRExistsError",
    "PRAlreadyMergedError",
    "ReviewerNotAssignedError",
    "ReviewerInvariantError",
    "NoReplacementCandidateError",
    "NoReplacementPoolError",
]
