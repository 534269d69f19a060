"""SQLAlchemy tables backing the SQL repositories."""
# Import all models to ensure relationships work correctly
from .pull_request import PullRequestRecord, PullRequestReviewerRecord
from .team import TeamRecord
from .user import UserRecord

__all__ = [
    "PullRequestRecord",
    "PullRequestReviewerRecord",
    "TeamRecord",
    "UserRecord",
]
