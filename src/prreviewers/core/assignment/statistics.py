"""Reviewer load statistics."""
from ..schemas import PullRequestStatus, Statistics
from ..storage.base import PullRequestRepository


class StatisticsAggregator:
    """Derives reviewer load from the full set of pull requests on every call."""

    def __init__(self, pull_requests: PullRequestRepository):
        self.pull_requests = pull_requests

    async def compute(self) -> Statistics:
        stats = Statistics()
        for pr in await self.pull_requests.list_all():
            for reviewer_id in pr.assigned_reviewers:
                stats.by_user[reviewer_id] = stats.by_user.get(reviewer_id, 0) + 1
                stats.total_assignments += 1

            if pr.status == PullRequestStatus.OPEN:
                stats.by_status.open += 1
            elif pr.status == PullRequestStatus.MERGED:
                stats.by_status.merged += 1
        return stats
