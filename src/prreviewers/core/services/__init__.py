"""Service layer wiring the assignment core to a set of repositories."""
import random
from dataclasses import dataclass
from typing import Optional

from ..assignment import AssignmentEngine, BatchDeactivationOrchestrator, StatisticsAggregator
from ..config.settings import ReviewerServiceConfig
from ..storage import Repositories
from .teams import TeamService
from .users import UserService


@dataclass
class Services:
    """Every operation the request-dispatch layer can call."""
    repositories: Repositories
    teams: TeamService
    users: UserService
    assignments: AssignmentEngine
    deactivation: BatchDeactivationOrchestrator
    statistics: StatisticsAggregator

    async def close(self) -> None:
        await self.repositories.close()


def create_services(
    repositories: Repositories,
    config: Optional[ReviewerServiceConfig] = None,
    rng: Optional[random.Random] = None,
) -> Services:
    """Build the service layer on top of ``repositories``.

    Args:
        repositories: Storage backend to use
        config: Service configuration; defaults apply when omitted
        rng: Random source override, for deterministic tests only
    """
    config = config or ReviewerServiceConfig()
    return Services(
        repositories=repositories,
        teams=TeamService(repositories.teams, repositories.users),
        users=UserService(repositories.users, repositories.pull_requests),
        assignments=AssignmentEngine(
            repositories.users,
            repositories.pull_requests,
            reviewers_per_pr=config.reviewers_per_pr,
            rng=rng,
        ),
        deactivation=BatchDeactivationOrchestrator(
            repositories.teams,
            repositories.users,
            repositories.pull_requests,
            rng=rng,
        ),
        statistics=StatisticsAggregator(repositories.pull_requests),
    )


__all__ = [
    "Services",
    "TeamService",
    "UserService",
    "create_services",
]
