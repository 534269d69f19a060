"""Storage collaborator: repository interfaces and their backends."""
from dataclasses import dataclass
from typing import Optional

from ..config.settings import ReviewerServiceConfig
from .base import PullRequestMutator, PullRequestRepository, TeamRepository, UserRepository
from .database import Base, Database, get_db, init_db
from .locks import KeyedLock
from .memory import InMemoryPullRequestRepository, InMemoryTeamRepository, InMemoryUserRepository
from .sql import SqlPullRequestRepository, SqlTeamRepository, SqlUserRepository


@dataclass
class Repositories:
    """The three repositories a service instance works against."""
    teams: TeamRepository
    users: UserRepository
    pull_requests: PullRequestRepository
    db: Optional[Database] = None

    @classmethod
    def in_memory(cls) -> "Repositories":
        return cls(
            teams=InMemoryTeamRepository(),
            users=InMemoryUserRepository(),
            pull_requests=InMemoryPullRequestRepository(),
        )

    @classmethod
    def for_database(cls, db: Database) -> "Repositories":
        return cls(
            teams=SqlTeamRepository(db),
            users=SqlUserRepository(db),
            pull_requests=SqlPullRequestRepository(db),
            db=db,
        )

    async def close(self) -> None:
        if self.db is not None:
            await self.db.close()


async def create_repositories(config: ReviewerServiceConfig) -> Repositories:
    """Build repositories for the configured backend, creating tables if needed."""
    url = config.get_database_url()
    if url is None:
        return Repositories.in_memory()

    db = init_db(url)
    await db.create_tables()
    return Repositories.for_database(db)


__all__ = [
    "Base",
    "Database",
    "get_db",
    "init_db",
    "KeyedLock",
    "PullRequestMutator",
    "PullRequestRepository",
    "TeamRepository",
    "UserRepository",
    "InMemoryPullRequestRepository",
    "InMemoryTeamRepository",
    "InMemoryUserRepository",
    "SqlPullRequestRepository",
    "SqlTeamRepository",
    "SqlUserRepository",
    "Repositories",
    "create_repositories",
]
