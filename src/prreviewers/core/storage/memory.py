"""In-memory repositories.

Each repository keeps plain dicts and hands out deep copies, so callers never
share state with the store. Single dict operations need no locking on the
event loop; read-modify-write sequences on one pull request go through a
per-id ``KeyedLock``.
"""
from typing import Optional

from ..errors import PRExistsError, PRNotFoundError, TeamExistsError, UserNotFoundError
from ..schemas import PullRequest, User
from .base import PullRequestMutator, PullRequestRepository, TeamRepository, UserRepository
from .locks import KeyedLock


class InMemoryTeamRepository(TeamRepository):
    """Team names kept in insertion order."""

    def __init__(self):
        self._teams: dict[str, None] = {}

    async def create(self, team_name: str) -> None:
        if team_name in self._teams:
            raise TeamExistsError()
        self._teams[team_name] = None

    async def exists(self, team_name: str) -> bool:
        return team_name in self._teams

    async def list_names(self) -> list[str]:
        return list(self._teams)


class InMemoryUserRepository(UserRepository):
    """Users keyed by id, iterated in insertion order."""

    def __init__(self):
        self._users: dict[str, User] = {}

    async def get(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def upsert(self, user: User) -> User:
        self._users[user.user_id] = user.model_copy()
        return user.model_copy()

    async def set_active(self, user_id: str, is_active: bool) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(f"user {user_id} not found")
        user.is_active = is_active
        return user.model_copy()

    async def list_all(self) -> list[User]:
        return [u.model_copy() for u in self._users.values()]

    async def list_by_team(self, team_name: str) -> list[User]:
        return [u.model_copy() for u in self._users.values() if u.team_name == team_name]


class InMemoryPullRequestRepository(PullRequestRepository):
    """Pull requests keyed by id with a reviewer index."""

    def __init__(self):
        self._prs: dict[str, PullRequest] = {}
        # reviewer id -> ids of pull requests listing that reviewer
        self._by_reviewer: dict[str, set[str]] = {}
        self._locks = KeyedLock()

    def _index(self, pr: PullRequest) -> None:
        for reviewer_id in pr.assigned_reviewers:
            self._by_reviewer.setdefault(reviewer_id, set()).add(pr.pull_request_id)

    def _unindex(self, pr: PullRequest) -> None:
        for reviewer_id in pr.assigned_reviewers:
            pr_ids = self._by_reviewer.get(reviewer_id)
            if pr_ids is None:
                continue
            pr_ids.discard(pr.pull_request_id)
            if not pr_ids:
                del self._by_reviewer[reviewer_id]

    async def create(self, pull_request: PullRequest) -> PullRequest:
        if pull_request.pull_request_id in self._prs:
            raise PRExistsError()
        pull_request.check_reviewers()
        stored = pull_request.model_copy(deep=True)
        self._prs[stored.pull_request_id] = stored
        self._index(stored)
        return stored.model_copy(deep=True)

    async def get(self, pull_request_id: str) -> Optional[PullRequest]:
        pr = self._prs.get(pull_request_id)
        return pr.model_copy(deep=True) if pr else None

    async def atomic_update(
        self, pull_request_id: str, mutator: PullRequestMutator
    ) -> PullRequest:
        async with self._locks.acquire(pull_request_id):
            current = self._prs.get(pull_request_id)
            if current is None:
                raise PRNotFoundError()

            updated = mutator(current.model_copy(deep=True))
            updated.check_reviewers()

            stored = updated.model_copy(deep=True)
            self._unindex(current)
            self._prs[pull_request_id] = stored
            self._index(stored)
            return stored.model_copy(deep=True)

    async def find_by_reviewer(self, user_id: str) -> list[PullRequest]:
        pr_ids = self._by_reviewer.get(user_id, set())
        return [
            pr.model_copy(deep=True)
            for pr_id, pr in self._prs.items()
            if pr_id in pr_ids
        ]

    async def list_all(self) -> list[PullRequest]:
        return [pr.model_copy(deep=True) for pr in self._prs.values()]
