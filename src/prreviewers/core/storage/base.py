"""Repository interfaces the assignment core depends on."""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..schemas import PullRequest, User

PullRequestMutator = Callable[[PullRequest], PullRequest]


class TeamRepository(ABC):
    """Storage for team records.

    A team record holds only its name; members are the users whose
    ``team_name`` points at it.
    """

    @abstractmethod
    async def create(self, team_name: str) -> None:
        """
        Create a team.

        Raises:
            TeamExistsError: If a team with that name already exists
        """
        pass

    @abstractmethod
    async def exists(self, team_name: str) -> bool:
        pass

    @abstractmethod
    async def list_names(self) -> list[str]:
        pass


class UserRepository(ABC):
    """Storage for users. Authoritative for team membership and active status."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Insert the user, or overwrite name, team and status of an existing one."""
        pass

    @abstractmethod
    async def set_active(self, user_id: str, is_active: bool) -> User:
        """
        Flip a user's active flag.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[User]:
        pass

    @abstractmethod
    async def list_by_team(self, team_name: str) -> list[User]:
        """Users of a team in insertion order."""
        pass


class PullRequestRepository(ABC):
    """Storage for pull requests and their reviewer lists."""

    @abstractmethod
    async def create(self, pull_request: PullRequest) -> PullRequest:
        """
        Persist a new pull request.

        Raises:
            PRExistsError: If the id is already taken
            ReviewerInvariantError: If the reviewer list is invalid
        """
        pass

    @abstractmethod
    async def get(self, pull_request_id: str) -> Optional[PullRequest]:
        pass

    @abstractmethod
    async def atomic_update(
        self, pull_request_id: str, mutator: PullRequestMutator
    ) -> PullRequest:
        """
        Read, modify and write one pull request as a single atomic step.

        ``mutator`` receives a private copy of the stored pull request and
        returns the value to store. Concurrent calls for the same id are
        serialized. Anything the mutator raises aborts the update and
        propagates; nothing is written.

        Raises:
            PRNotFoundError: If the pull request does not exist
            ReviewerInvariantError: If the new reviewer list is invalid
        """
        pass

    @abstractmethod
    async def find_by_reviewer(self, user_id: str) -> list[PullRequest]:
        """Pull requests of any status where ``user_id`` is an assigned reviewer."""
        pass

    @abstractmethod
    async def list_all(self) -> list[PullRequest]:
        pass
