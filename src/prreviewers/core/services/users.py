"""User status and review listings."""
import logging

from ..schemas import PullRequestShort, User
from ..storage.base import PullRequestRepository, UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, pull_requests: PullRequestRepository):
        self.users = users
        self.pull_requests = pull_requests

    async def set_is_active(self, user_id: str, is_active: bool) -> User:
        """Toggle a user's active flag.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self.users.set_active(user_id, is_active)
        logger.info(f"Set is_active={is_active} for user {user_id}")
        return user

    async def get_reviews(self, user_id: str) -> list[PullRequestShort]:
        """Pull requests of any status that list ``user_id`` as a reviewer."""
        prs = await self.pull_requests.find_by_reviewer(user_id)
        return [PullRequestShort.model_validate(pr, from_attributes=True) for pr in prs]
