"""Reviewer assignment engine.

Chooses reviewers when a pull request is opened, swaps out a single reviewer
on request and merges pull requests.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Optional

from ..errors import (
    AuthorHasNoTeamError,
    AuthorNotFoundError,
    NoReplacementCandidateError,
    PRAlreadyMergedError,
    PRExistsError,
    PRNotFoundError,
    ReviewerNotAssignedError,
    UserNotFoundError,
)
from ..schemas import PullRequest, PullRequestStatus
from ..storage.base import PullRequestRepository, UserRepository
from .candidates import eligible_reviewers
from .selector import choose, choose_one

logger = logging.getLogger(__name__)

DEFAULT_REVIEWERS_PER_PR = 2


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentEngine:
    """Engine for assigning and reassigning pull request reviewers.

    Reviewers always come from a team roster held in the user store: the
    author's team when a pull request is created, the departing reviewer's
    team when one reviewer is replaced.
    """

    def __init__(
        self,
        users: UserRepository,
        pull_requests: PullRequestRepository,
        reviewers_per_pr: int = DEFAULT_REVIEWERS_PER_PR,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the engine.

        Args:
            users: User store, authoritative for team and active status
            pull_requests: Pull request store
            reviewers_per_pr: Reviewers to pick for a new pull request
            rng: Random source override, for deterministic tests only
        """
        self.users = users
        self.pull_requests = pull_requests
        self.reviewers_per_pr = reviewers_per_pr
        self.rng = rng

    async def get_pull_request(self, pull_request_id: str) -> PullRequest:
        pr = await self.pull_requests.get(pull_request_id)
        if pr is None:
            raise PRNotFoundError(f"PR {pull_request_id} not found")
        return pr

    async def create_pull_request(
        self, pull_request_id: str, pull_request_name: str, author_id: str
    ) -> PullRequest:
        """Open a pull request and assign reviewers from the author's team.

        Up to ``reviewers_per_pr`` reviewers are picked; fewer when the team
        has fewer eligible members, none when it has none.

        Raises:
            PRExistsError: If the id is already taken
            AuthorNotFoundError: If the author is unknown
            AuthorHasNoTeamError: If the author belongs to no team
        """
        if await self.pull_requests.get(pull_request_id) is not None:
            raise PRExistsError(f"PR {pull_request_id} already exists")

        author = await self.users.get(author_id)
        if author is None:
            raise AuthorNotFoundError(f"author {author_id} not found")
        if not author.team_name:
            raise AuthorHasNoTeamError(f"author {author_id} has no team")

        roster = await self.users.list_by_team(author.team_name)
        candidates = eligible_reviewers(roster, exclude_user_id=author_id)
        reviewers = choose(candidates, min(self.reviewers_per_pr, len(candidates)), self.rng)

        pr = PullRequest(
            pull_request_id=pull_request_id,
            pull_request_name=pull_request_name,
            author_id=author_id,
            status=PullRequestStatus.OPEN,
            assigned_reviewers=reviewers,
            created_at=_utcnow(),
        )
        created = await self.pull_requests.create(pr)

        logger.info(
            f"Created PR {pull_request_id} by {author_id} in team {author.team_name}, "
            f"reviewers: {reviewers}"
        )
        return created

    @staticmethod
    def _check_reassignable(pr: PullRequest, old_user_id: str) -> None:
        if pr.status == PullRequestStatus.MERGED:
            raise PRAlreadyMergedError(f"PR {pr.pull_request_id} is already merged")
        if old_user_id not in pr.assigned_reviewers:
            raise ReviewerNotAssignedError(
                f"{old_user_id} is not assigned to PR {pr.pull_request_id}"
            )

    async def reassign_reviewer(
        self, pull_request_id: str, old_user_id: str
    ) -> tuple[PullRequest, str]:
        """Replace one reviewer with a random active teammate of theirs.

        The replacement takes the departing reviewer's slot. Merge state and
        assignment are checked again under the pull request lock, so a
        concurrent change surfaces as the same error.

        Returns:
            The updated pull request and the id of the new reviewer

        Raises:
            PRNotFoundError: If the pull request does not exist
            PRAlreadyMergedError: If the pull request is merged
            ReviewerNotAssignedError: If ``old_user_id`` is not a reviewer
            UserNotFoundError: If the departing reviewer is unknown
            NoReplacementCandidateError: If nobody in their team can step in
        """
        pr = await self.get_pull_request(pull_request_id)
        self._check_reassignable(pr, old_user_id)

        departing = await self.users.get(old_user_id)
        if departing is None:
            raise UserNotFoundError(f"user {old_user_id} not found")
        roster = (
            await self.users.list_by_team(departing.team_name) if departing.team_name else []
        )

        chosen: list[str] = []

        def replace(current: PullRequest) -> PullRequest:
            self._check_reassignable(current, old_user_id)
            remaining = [r for r in current.assigned_reviewers if r != old_user_id]
            candidates = [
                user_id
                for user_id in eligible_reviewers(
                    roster, exclude_user_id=old_user_id, already_assigned=remaining
                )
                if user_id != current.author_id
            ]
            if not candidates:
                raise NoReplacementCandidateError(
                    f"no active replacement for {old_user_id} on PR {pull_request_id}"
                )
            new_user_id = choose_one(candidates, self.rng)
            current.assigned_reviewers = [
                new_user_id if r == old_user_id else r for r in current.assigned_reviewers
            ]
            chosen.append(new_user_id)
            return current

        updated = await self.pull_requests.atomic_update(pull_request_id, replace)

        logger.info(f"Reassigned PR {pull_request_id}: {old_user_id} -> {chosen[0]}")
        return updated, chosen[0]

    async def merge_pull_request(self, pull_request_id: str) -> PullRequest:
        """Mark a pull request as merged.

        Merging is idempotent: merging a merged pull request returns it
        unchanged and keeps the original ``merged_at``.

        Raises:
            PRNotFoundError: If the pull request does not exist
        """

        def merge(current: PullRequest) -> PullRequest:
            if current.status != PullRequestStatus.MERGED:
                current.status = PullRequestStatus.MERGED
                current.merged_at = _utcnow()
            return current

        merged = await self.pull_requests.atomic_update(pull_request_id, merge)
        logger.debug(f"Merged PR {pull_request_id} at {merged.merged_at}")
        return merged
