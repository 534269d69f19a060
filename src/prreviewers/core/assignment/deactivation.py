"""Batch deactivation with reviewer backfill."""
import logging
import random
from typing import Optional

from ..errors import NoReplacementPoolError, ReviewerServiceError, StorageError, TeamNotFoundError
from ..schemas import BatchDeactivateError, BatchDeactivateResult, PullRequest, User
from ..storage.base import PullRequestRepository, TeamRepository, UserRepository
from ..storage.locks import KeyedLock
from .candidates import eligible_reviewers
from .selector import choose_one

logger = logging.getLogger(__name__)

DEACTIVATION_FAILED = "failed to deactivate"
MIN_REVIEWERS = 2


class BatchDeactivationOrchestrator:
    """Deactivates users of a team and hands their open reviews to teammates.

    The replacement pool is fixed when the batch starts and is not reduced
    as replacements are handed out, so one teammate may pick up several
    pull requests in the same run. Each pull request is committed on its
    own; a storage failure part-way leaves earlier updates in place.
    """

    def __init__(
        self,
        teams: TeamRepository,
        users: UserRepository,
        pull_requests: PullRequestRepository,
        rng: Optional[random.Random] = None,
    ):
        self.teams = teams
        self.users = users
        self.pull_requests = pull_requests
        self.rng = rng
        self._team_locks = KeyedLock()

    async def deactivate_and_reassign(
        self, team_name: str, user_ids: list[str]
    ) -> BatchDeactivateResult:
        """Deactivate ``user_ids`` and backfill their open review slots.

        Args:
            team_name: Team whose active members form the replacement pool
            user_ids: Users to deactivate; repeated ids are processed once

        Returns:
            Counts of deactivated users and of distinct pull requests changed
            (a pull request listing several batch users counts once), plus the
            users that could not be deactivated

        Raises:
            TeamNotFoundError: If the team does not exist
            NoReplacementPoolError: If no active teammate would remain; no
                user is deactivated in that case
            StorageError: If updating a pull request fails
        """
        targets = list(dict.fromkeys(user_ids))

        async with self._team_locks.acquire(team_name):
            if not await self.teams.exists(team_name):
                raise TeamNotFoundError(f"team {team_name} not found")

            roster = await self.users.list_by_team(team_name)
            pool = [u for u in roster if u.is_active and u.user_id not in targets]
            if not pool:
                raise NoReplacementPoolError(
                    f"team {team_name} has no active members outside the batch"
                )

            result = BatchDeactivateResult()
            deactivated: list[str] = []
            changed_prs: set[str] = set()
            for user_id in targets:
                try:
                    await self.users.set_active(user_id, False)
                except ReviewerServiceError as e:
                    logger.warning(f"Failed to deactivate {user_id}: {e}")
                    result.errors.append(
                        BatchDeactivateError(user_id=user_id, error=DEACTIVATION_FAILED)
                    )
                    continue
                deactivated.append(user_id)
                result.deactivated_count += 1

            for user_id in deactivated:
                changed_prs.update(await self._release_reviews(user_id, pool))
            result.reassigned_count = len(changed_prs)

        logger.info(
            f"Batch deactivation for team {team_name}: "
            f"deactivated={result.deactivated_count} reassigned={result.reassigned_count} "
            f"errors={len(result.errors)}"
        )
        return result

    async def _release_reviews(self, user_id: str, pool: list[User]) -> list[str]:
        """Remove ``user_id`` from its open pull requests and backfill; returns the ids changed."""
        changed: list[str] = []
        for pr in await self.pull_requests.find_by_reviewer(user_id):
            if not pr.is_open:
                continue

            touched: list[bool] = []

            def backfill(current: PullRequest) -> PullRequest:
                if not current.is_open or user_id not in current.assigned_reviewers:
                    return current
                remaining = [r for r in current.assigned_reviewers if r != user_id]
                if len(remaining) < MIN_REVIEWERS:
                    candidates = eligible_reviewers(
                        pool, exclude_user_id=current.author_id, already_assigned=remaining
                    )
                    if candidates:
                        remaining.append(choose_one(candidates, self.rng))
                current.assigned_reviewers = remaining
                touched.append(True)
                return current

            try:
                await self.pull_requests.atomic_update(pr.pull_request_id, backfill)
            except StorageError:
                logger.error(
                    f"Aborting batch: failed to update PR {pr.pull_request_id} "
                    f"while releasing {user_id}"
                )
                raise

            if touched:
                changed.append(pr.pull_request_id)
                logger.debug(f"Released {user_id} from PR {pr.pull_request_id}")
        return changed
