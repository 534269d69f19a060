"""Tests for batch deactivation and reviewer backfill."""
import pytest

from prreviewers.core.errors import NoReplacementPoolError, StorageError, TeamNotFoundError
from prreviewers.core.schemas import PullRequest, PullRequestStatus, User
from prreviewers.core.services import create_services
from prreviewers.core.storage import (
    InMemoryPullRequestRepository,
    InMemoryTeamRepository,
    InMemoryUserRepository,
    Repositories,
)


class FlakyUserRepository(InMemoryUserRepository):
    """User store whose status update fails for selected users."""

    def __init__(self, failing: set[str]):
        super().__init__()
        self.failing = failing

    async def set_active(self, user_id, is_active):
        if user_id in self.failing:
            raise StorageError(f"write failed for {user_id}")
        return await super().set_active(user_id, is_active)


class FailingPullRequestRepository(InMemoryPullRequestRepository):
    """Pull request store that fails every update after the first ``allowed``."""

    def __init__(self, allowed: int):
        super().__init__()
        self.allowed = allowed

    async def atomic_update(self, pull_request_id, mutator):
        if self.allowed == 0:
            raise StorageError(f"failed to update PR {pull_request_id}")
        self.allowed -= 1
        return await super().atomic_update(pull_request_id, mutator)


@pytest.fixture
def orchestrator(services):
    return services.deactivation


@pytest.mark.asyncio
async def test_batch_deactivation_scenario(orchestrator, repositories, make_team, store_pr):
    """Test 20 users, 50 open PRs, deactivating two frequent reviewers."""
    await make_team("T", 20)
    for i in range(1, 51):
        await store_pr(
            f"pr-{i}",
            "outsider",
            [f"user-{(i % 10) + 1}", f"user-{(i % 10) + 11}"],
        )

    result = await orchestrator.deactivate_and_reassign("T", ["user-1", "user-2"])

    assert result.deactivated_count == 2
    assert result.errors == []
    # user-1 reviews PRs with i % 10 == 0, user-2 those with i % 10 == 1
    assert result.reassigned_count == 10

    for user_id in ("user-1", "user-2"):
        user = await repositories.users.get(user_id)
        assert user.is_active is False

    for pr in await repositories.pull_requests.list_all():
        assert "user-1" not in pr.assigned_reviewers
        assert "user-2" not in pr.assigned_reviewers
        assert pr.author_id not in pr.assigned_reviewers
        assert len(pr.assigned_reviewers) == 2
        assert len(set(pr.assigned_reviewers)) == 2


@pytest.mark.asyncio
async def test_empty_replacement_pool_deactivates_nobody(orchestrator, repositories, make_team):
    await make_team("T", 3, inactive=("user-3",))

    with pytest.raises(NoReplacementPoolError):
        await orchestrator.deactivate_and_reassign("T", ["user-1", "user-2"])

    for user in await repositories.users.list_all():
        assert user.is_active is (user.user_id != "user-3")


@pytest.mark.asyncio
async def test_unknown_team(orchestrator):
    with pytest.raises(TeamNotFoundError):
        await orchestrator.deactivate_and_reassign("missing", ["user-1"])


@pytest.mark.asyncio
async def test_unknown_user_is_recorded_and_batch_continues(orchestrator, make_team, store_pr):
    await make_team("T", 4)
    await store_pr("pr-1", "user-4", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["ghost", "user-1"])

    assert result.deactivated_count == 1
    assert result.reassigned_count == 1
    assert [(e.user_id, e.error) for e in result.errors] == [("ghost", "failed to deactivate")]


@pytest.mark.asyncio
async def test_storage_failure_on_user_is_isolated(rng):
    repositories = Repositories(
        teams=InMemoryTeamRepository(),
        users=FlakyUserRepository(failing={"user-2"}),
        pull_requests=InMemoryPullRequestRepository(),
    )
    services = create_services(repositories, rng=rng)
    await repositories.teams.create("T")
    for i in range(1, 6):
        await repositories.users.upsert(User(user_id=f"user-{i}", team_name="T"))

    result = await services.deactivation.deactivate_and_reassign("T", ["user-1", "user-2"])

    assert result.deactivated_count == 1
    assert [e.user_id for e in result.errors] == ["user-2"]
    assert (await repositories.users.get("user-2")).is_active is True


@pytest.mark.asyncio
async def test_merged_pull_requests_are_untouched(orchestrator, repositories, make_team, store_pr):
    await make_team("T", 5)
    await store_pr("pr-merged", "user-5", ["user-1", "user-2"], status=PullRequestStatus.MERGED)
    await store_pr("pr-open", "user-5", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["user-1"])

    assert result.reassigned_count == 1
    merged = await repositories.pull_requests.get("pr-merged")
    assert merged.assigned_reviewers == ["user-1", "user-2"]
    opened = await repositories.pull_requests.get("pr-open")
    assert "user-1" not in opened.assigned_reviewers
    assert opened.assigned_reviewers[0] == "user-2"
    assert opened.assigned_reviewers[1] in {"user-3", "user-4"}


@pytest.mark.asyncio
async def test_replacement_pool_is_reused_across_prs(orchestrator, repositories, make_team, store_pr):
    """Test that a single remaining teammate takes over every vacated slot."""
    await make_team("T", 3)
    for i in range(5):
        await store_pr(f"pr-{i}", "outsider", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["user-1", "user-2"])

    assert result.deactivated_count == 2
    for pr in await repositories.pull_requests.list_all():
        assert pr.assigned_reviewers == ["user-3"]


@pytest.mark.asyncio
async def test_backfill_skips_author_and_current_reviewers(orchestrator, repositories, make_team, store_pr):
    """Test that a slot stays empty when the only pool member authored the PR."""
    await make_team("T", 3)
    await store_pr("pr-1", "user-3", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["user-1"])

    assert result.reassigned_count == 1
    pr = await repositories.pull_requests.get("pr-1")
    assert pr.assigned_reviewers == ["user-2"]


@pytest.mark.asyncio
async def test_pull_request_with_spare_reviewers_is_not_backfilled(orchestrator, repositories, make_team, store_pr):
    await make_team("T", 6)
    await store_pr("pr-1", "user-6", ["user-1", "user-2", "user-3"])

    await orchestrator.deactivate_and_reassign("T", ["user-1"])

    pr = await repositories.pull_requests.get("pr-1")
    assert pr.assigned_reviewers == ["user-2", "user-3"]


@pytest.mark.asyncio
async def test_pull_request_update_failure_aborts_batch(rng):
    repositories = Repositories(
        teams=InMemoryTeamRepository(),
        users=InMemoryUserRepository(),
        pull_requests=FailingPullRequestRepository(allowed=1),
    )
    services = create_services(repositories, rng=rng)
    await repositories.teams.create("T")
    for i in range(1, 6):
        await repositories.users.upsert(User(user_id=f"user-{i}", team_name="T"))
    for i in range(3):
        await repositories.pull_requests.create(
            PullRequest(
                pull_request_id=f"pr-{i}", author_id="user-5", assigned_reviewers=["user-1"]
            )
        )

    with pytest.raises(StorageError):
        await services.deactivation.deactivate_and_reassign("T", ["user-1"])

    # Deactivation and the first update stay in place
    assert (await repositories.users.get("user-1")).is_active is False
    untouched = [
        pr for pr in await repositories.pull_requests.list_all()
        if pr.assigned_reviewers == ["user-1"]
    ]
    assert len(untouched) == 2


@pytest.mark.asyncio
async def test_duplicate_ids_processed_once(orchestrator, make_team, store_pr):
    await make_team("T", 4)
    await store_pr("pr-1", "user-4", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["user-1", "user-1"])

    assert result.deactivated_count == 1
    assert result.reassigned_count == 1


@pytest.mark.asyncio
async def test_pull_request_shared_by_batch_users_counts_once(orchestrator, repositories, make_team, store_pr):
    """Test that a PR reviewed by two batch users is counted and refilled once per slot."""
    await make_team("T", 5)
    await store_pr("pr-1", "user-5", ["user-1", "user-2"])

    result = await orchestrator.deactivate_and_reassign("T", ["user-1", "user-2"])

    assert result.deactivated_count == 2
    assert result.reassigned_count == 1
    pr = await repositories.pull_requests.get("pr-1")
    assert sorted(pr.assigned_reviewers) == ["user-3", "user-4"]
