"""Shared fixtures: storage for each backend, seeded randomness and team builders."""
import random
from datetime import datetime, timezone

import pytest

from prreviewers.core.config import ReviewerServiceConfig
from prreviewers.core.schemas import PullRequest, PullRequestStatus, User
from prreviewers.core.services import create_services
from prreviewers.core.storage import Repositories, create_repositories


@pytest.fixture
def rng():
    """Deterministic random source so failures are reproducible."""
    return random.Random(20251019)


@pytest.fixture(params=["memory", "sqlite"])
async def repositories(request, tmp_path):
    """Repositories for each backend; SQLite runs on a temporary file."""
    if request.param == "memory":
        yield Repositories.in_memory()
        return

    config = ReviewerServiceConfig(storage="sqlite", db_path=str(tmp_path / "reviews.db"))
    repositories = await create_repositories(config)
    yield repositories
    await repositories.close()


@pytest.fixture
def services(repositories, rng):
    return create_services(repositories, rng=rng)


@pytest.fixture
def make_team(repositories):
    """Create a team with ``size`` members named ``{prefix}-1`` .. ``{prefix}-N``."""

    async def _make_team(
        team_name: str, size: int, prefix: str = "user", inactive: tuple = ()
    ) -> list[str]:
        await repositories.teams.create(team_name)
        user_ids = []
        for i in range(1, size + 1):
            user_id = f"{prefix}-{i}"
            await repositories.users.upsert(
                User(
                    user_id=user_id,
                    username=f"User {i}",
                    team_name=team_name,
                    is_active=user_id not in inactive,
                )
            )
            user_ids.append(user_id)
        return user_ids

    return _make_team


@pytest.fixture
def store_pr(repositories):
    """Store a pull request directly, bypassing reviewer selection."""

    async def _store_pr(
        pull_request_id: str,
        author_id: str,
        reviewers: list[str],
        status: PullRequestStatus = PullRequestStatus.OPEN,
    ) -> PullRequest:
        pr = PullRequest(
            pull_request_id=pull_request_id,
            pull_request_name=f"PR {pull_request_id}",
            author_id=author_id,
            status=status,
            assigned_reviewers=reviewers,
            created_at=datetime.now(timezone.utc),
            merged_at=datetime.now(timezone.utc) if status == PullRequestStatus.MERGED else None,
        )
        return await repositories.pull_requests.create(pr)

    return _store_pr
