"""Tests for the reviewer assignment REST API."""
import pytest
from httpx import ASGITransport, AsyncClient

from prreviewers.api import create_app


@pytest.fixture
async def client(services):
    """Create test client on top of in-memory services."""
    app = create_app(services=services)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def add_team(client, team_name: str, size: int, prefix: str = "user"):
    members = [
        {"user_id": f"{prefix}-{i}", "username": f"User {i}", "is_active": True}
        for i in range(1, size + 1)
    ]
    response = await client.post("/team/add", json={"team_name": team_name, "members": members})
    assert response.status_code == 201
    return response.json()["team"]


async def create_pr(client, pr_id: str, author_id: str):
    return await client.post(
        "/pullRequest/create",
        json={"pull_request_id": pr_id, "pull_request_name": f"PR {pr_id}", "author_id": author_id},
    )


@pytest.mark.asyncio
async def test_health_check(client):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "prreviewers"


# Teams

@pytest.mark.asyncio
async def test_add_and_get_team(client):
    """Test creating a team and reading it back."""
    team = await add_team(client, "backend", 3)
    assert team["team_name"] == "backend"
    assert [m["user_id"] for m in team["members"]] == ["user-1", "user-2", "user-3"]

    response = await client.get("/team/get", params={"team_name": "backend"})
    assert response.status_code == 200
    assert response.json() == team


@pytest.mark.asyncio
async def test_add_team_twice(client):
    await add_team(client, "backend", 2)

    response = await client.post("/team/add", json={"team_name": "backend", "members": []})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TEAM_EXISTS"


@pytest.mark.asyncio
async def test_get_missing_team(client):
    response = await client.get("/team/get", params={"team_name": "missing"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


# Users

@pytest.mark.asyncio
async def test_set_is_active(client):
    await add_team(client, "backend", 2)

    response = await client.post("/users/setIsActive", json={"user_id": "user-1", "is_active": False})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["user_id"] == "user-1"
    assert user["team_name"] == "backend"
    assert user["is_active"] is False


@pytest.mark.asyncio
async def test_set_is_active_unknown_user(client):
    response = await client.post("/users/setIsActive", json={"user_id": "ghost", "is_active": False})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_reviews(client):
    await add_team(client, "backend", 2)
    await create_pr(client, "pr-1", "user-1")

    response = await client.get("/users/getReview", params={"user_id": "user-2"})

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "user-2"
    assert data["pull_requests"] == [
        {
            "pull_request_id": "pr-1",
            "pull_request_name": "PR pr-1",
            "author_id": "user-1",
            "status": "OPEN",
        }
    ]


# Pull requests

@pytest.mark.asyncio
async def test_create_pull_request(client):
    """Test that a new pull request gets two teammates as reviewers."""
    await add_team(client, "backend", 4)

    response = await create_pr(client, "pr-1", "user-1")

    assert response.status_code == 201
    pr = response.json()["pr"]
    assert pr["status"] == "OPEN"
    assert pr["merged_at"] is None
    assert len(pr["assigned_reviewers"]) == 2
    assert "user-1" not in pr["assigned_reviewers"]


@pytest.mark.asyncio
async def test_create_pull_request_twice(client):
    await add_team(client, "backend", 3)
    await create_pr(client, "pr-1", "user-1")

    response = await create_pr(client, "pr-1", "user-2")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "PR_EXISTS"


@pytest.mark.asyncio
async def test_create_pull_request_unknown_author(client):
    response = await create_pr(client, "pr-1", "ghost")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_merge_pull_request(client):
    await add_team(client, "backend", 3)
    await create_pr(client, "pr-1", "user-1")

    first = await client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})
    second = await client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["pr"]["status"] == "MERGED"
    assert second.json()["pr"]["merged_at"] == first.json()["pr"]["merged_at"]


@pytest.mark.asyncio
async def test_reassign_reviewer(client):
    await add_team(client, "backend", 5)
    created = (await create_pr(client, "pr-1", "user-1")).json()["pr"]
    old_reviewer = created["assigned_reviewers"][0]

    response = await client.post(
        "/pullRequest/reassign",
        json={"pull_request_id": "pr-1", "old_user_id": old_reviewer},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["replaced_by"] not in {old_reviewer, "user-1"}
    assert data["pr"]["assigned_reviewers"][0] == data["replaced_by"]
    assert data["pr"]["assigned_reviewers"][1] == created["assigned_reviewers"][1]


@pytest.mark.asyncio
async def test_reassign_on_merged_pull_request(client):
    await add_team(client, "backend", 5)
    created = (await create_pr(client, "pr-1", "user-1")).json()["pr"]
    await client.post("/pullRequest/merge", json={"pull_request_id": "pr-1"})

    response = await client.post(
        "/pullRequest/reassign",
        json={"pull_request_id": "pr-1", "old_user_id": created["assigned_reviewers"][0]},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "PR_MERGED"


@pytest.mark.asyncio
async def test_reassign_reviewer_not_assigned(client):
    await add_team(client, "backend", 3)
    await create_pr(client, "pr-1", "user-1")

    response = await client.post(
        "/pullRequest/reassign",
        json={"pull_request_id": "pr-1", "old_user_id": "user-1"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NOT_ASSIGNED"


@pytest.mark.asyncio
async def test_reassign_without_candidates(client):
    await add_team(client, "backend", 3)
    await create_pr(client, "pr-1", "user-1")

    response = await client.post(
        "/pullRequest/reassign",
        json={"pull_request_id": "pr-1", "old_user_id": "user-2"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NO_CANDIDATE"


@pytest.mark.asyncio
async def test_reassign_unknown_pull_request(client):
    response = await client.post(
        "/pullRequest/reassign",
        json={"pull_request_id": "missing", "old_user_id": "user-1"},
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


# Stats and batch deactivation

@pytest.mark.asyncio
async def test_stats(client):
    await add_team(client, "backend", 3)
    await create_pr(client, "pr-1", "user-1")
    await create_pr(client, "pr-2", "user-1")
    await client.post("/pullRequest/merge", json={"pull_request_id": "pr-2"})

    response = await client.get("/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["total_assignments"] == 4
    assert data["by_user"] == {"user-2": 2, "user-3": 2}
    assert data["by_status"] == {"open": 1, "merged": 1}


@pytest.mark.asyncio
async def test_deactivate_batch(client):
    await add_team(client, "backend", 5)
    created = (await create_pr(client, "pr-1", "user-1")).json()["pr"]
    leaving = created["assigned_reviewers"][0]

    response = await client.post(
        "/users/deactivateBatch",
        json={"team_name": "backend", "user_ids": [leaving]},
    )

    assert response.status_code == 200
    assert response.json() == {"deactivated_count": 1, "reassigned_count": 1, "errors": []}

    reviews = (await client.get("/users/getReview", params={"user_id": leaving})).json()
    assert reviews["pull_requests"] == []


@pytest.mark.asyncio
async def test_deactivate_batch_without_pool(client):
    await add_team(client, "backend", 2)

    response = await client.post(
        "/users/deactivateBatch",
        json={"team_name": "backend", "user_ids": ["user-1", "user-2"]},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NO_REPLACEMENT_POOL"


@pytest.mark.asyncio
async def test_deactivate_batch_requires_user_ids(client):
    response = await client.post(
        "/users/deactivateBatch",
        json={"team_name": "backend", "user_ids": []},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"
