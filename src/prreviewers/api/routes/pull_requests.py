"""Pull request endpoints"""
from fastapi import APIRouter, Depends

from ...core.schemas import PullRequestCreate, PullRequestMerge, PullRequestReassign
from ...core.services import Services
from ..dependencies import get_services

router = APIRouter()


@router.post("/pullRequest/create", status_code=201)
async def create_pull_request(
    request: PullRequestCreate,
    services: Services = Depends(get_services),
):
    """Open a pull request and assign up to two reviewers from the author's team."""
    pr = await services.assignments.create_pull_request(
        request.pull_request_id, request.pull_request_name, request.author_id
    )
    return {"pr": pr.model_dump(mode="json")}


@router.post("/pullRequest/merge")
async def merge_pull_request(
    request: PullRequestMerge,
    services: Services = Depends(get_services),
):
    """Merge a pull request. Merging twice is harmless."""
    pr = await services.assignments.merge_pull_request(request.pull_request_id)
    return {"pr": pr.model_dump(mode="json")}


@router.post("/pullRequest/reassign")
async def reassign_reviewer(
    request: PullRequestReassign,
    services: Services = Depends(get_services),
):
    """Replace one reviewer with a random active member of their team."""
    pr, replaced_by = await services.assignments.reassign_reviewer(
        request.pull_request_id, request.old_user_id
    )
    return {"pr": pr.model_dump(mode="json"), "replaced_by": replaced_by}
