"""User endpoints"""
import logging

from fastapi import APIRouter, Depends, Query

from ...core.schemas import BatchDeactivateRequest, BatchDeactivateResult, SetIsActiveRequest
from ...core.services import Services
from ..dependencies import get_services

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/users/setIsActive")
async def set_is_active(
    request: SetIsActiveRequest,
    services: Services = Depends(get_services),
):
    """Activate or deactivate a single user."""
    user = await services.users.set_is_active(request.user_id, request.is_active)
    return {"user": user.model_dump()}


@router.get("/users/getReview")
async def get_reviews(
    user_id: str = Query(..., min_length=1, description="Reviewer id"),
    services: Services = Depends(get_services),
):
    """List the pull requests a user is assigned to review."""
    prs = await services.users.get_reviews(user_id)
    return {
        "user_id": user_id,
        "pull_requests": [pr.model_dump(mode="json") for pr in prs],
    }


@router.post("/users/deactivateBatch", response_model=BatchDeactivateResult)
async def deactivate_batch(
    request: BatchDeactivateRequest,
    services: Services = Depends(get_services),
):
    """Deactivate several users of a team and reassign their open reviews."""
    result = await services.deactivation.deactivate_and_reassign(
        request.team_name, request.user_ids
    )
    logger.info(
        f"Batch deactivation completed for team {request.team_name}: "
        f"deactivated={result.deactivated_count} reassigned={result.reassigned_count}"
    )
    return result
