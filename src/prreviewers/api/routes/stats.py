"""Statistics endpoints"""
from fastapi import APIRouter, Depends

from ...core.schemas import Statistics
from ...core.services import Services
from ..dependencies import get_services

router = APIRouter()


@router.get("/stats", response_model=Statistics)
async def get_statistics(services: Services = Depends(get_services)):
    """Get reviewer load and pull request status counts."""
    return await services.statistics.compute()
