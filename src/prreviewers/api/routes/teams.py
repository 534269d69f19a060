"""Team endpoints"""
from fastapi import APIRouter, Depends, Query

from ...core.schemas import Team
from ...core.services import Services
from ..dependencies import get_services

router = APIRouter()


@router.post("/team/add", status_code=201)
async def add_team(team: Team, services: Services = Depends(get_services)):
    """Create a team and register its members."""
    created = await services.teams.add_team(team)
    return {"team": created.model_dump()}


@router.get("/team/get", response_model=Team)
async def get_team(
    team_name: str = Query(..., min_length=1, description="Team name"),
    services: Services = Depends(get_services),
):
    """Get a team with its current roster."""
    return await services.teams.get_team(team_name)
