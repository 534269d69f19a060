"""Team schemas"""
from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    """Summary of a user as seen from a team roster."""
    user_id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(default="", max_length=255)
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class Team(BaseModel):
    """A team and its members in roster order."""
    team_name: str = Field(..., min_length=1, max_length=255)
    members: list[TeamMember] = Field(default_factory=list)
