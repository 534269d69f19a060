"""Team management."""
import logging

from ..errors import TeamExistsError, TeamNotFoundError
from ..schemas import Team, TeamMember, User
from ..storage.base import TeamRepository, UserRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Creates teams and reads rosters.

    Membership and active status live on the users; a team view is assembled
    from the user store on every read.
    """

    def __init__(self, teams: TeamRepository, users: UserRepository):
        self.teams = teams
        self.users = users

    async def add_team(self, team: Team) -> Team:
        """Create a team and upsert its members into the user store.

        Existing users listed as members move to the new team and take the
        given name and active flag.

        Raises:
            TeamExistsError: If the team already exists
        """
        if await self.teams.exists(team.team_name):
            raise TeamExistsError(f"team {team.team_name} already exists")

        await self.teams.create(team.team_name)
        for member in team.members:
            await self.users.upsert(
                User(
                    user_id=member.user_id,
                    username=member.username,
                    team_name=team.team_name,
                    is_active=member.is_active,
                )
            )

        logger.info(f"Created team {team.team_name} with {len(team.members)} members")
        return await self.get_team(team.team_name)

    async def get_team(self, team_name: str) -> Team:
        """
        Raises:
            TeamNotFoundError: If the team does not exist
        """
        if not await self.teams.exists(team_name):
            raise TeamNotFoundError(f"team {team_name} not found")

        members = await self.users.list_by_team(team_name)
        return Team(
            team_name=team_name,
            members=[TeamMember.model_validate(u, from_attributes=True) for u in members],
        )
