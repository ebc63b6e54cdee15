from team_directory.schemas.team import TeamPayload, TeamSummary, TeamMember, TeamRead
from team_directory.schemas.user import UserPayload, UserRead
