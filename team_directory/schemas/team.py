# team_directory/schemas/team.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from team_directory.enums import UserRole
from team_directory.schemas.base import BaseSchema, CreatedAtMixin, RecordId


class TeamPayload(BaseModel):
    """Body accepted by POST /teams and PUT /teams/{id}"""
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    users: List[RecordId] = Field(min_length=1)

    class Config:
        extra = "forbid"

    @field_validator("description", mode="before")
    @classmethod
    def _no_null_description(cls, value):
        # May be omitted or empty, but not an explicit null
        if value is None:
            raise ValueError("description must be a string")
        return value


class TeamSummary(CreatedAtMixin, BaseSchema):
    id: int
    name: str
    description: Optional[str] = None


class TeamMember(CreatedAtMixin, BaseSchema):
    id: int
    name: str
    email: str
    role: UserRole
    teamid: Optional[int] = None


class TeamRead(TeamSummary):
    users: List[TeamMember] = []
