# team_directory/schemas/user.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from team_directory.enums import UserRole
from team_directory.schemas.base import BaseSchema, CreatedAtMixin, RecordId
from team_directory.schemas.team import TeamSummary


class UserPayload(BaseModel):
    """Body accepted by POST /users and PUT /users/{id}; every field but teamid is required"""
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole
    teamid: Optional[RecordId] = None

    class Config:
        extra = "forbid"

    @field_validator("email", mode="before")
    @classmethod
    def _bare_address_only(cls, value):
        # EmailStr would turn "Name <a@b.c>" into "a@b.c"
        if isinstance(value, str) and ("<" in value or ">" in value):
            raise ValueError("display names are not allowed")
        return value


class UserRead(CreatedAtMixin, BaseSchema):
    # password is deliberately absent
    id: int
    name: str
    email: str
    role: UserRole
    teamid: Optional[int] = None
    team: Optional[TeamSummary] = None
