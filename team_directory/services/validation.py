# team_directory/services/validation.py
"""
Payload validation for users and teams.

Both validators are pure: they either return a normalized payload model or
raise EntityValidationError carrying every problem found, not just the first.
"""
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from team_directory.core.errors import EntityValidationError
from team_directory.schemas.team import TeamPayload
from team_directory.schemas.user import UserPayload

P = TypeVar("P", bound=BaseModel)

# (field, pydantic error type) -> message. A type of None is the field's fallback,
# "empty" is used when the submitted value was an empty string.
MessageTable = Dict[Tuple[str, Optional[str]], str]

USER_MESSAGES: MessageTable = {
    ("name", "missing"): "Name is required",
    ("name", "string_too_short"): "Name cannot be empty",
    ("name", "string_too_long"): "Name must be at most 50 characters",
    ("name", None): "Name must be a string",
    ("email", "missing"): "Email is required",
    ("email", "empty"): "Email cannot be empty",
    ("email", None): "Email must be a valid email",
    ("password", "missing"): "Password is required",
    ("password", "empty"): "Password cannot be empty",
    ("password", "string_too_short"): "Password must be at least 6 characters",
    ("password", None): "Password must be a string",
    ("role", "missing"): "Role is required",
    ("role", None): "Role must be either 'member' or 'admin'",
    ("teamid", None): "Team id must be an integer",
}

TEAM_MESSAGES: MessageTable = {
    ("name", "missing"): "Team name is required",
    ("name", "string_too_short"): "Team name cannot be empty",
    ("name", "string_too_long"): "Team name must be at most 100 characters",
    ("name", None): "Team name must be a string",
    ("description", None): "Description must be a string",
    ("users", "missing"): "Users list is required",
    ("users", "too_short"): "At least one user is required in the team",
    ("users", None): "Users must be a list of integer ids",
}


def _message_for(error: Dict[str, Any], messages: MessageTable) -> str:
    field = str(error["loc"][0]) if error["loc"] else ""
    if error["type"] == "extra_forbidden":
        return f'"{field}" is not allowed'
    if error.get("input") == "" and (field, "empty") in messages:
        return messages[(field, "empty")]
    for key in ((field, error["type"]), (field, None)):
        if key in messages:
            return messages[key]
    return f"{field}: {error['msg']}" if field else error["msg"]


def collect_errors(exc: ValidationError, messages: MessageTable) -> List[str]:
    """Human readable messages for every error, in field order, without repeats"""
    errors: List[str] = []
    for error in exc.errors():
        message = _message_for(error, messages)
        if message not in errors:
            errors.append(message)
    return errors


def _validate(model: Type[P], data: Any, messages: MessageTable, response_key: str) -> P:
    if not isinstance(data, dict):
        raise EntityValidationError(["Request body must be a JSON object"], response_key)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise EntityValidationError(collect_errors(exc, messages), response_key) from exc


def validate_user(data: Any) -> UserPayload:
    return _validate(UserPayload, data, USER_MESSAGES, response_key="message")


def validate_team(data: Any) -> TeamPayload:
    return _validate(TeamPayload, data, TEAM_MESSAGES, response_key="errors")
