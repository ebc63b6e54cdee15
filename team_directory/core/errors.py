# team_directory/core/errors.py
from typing import Any, Dict, List

from fastapi import status


class DirectoryError(Exception):
    """
    Base class for errors raised by the services.
    Each subclass knows the HTTP status and response body it maps to.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message}


class EntityValidationError(DirectoryError):
    """One or more field-level validation failures, reported together"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str], response_key: str = "message"):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
        self.response_key = response_key

    def to_response(self) -> Dict[str, Any]:
        return {self.response_key: self.errors}


class ConflictError(DirectoryError):
    """Duplicate name/email, missing referenced rows, or a violated integrity guard"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DirectoryError):
    status_code = status.HTTP_404_NOT_FOUND


# Messages shared by the services and the tests
USER_NOT_FOUND = "User not found"
TEAM_NOT_FOUND = "Team not found"
EMAIL_EXISTS = "Email already exists"
TEAM_DOES_NOT_EXIST = "Team does not exist"
TEAM_NAME_EXISTS = "Team name already exists"
USERS_DO_NOT_EXIST = "Some users do not exist"
LAST_TEAM_MEMBER = "Cannot delete user: team must have at least 1 user"
USER_DELETED = "User deleted successfully"
TEAM_DELETED = "Team deleted successfully"
