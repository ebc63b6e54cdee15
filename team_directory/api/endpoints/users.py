# team_directory/api/endpoints/users.py
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from team_directory.api.deps import get_settings
from team_directory.core.config import Settings
from team_directory.core.errors import USER_DELETED
from team_directory.db.session import get_db
from team_directory.schemas.user import UserRead
from team_directory.services import users as user_service

router = APIRouter()

USER_EXAMPLE = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "password": "secret1",
    "role": "member",
    "teamid": 1,
}


@router.get("", response_model=List[UserRead])
def get_users(db: Session = Depends(get_db)):
    """
    List all users with the team each one belongs to
    """
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: Dict[str, Any] = Body(..., examples=[USER_EXAMPLE]),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Create a user. The password is stored hashed and never returned.
    """
    return user_service.create_user(db, payload, bcrypt_rounds=settings.BCRYPT_ROUNDS)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: Dict[str, Any] = Body(..., examples=[USER_EXAMPLE]),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Replace a user. All fields are required, the password is re-hashed.
    """
    return user_service.update_user(db, user_id, payload, bcrypt_rounds=settings.BCRYPT_ROUNDS)


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """
    Delete a user. Refused when the user is the last member of a team.
    """
    user_service.delete_user(db, user_id)
    return {"message": USER_DELETED}
