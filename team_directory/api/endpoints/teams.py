# team_directory/api/endpoints/teams.py
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from team_directory.core.errors import TEAM_DELETED
from team_directory.db.session import get_db
from team_directory.schemas.team import TeamRead
from team_directory.services import teams as team_service

router = APIRouter()

TEAM_EXAMPLE = {
    "name": "Engineering",
    "description": "Builds the product",
    "users": [1, 2],
}


@router.get("", response_model=List[TeamRead])
def get_teams(db: Session = Depends(get_db)):
    """
    List all teams with their members
    """
    return team_service.list_teams(db)


@router.get("/{team_id}", response_model=TeamRead)
def get_team(team_id: int, db: Session = Depends(get_db)):
    return team_service.get_team(db, team_id)


@router.post("", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
def create_team(
    payload: Dict[str, Any] = Body(..., examples=[TEAM_EXAMPLE]),
    db: Session = Depends(get_db),
):
    """
    Create a team and move the listed users into it
    """
    return team_service.create_team(db, payload)


@router.put("/{team_id}", response_model=TeamRead)
def update_team(
    team_id: int,
    payload: Dict[str, Any] = Body(..., examples=[TEAM_EXAMPLE]),
    db: Session = Depends(get_db),
):
    return team_service.update_team(db, team_id, payload)


@router.delete("/{team_id}")
def delete_team(team_id: int, db: Session = Depends(get_db)):
    """
    Delete a team; its members become unassigned
    """
    team_service.delete_team(db, team_id)
    return {"message": TEAM_DELETED}
