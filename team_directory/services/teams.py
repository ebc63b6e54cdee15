# team_directory/services/teams.py
from typing import Any, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from team_directory.core.errors import (
    ConflictError,
    NotFoundError,
    TEAM_NAME_EXISTS,
    TEAM_NOT_FOUND,
    USERS_DO_NOT_EXIST,
)
from team_directory.core.logging import logger
from team_directory.db.session import unit_of_work
from team_directory.models.team import Team
from team_directory.models.user import User
from team_directory.schemas.base import is_storable_id
from team_directory.services.validation import validate_team


def _teams(db: Session):
    return db.query(Team).options(selectinload(Team.users))


def list_teams(db: Session) -> List[Team]:
    return _teams(db).order_by(Team.id).all()


def get_team(db: Session, team_id: int) -> Team:
    if not is_storable_id(team_id):
        raise NotFoundError(TEAM_NOT_FOUND)
    team = _teams(db).filter(Team.id == team_id).first()
    if not team:
        raise NotFoundError(TEAM_NOT_FOUND)
    return team


def _ensure_name_available(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Team.id).filter(Team.name == name)
    if exclude_id is not None:
        query = query.filter(Team.id != exclude_id)
    if query.first():
        raise ConflictError(TEAM_NAME_EXISTS)


def _ensure_users_exist(db: Session, user_ids: Iterable[int]) -> List[int]:
    """
    Return the distinct ids, or fail without saying which ones are missing.
    """
    wanted = sorted(set(user_ids))
    found = db.query(func.count(User.id)).filter(User.id.in_(wanted)).scalar()
    if found != len(wanted):
        raise ConflictError(USERS_DO_NOT_EXIST)
    return wanted


def _assign_members(db: Session, team: Team, user_ids: List[int]) -> None:
    # Moves users out of whatever team they were in before
    db.query(User).filter(User.id.in_(user_ids)).update(
        {User.teamid: team.id}, synchronize_session=False
    )


def _conflict_from(exc: IntegrityError) -> ConflictError:
    if "name" in str(exc.orig).lower():
        return ConflictError(TEAM_NAME_EXISTS)
    return ConflictError(USERS_DO_NOT_EXIST)


def create_team(db: Session, data: Any) -> Team:
    """
    Create a team and move the listed users into it.

    The team insert and the membership update are committed together;
    if either fails neither is applied.
    """
    payload = validate_team(data)
    _ensure_name_available(db, payload.name)
    member_ids = _ensure_users_exist(db, payload.users)

    team = Team(name=payload.name, description=payload.description)
    try:
        with unit_of_work(db):
            db.add(team)
            db.flush()  # Flush to get team ID
            _assign_members(db, team, member_ids)
    except IntegrityError as exc:
        raise _conflict_from(exc) from exc

    logger.info(f"Created team {team.id} ({team.name}) with members {member_ids}")
    return get_team(db, team.id)


def update_team(db: Session, team_id: int, data: Any) -> Team:
    """
    Rename/redescribe a team and move the listed users into it.
    Current members that are not listed keep their membership.
    """
    payload = validate_team(data)
    team = get_team(db, team_id)
    _ensure_name_available(db, payload.name, exclude_id=team.id)
    member_ids = _ensure_users_exist(db, payload.users)

    try:
        with unit_of_work(db):
            team.name = payload.name
            team.description = payload.description
            db.flush()
            _assign_members(db, team, member_ids)
    except IntegrityError as exc:
        raise _conflict_from(exc) from exc

    logger.info(f"Updated team {team_id} with members {member_ids}")
    return get_team(db, team_id)


def delete_team(db: Session, team_id: int) -> None:
    """
    Delete a team. Its members stay, with their team reference cleared.
    """
    team = get_team(db, team_id)

    with unit_of_work(db):
        released = (
            db.query(User)
            .filter(User.teamid == team.id)
            .update({User.teamid: None}, synchronize_session=False)
        )
        db.delete(team)

    logger.info(f"Deleted team {team_id}, released {released} member(s)")
