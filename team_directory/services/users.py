# team_directory/services/users.py
from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from team_directory.core.errors import (
    ConflictError,
    NotFoundError,
    EMAIL_EXISTS,
    LAST_TEAM_MEMBER,
    TEAM_DOES_NOT_EXIST,
    USER_NOT_FOUND,
)
from team_directory.core.logging import logger
from team_directory.core.security import hash_password
from team_directory.db.session import unit_of_work
from team_directory.models.team import Team
from team_directory.models.user import User
from team_directory.schemas.base import is_storable_id
from team_directory.schemas.user import UserPayload
from team_directory.services.validation import validate_user


def _users(db: Session):
    return db.query(User).options(joinedload(User.team))


def list_users(db: Session) -> List[User]:
    return _users(db).order_by(User.id).all()


def get_user(db: Session, user_id: int) -> User:
    # An id the store cannot hold cannot match any row
    if not is_storable_id(user_id):
        raise NotFoundError(USER_NOT_FOUND)
    user = _users(db).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def _ensure_email_available(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise ConflictError(EMAIL_EXISTS)


def _ensure_team_exists(db: Session, teamid: Optional[int]) -> None:
    if teamid is None:
        return
    if not db.query(Team.id).filter(Team.id == teamid).first():
        raise ConflictError(TEAM_DOES_NOT_EXIST)


def _apply_password(user: User, password: Optional[str], rounds: Optional[int] = None) -> None:
    # The only place a password reaches the model
    if password:
        user.password = hash_password(password, rounds=rounds)


def _apply_payload(user: User, payload: UserPayload, rounds: Optional[int] = None) -> None:
    user.name = payload.name
    user.email = payload.email
    user.role = payload.role
    user.teamid = payload.teamid
    _apply_password(user, payload.password, rounds)


def _conflict_from(exc: IntegrityError) -> ConflictError:
    """Map a constraint violation caught at commit time to the matching API error"""
    if "email" in str(exc.orig).lower():
        return ConflictError(EMAIL_EXISTS)
    return ConflictError(TEAM_DOES_NOT_EXIST)


def _save(db: Session, user: User) -> None:
    try:
        with unit_of_work(db):
            db.add(user)
    except IntegrityError as exc:
        raise _conflict_from(exc) from exc


def create_user(db: Session, data: Any, bcrypt_rounds: Optional[int] = None) -> User:
    payload = validate_user(data)
    _ensure_email_available(db, payload.email)
    _ensure_team_exists(db, payload.teamid)

    user = User()
    _apply_payload(user, payload, bcrypt_rounds)
    _save(db, user)

    logger.info(f"Created user {user.id} ({user.email})")
    return get_user(db, user.id)


def update_user(db: Session, user_id: int, data: Any, bcrypt_rounds: Optional[int] = None) -> User:
    """
    Replace every field of an existing user.
    There is no partial update: the payload is validated as a whole.
    """
    payload = validate_user(data)
    user = get_user(db, user_id)
    _ensure_email_available(db, payload.email, exclude_id=user.id)
    _ensure_team_exists(db, payload.teamid)

    _apply_payload(user, payload, bcrypt_rounds)
    _save(db, user)

    logger.info(f"Updated user {user_id}")
    return get_user(db, user_id)


def count_team_members(db: Session, teamid: int) -> int:
    return db.query(func.count(User.id)).filter(User.teamid == teamid).scalar()


def delete_user(db: Session, user_id: int) -> None:
    """
    Delete a user unless it is the last member of its team.
    """
    user = get_user(db, user_id)

    if user.teamid is not None and count_team_members(db, user.teamid) <= 1:
        logger.warning(f"Refused to delete user {user_id}: last member of team {user.teamid}")
        raise ConflictError(LAST_TEAM_MEMBER)

    with unit_of_work(db):
        db.delete(user)

    logger.info(f"Deleted user {user_id}")
