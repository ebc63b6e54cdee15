# team_directory/db/init_db.py
from sqlalchemy.orm import Session

from team_directory.core.logging import logger
from team_directory.enums import UserRole
from team_directory.models.team import Team
from team_directory.services import teams as team_service
from team_directory.services import users as user_service

DEFAULT_TEAM = {"name": "Default Team", "description": "Default team created during initialization"}

DEFAULT_USERS = [
    {"name": "Admin User", "email": "admin@example.com", "password": "admin123", "role": UserRole.ADMIN.value},
    {"name": "Regular User", "email": "user@example.com", "password": "user123", "role": UserRole.MEMBER.value},
]


def init_db(db: Session) -> bool:
    """
    Initialize the database with seed data.
    Returns False when there already is data and nothing was created.
    """
    # Check if we already have data
    if db.query(Team).first():
        logger.info("Database already contains data, skipping initialization")
        return False

    logger.info("Creating initial data")

    # Users first, then the team that claims them
    member_ids = [user_service.create_user(db, data).id for data in DEFAULT_USERS]
    team = team_service.create_team(db, {**DEFAULT_TEAM, "users": member_ids})

    logger.info(f"Created default team: {team.name}")
    for user in team.users:
        logger.info(f"Created {user.role.value} user: {user.email}")
    logger.info("Initial data created successfully")
    return True
