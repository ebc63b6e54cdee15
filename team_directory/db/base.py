# team_directory/db/base.py
from team_directory.db.session import Base

# Import all models so they are registered on Base.metadata (create_all, Alembic)
from team_directory.models.team import Team  # noqa: F401
from team_directory.models.user import User  # noqa: F401
