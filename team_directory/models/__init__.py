# team_directory/models/__init__.py
# Import models here so they can be imported from team_directory.models
from team_directory.models.team import Team
from team_directory.models.user import User
