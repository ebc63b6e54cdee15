# team_directory/api/api.py
from fastapi import APIRouter

from team_directory.api.endpoints.teams import router as teams_router
from team_directory.api.endpoints.users import router as users_router

api_router = APIRouter()

api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(teams_router, prefix="/teams", tags=["teams"])
