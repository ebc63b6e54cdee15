# team_directory/api/deps.py
from fastapi import Request

from team_directory.core.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with"""
    return request.app.state.settings
