# run.py
import sys

import uvicorn

from team_directory.core.config import settings
from team_directory.core.logging import logger

if __name__ == "__main__":
    logger.info(f"Starting {settings.PROJECT_NAME} on port {settings.PORT}...")
    try:
        uvicorn.run("team_directory.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
    except Exception as e:
        logger.error(f"Error starting server: {str(e)}")
        sys.exit(1)
