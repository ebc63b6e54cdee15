import sys
import json
import traceback
from loguru import logger as loguru_logger

from team_directory.core.config import Settings

TEXT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"
)


class CloudLoggingSink:
    """
    Loguru sink that writes each record as one Cloud Logging compatible JSON line
    """
    def __init__(self, service_name: str, env: str, stream=None):
        self.service_name = service_name
        self.env = env
        self.stream = stream

    def write(self, message):
        record = message.record

        cloud_log = {
            "severity": record["level"].name,
            "time": record["time"].isoformat(),
            "message": record["message"],
            "logger": record["name"],
            "logging.googleapis.com/labels": {
                "environment": self.env,
                "service": self.service_name
            }
        }

        # Values passed through logger.bind() / extra kwargs
        for k, v in record["extra"].items():
            cloud_log[k] = v

        if record["exception"] is not None:
            exc_type, exc_value, exc_tb = record["exception"]
            cloud_log["exception"] = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )

        print(json.dumps(cloud_log, default=str), file=self.stream or sys.stderr)


def configure_logging(settings: Settings) -> None:
    """Replace loguru's default handler according to the settings"""
    loguru_logger.remove()
    if settings.LOG_JSON:
        sink = CloudLoggingSink(settings.PROJECT_NAME, settings.ENV)
        loguru_logger.add(sink.write, level=settings.LOG_LEVEL, format="{message}")
    else:
        loguru_logger.add(sys.stderr, level=settings.LOG_LEVEL, format=TEXT_FORMAT)


# Export the logger
logger = loguru_logger
