"""Logging setup.

Environment knobs (see ``Settings``):

- LOG_LEVEL (default: INFO) - root logger level
- LOG_JSON (default: true) - emit structured JSON lines instead of plain text
"""

import logging

from pythonjsonlogger.json import JsonFormatter

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Route all application logs through a single stream handler."""
    if json_logs is None:
        json_logs = settings.LOG_JSON
    handler = logging.StreamHandler()
    if json_logs:
        handler.setFormatter(JsonFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    level_name = (level or settings.LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # passlib logs a noisy warning when probing the bcrypt backend version
    logging.getLogger("passlib").setLevel(logging.ERROR)
