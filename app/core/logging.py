# app/core/logging.py
import logging
from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None):
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    # echo is driven by DEBUG_SQL, keep the engine logger quiet otherwise
    if not settings.DEBUG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
