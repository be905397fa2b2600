# app/db/init_db.py
from app.db.session import engine
from app.db.base import Base
import logging


def init_tables(bind=None):
    # Create all tables if not exist
    from app import models  # noqa: F401  import to ensure modules define models
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logging.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
