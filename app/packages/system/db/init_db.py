"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from app.packages.system.db import session as db_session
from app.packages.system.models.base import Base
from app.packages.system.models.organization import Organization  # noqa: F401 - register table

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create the organization table if it does not exist."""
    try:
        Base.metadata.create_all(bind=db_session.engine)
    except Exception:
        logger.exception("Failed to create tables during database initialization")
        raise
    logger.info("Database schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
