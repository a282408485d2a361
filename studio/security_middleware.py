"""
Row-level security context for database sessions.
"""

import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def set_rls_context(db: Session, user_id: int) -> None:
    """
    Set the RLS context for a database session.

    PostgreSQL policies read app.current_user_id; repositories also filter
    on user_id explicitly, so other dialects (SQLite in tests) skip this.
    """
    bind = db.get_bind()
    if bind is None or bind.dialect.name != "postgresql":
        return

    try:
        db.execute(
            text("SELECT set_config('app.current_user_id', :user_id, false)"),
            {"user_id": str(user_id)},
        )
        logger.debug(f"RLS context set for user_id={user_id}")
    except Exception as e:
        logger.error(f"Failed to set RLS context for user_id={user_id}: {e}")
        raise
