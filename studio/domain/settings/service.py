"""User settings business logic"""

import logging

from sqlalchemy.orm import Session

from ...models import User
from ...shared.dates import today_in_timezone
from .repository import SettingsRepository
from .schemas import SettingsResponse, SettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    def get_settings(self, user: User) -> SettingsResponse:
        return SettingsResponse(
            email=user.email,
            full_name=user.full_name,
            timezone=user.timezone,
            today=today_in_timezone(user.timezone),
        )

    def update_settings(self, data: SettingsUpdate, user: User) -> SettingsResponse:
        updates = data.model_dump(exclude_unset=True)
        if "timezone" in updates and updates["timezone"] != user.timezone:
            logger.info(f"🌍 User {user.id} timezone: {user.timezone} -> {updates['timezone']}")
        # The user row may come from another session (auth dependency)
        user = self.db.merge(user)
        user = self.repo.update_user(self.db, user, **updates)
        return self.get_settings(user)
