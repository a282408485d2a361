"""User settings repository"""

from sqlalchemy.orm import Session

from ...models import User


class SettingsRepository:
    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            if hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user
