"""Additional cost business logic"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_COST_CATEGORIES
from ...models import AdditionalCost, User
from ...shared.dates import parse_calendar_date
from .repository import AdditionalCostRepository
from .schemas import AdditionalCostCreate, AdditionalCostUpdate

logger = logging.getLogger(__name__)


class AdditionalCostService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AdditionalCostRepository()

    def get_costs(
        self, user: User, from_date: Optional[str] = None, to_date: Optional[str] = None
    ) -> list[AdditionalCost]:
        try:
            start = parse_calendar_date(from_date) if from_date else None
            end = parse_calendar_date(to_date) if to_date else None
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date range")
        return self.repo.get_costs(self.db, user.id, start, end)

    def get_cost(self, cost_id: int, user: User) -> AdditionalCost:
        cost = self.repo.get_cost_by_id(self.db, cost_id, user.id)
        if not cost:
            raise HTTPException(status_code=404, detail="Cost not found")
        return cost

    def get_categories(self, user: User) -> list[str]:
        """Default categories followed by any custom ones already in use"""
        used = self.repo.get_used_types(self.db, user.id)
        custom = sorted(set(used) - set(DEFAULT_COST_CATEGORIES))
        return list(DEFAULT_COST_CATEGORIES) + custom

    def create_cost(self, data: AdditionalCostCreate, user: User) -> AdditionalCost:
        logger.info(f"💸 Recording {data.type} cost of {data.amount} for user_id: {user.id}")
        return self.repo.create_cost(self.db, user.id, **data.model_dump())

    def update_cost(self, cost_id: int, data: AdditionalCostUpdate, user: User) -> AdditionalCost:
        cost = self.get_cost(cost_id, user)
        return self.repo.update_cost(self.db, cost, **data.model_dump(exclude_unset=True))

    def delete_cost(self, cost_id: int, user: User) -> dict:
        cost = self.get_cost(cost_id, user)
        self.repo.delete_cost(self.db, cost)
        return {"message": "Cost deleted"}
