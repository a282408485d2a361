"""Additional cost repository"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import AdditionalCost


class AdditionalCostRepository:
    @staticmethod
    def get_costs(
        db: Session,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[AdditionalCost]:
        """Costs in an inclusive calendar-date range, newest first"""
        query = db.query(AdditionalCost).filter(AdditionalCost.user_id == user_id)
        if start is not None:
            query = query.filter(AdditionalCost.date >= start)
        if end is not None:
            query = query.filter(AdditionalCost.date <= end)
        return query.order_by(AdditionalCost.date.desc(), AdditionalCost.id.desc()).all()

    @staticmethod
    def get_cost_by_id(db: Session, cost_id: int, user_id: int) -> Optional[AdditionalCost]:
        return (
            db.query(AdditionalCost)
            .filter(AdditionalCost.id == cost_id, AdditionalCost.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_used_types(db: Session, user_id: int) -> list[str]:
        rows = db.query(AdditionalCost.type).filter(AdditionalCost.user_id == user_id).distinct().all()
        return [row[0] for row in rows if row[0]]

    @staticmethod
    def create_cost(db: Session, user_id: int, **cost_data) -> AdditionalCost:
        cost = AdditionalCost(user_id=user_id, **cost_data)
        db.add(cost)
        db.commit()
        db.refresh(cost)
        return cost

    @staticmethod
    def update_cost(db: Session, cost: AdditionalCost, **updates) -> AdditionalCost:
        for key, value in updates.items():
            if hasattr(cost, key):
                setattr(cost, key, value)

        db.commit()
        db.refresh(cost)
        return cost

    @staticmethod
    def delete_cost(db: Session, cost: AdditionalCost) -> None:
        db.delete(cost)
        db.commit()
