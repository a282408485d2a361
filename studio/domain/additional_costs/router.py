"""Additional cost router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import AdditionalCostCreate, AdditionalCostResponse, AdditionalCostUpdate
from .service import AdditionalCostService

router = APIRouter(prefix="/additional-costs", tags=["Additional Costs"])


def get_cost_service(db: Session = Depends(get_db)) -> AdditionalCostService:
    """Dependency injection for AdditionalCostService"""
    return AdditionalCostService(db)


@router.get("", response_model=list[AdditionalCostResponse])
async def get_costs(
    from_date: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD"),
    to_date: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD"),
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.get_costs(current_user, from_date, to_date)


@router.get("/categories", response_model=list[str])
async def get_categories(
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.get_categories(current_user)


@router.get("/{cost_id}", response_model=AdditionalCostResponse)
async def get_cost(
    cost_id: int,
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.get_cost(cost_id, current_user)


@router.post("", response_model=AdditionalCostResponse, status_code=201)
async def create_cost(
    data: AdditionalCostCreate,
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.create_cost(data, current_user)


@router.patch("/{cost_id}", response_model=AdditionalCostResponse)
async def update_cost(
    cost_id: int,
    data: AdditionalCostUpdate,
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.update_cost(cost_id, data, current_user)


@router.delete("/{cost_id}")
async def delete_cost(
    cost_id: int,
    current_user: User = Depends(get_current_user),
    service: AdditionalCostService = Depends(get_cost_service),
):
    return service.delete_cost(cost_id, current_user)
