"""Dashboard router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import DashboardResponse
from .service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    """Dependency injection for DashboardService"""
    return DashboardService(db)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    from_date: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, user's timezone"),
    to_date: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, user's timezone"),
    current_user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Revenue, costs and profit for the range; all time when from/to are omitted"""
    return service.get_dashboard(current_user, from_date, to_date)
