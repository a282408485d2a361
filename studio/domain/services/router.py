"""Service catalog router"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import ServiceCatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_service_catalog(db: Session = Depends(get_db)) -> ServiceCatalogService:
    """Dependency injection for ServiceCatalogService"""
    return ServiceCatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def get_services(
    active_only: bool = Query(False),
    current_user: User = Depends(get_current_user),
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    return catalog.get_services(current_user, active_only)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    current_user: User = Depends(get_current_user),
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    return catalog.get_service(service_id, current_user)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    current_user: User = Depends(get_current_user),
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    return catalog.create_service(data, current_user)


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    current_user: User = Depends(get_current_user),
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    return catalog.update_service(service_id, data, current_user)


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    current_user: User = Depends(get_current_user),
    catalog: ServiceCatalogService = Depends(get_service_catalog),
):
    return catalog.delete_service(service_id, current_user)
