"""Service catalog business logic"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Service, User
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    """Service layer for the studio's service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, user: User, active_only: bool = False) -> list[Service]:
        return self.repo.get_services(self.db, user.id, active_only)

    def get_service(self, service_id: int, user: User) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id, user.id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, data: ServiceCreate, user: User) -> Service:
        logger.info(f"💼 Creating service '{data.name}' for user_id: {user.id}")
        return self.repo.create_service(self.db, user.id, **data.model_dump())

    def update_service(self, service_id: int, data: ServiceUpdate, user: User) -> Service:
        service = self.get_service(service_id, user)
        return self.repo.update_service(self.db, service, **data.model_dump(exclude_unset=True))

    def delete_service(self, service_id: int, user: User) -> dict:
        service = self.get_service(service_id, user)
        if self.repo.is_used_in_bookings(self.db, service.id):
            raise HTTPException(
                status_code=409,
                detail="Service is used in bookings. Mark it inactive instead of deleting it.",
            )
        self.repo.delete_service(self.db, service)
        return {"message": "Service deleted"}
