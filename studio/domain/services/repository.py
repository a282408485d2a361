"""Service catalog repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import BookingServiceItem, Service


class ServiceRepository:
    @staticmethod
    def get_services(db: Session, user_id: int, active_only: bool = False) -> list[Service]:
        query = db.query(Service).filter(Service.user_id == user_id)
        if active_only:
            query = query.filter(Service.active.is_(True))
        return query.order_by(Service.name.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int, user_id: int) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_services_by_ids(db: Session, service_ids: list[int], user_id: int) -> dict[int, Service]:
        if not service_ids:
            return {}
        services = (
            db.query(Service)
            .filter(Service.id.in_(set(service_ids)), Service.user_id == user_id)
            .all()
        )
        return {service.id: service for service in services}

    @staticmethod
    def create_service(db: Session, user_id: int, **service_data) -> Service:
        service = Service(user_id=user_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def is_used_in_bookings(db: Session, service_id: int) -> bool:
        return (
            db.query(BookingServiceItem.id).filter(BookingServiceItem.service_id == service_id).first()
            is not None
        )

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
