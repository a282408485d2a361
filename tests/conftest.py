import os

# In-memory database; must be set before the studio package is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FIREBASE_PROJECT_ID"] = "studio-test"

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from studio.auth import get_current_user
from studio.database import Base, SessionLocal, engine, get_db
from studio.main import app
from studio.models import User


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(db: Session, uid: str, email: str, timezone: str = "Europe/Warsaw") -> int:
    user = User(firebase_uid=uid, email=email, full_name=uid, timezone=timezone)
    db.add(user)
    db.commit()
    return user.id


def login_as(user_id: int) -> None:
    """Authenticate every following request as user_id"""

    def _current_user(db: Session = Depends(get_db)) -> User:
        return db.get(User, user_id)

    app.dependency_overrides[get_current_user] = _current_user


@pytest.fixture
def owner_id(db):
    return make_user(db, "owner-uid", "owner@example.com")


@pytest.fixture
def other_owner_id(db):
    return make_user(db, "other-uid", "other@example.com")


@pytest.fixture
def api(owner_id):
    login_as(owner_id)
    return TestClient(app)


@pytest.fixture
def catalog(api):
    """A service, two products and a booksy client for the logged-in owner"""
    service = api.post(
        "/services", json={"name": "Helix", "duration_minutes": 30, "base_price": 80}
    ).json()
    second_service = api.post(
        "/services", json={"name": "Lobe", "duration_minutes": 15, "base_price": 50}
    ).json()
    product = api.post(
        "/products",
        json={"name": "Gold stud", "sku": "GS-1", "category": "Studs", "cost": 15, "sale_price": 40},
    ).json()
    second_product = api.post(
        "/products", json={"name": "Silver ring", "cost": 5, "sale_price": 25}
    ).json()
    client = api.post(
        "/clients", json={"name": "Anna Nowak", "phone": "+48 600 100 200", "source": "booksy"}
    ).json()
    return {
        "service": service,
        "second_service": second_service,
        "product": product,
        "second_product": second_product,
        "client": client,
    }


@pytest.fixture
def login():
    """Switch the authenticated owner: login(user_id)"""
    return login_as
