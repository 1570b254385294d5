import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["BOOKING_SWEEP_ENABLED"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import date, time, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from futsal_booking.core.database import Base  # noqa: E402
from futsal_booking.core.security import create_access_token  # noqa: E402
from futsal_booking.dependencies import get_db  # noqa: E402
from futsal_booking.main import app  # noqa: E402
from futsal_booking.models import Facility, Kit, User  # noqa: E402
from futsal_booking.models.user import UserRole  # noqa: E402

API = "/api/futsal/v1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(db, *, name, email, role):
    user = User(name=name, email=email, phone="999000111", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner(db):
    return _create_user(
        db, name="Olga Owner", email="owner@example.com", role=UserRole.FUTSAL_OWNER.value
    )


@pytest.fixture
def other_owner(db):
    return _create_user(
        db, name="Oscar Rival", email="rival@example.com", role=UserRole.FUTSAL_OWNER.value
    )


@pytest.fixture
def player(db):
    return _create_user(
        db, name="Pat Player", email="player@example.com", role=UserRole.PLAYER.value
    )


@pytest.fixture
def other_player(db):
    return _create_user(
        db, name="Sam Striker", email="striker@example.com", role=UserRole.PLAYER.value
    )


@pytest.fixture
def facility(db, owner):
    facility = Facility(
        name="Arena Norte",
        description="Indoor court",
        location="Av. Central 123",
        price_per_hour=Decimal("500.00"),
        opening_time=time(8, 0),
        closing_time=time(22, 0),
        is_available=True,
        id_owner=owner.id_user,
    )
    db.add(facility)
    db.commit()
    db.refresh(facility)
    return facility


@pytest.fixture
def kit(db, facility):
    kit = Kit(
        id_facility=facility.id_facility,
        name="Home jersey",
        type="Jersey",
        price=Decimal("100.00"),
        size="M",
        quantity=2,
        is_available=True,
    )
    db.add(kit)
    db.commit()
    db.refresh(kit)
    return kit


@pytest.fixture
def booking_day():
    return date.today() + timedelta(days=7)


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token({"sub": str(user.id_user)})
        return {"Authorization": f"Bearer {token}"}

    return _headers
