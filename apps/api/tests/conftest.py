"""
Test configuration and fixtures.
"""
import os
import pytest
from decimal import Decimal
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set test configuration before importing app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FRONTEND_DIST"] = os.path.join(os.path.dirname(__file__), "no-frontend-build")
os.environ["RESTAURANT_TIMEZONE"] = "Europe/Madrid"

from backoffice.main import app
from backoffice.db.base import Base
from backoffice.db.session import get_db
from backoffice.models import MenuItem
from backoffice.client import ApiClient, RequestStateStore


# In-memory database shared by every connection, rebuilt for each test
TEST_DATABASE_URL = os.environ["DATABASE_URL"]
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a database session on a fresh schema."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def sample_menu_items(db: Session) -> list:
    """Three dishes: one in stock, one sold out, one with little stock."""
    items = [
        MenuItem(
            name="Paella",
            description="Arroz, marisco, azafrán",
            price=Decimal("12.50"),
            category="pescado",
            stock=10,
            seafood=True,
        ),
        MenuItem(
            name="Tiramisú",
            description="Mascarpone, café, bizcocho",
            price=Decimal("5.00"),
            category="postre",
            stock=0,
            vegetarian=True,
            dairy=True,
        ),
        MenuItem(
            name="Croquetas",
            description="Jamón, bechamel",
            price=Decimal("7.25"),
            category="entrante",
            stock=3,
            gluten=True,
        ),
    ]
    for item in items:
        db.add(item)
    db.commit()

    for item in items:
        db.refresh(item)

    return items


@pytest.fixture
def api_client(client: TestClient) -> ApiClient:
    """ApiClient that talks to the app in-process."""
    return ApiClient(base_url="http://testserver/api", session=client)


@pytest.fixture
def store() -> RequestStateStore:
    return RequestStateStore()
