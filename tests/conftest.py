"""
Pytest configuration - shared fixtures
"""
import sys
import os
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Generator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

# Settings are read at import time
os.environ["JWT_SECRET"] = "test-secret-key-0123456789abcdef"
os.environ["ADMIN_CREATION_CODE"] = "TEST-ADMIN-CODE"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_RETRY_DELAY"] = "0"

from storefront.database import Base, get_db, set_sqlite_pragma
from storefront.core.security import credential_store
from storefront.models.user import User
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas import UserRegister
from storefront.services.identity_service import identity_service

DEFAULT_PASSWORD = "secret1"


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


@pytest.fixture
def client(test_db):
    """TestClient bound to the in-memory database"""
    from fastapi.testclient import TestClient
    from storefront.main import app

    def _get_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_user(db: Session, email: str, password: str = DEFAULT_PASSWORD, **profile) -> User:
    data = {
        "email": email,
        "password": password,
        "first_name": "Test",
        "last_name": "User",
        "mobile_number": "9876543210",
    }
    data.update(profile)
    return identity_service.create_user(db, UserRegister(**data))


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {credential_store.issue_token(user.id)}"}


@pytest.fixture
def make_user(test_db):
    """Factory registering users through the identity service"""
    def _make(email: str, password: str = DEFAULT_PASSWORD, **profile) -> User:
        return create_user(test_db, email, password, **profile)
    return _make


@pytest.fixture
def headers_for():
    """Factory building bearer headers for a user"""
    return auth_headers


@pytest.fixture
def customer(test_db) -> User:
    return create_user(test_db, "customer@shop.com", first_name="Rahul", last_name="Sharma")


@pytest.fixture
def admin_user(test_db) -> User:
    user = create_user(test_db, "admin@shop.com", first_name="Asha", last_name="Admin")
    identity_service.promote(test_db, user.id)
    return user


@pytest.fixture
def category(test_db) -> Category:
    category = Category(name="Cricket Jersey", slug="cricket", description="Cricket jerseys")
    test_db.add(category)
    test_db.commit()
    return category


@pytest.fixture
def product(test_db, category) -> Product:
    """P1: active cricket jersey with stock 10"""
    product = Product(
        name="Premium Cricket Team Jersey - Blue",
        slug="premium-cricket-team-jersey-blue",
        description="Professional cricket jersey with moisture-wicking fabric",
        price=Decimal("1299.00"),
        sale_price=Decimal("999.00"),
        category_id=category.id,
        stock=10,
        is_featured=True,
    )
    test_db.add(product)
    test_db.commit()
    return product


@pytest.fixture
def football(test_db) -> Category:
    football = Category(name="Football Jersey", slug="football")
    hidden = Category(name="Archived", slug="archived", is_active=False)
    test_db.add_all([football, hidden])
    test_db.commit()
    return football


@pytest.fixture
def catalog(test_db, category, football) -> Dict[str, Product]:
    """Mixed catalog with deterministic creation times (oldest first)"""
    base = datetime(2024, 1, 1, 12, 0, 0)
    specs = [
        ("classic-cricket-white", "Classic Cricket Jersey - White", "Traditional whites", category, True, False),
        ("football-home", "Elite Football Jersey - Home Kit", "Lightweight fabric, cricket-inspired collar", football, True, True),
        ("football-away", "Classic Football Jersey - Away Kit", "Away kit", football, True, False),
        ("old-cricket", "Old CRICKET Jersey", "Discontinued", category, False, False),
        ("modern-cricket-red", "Modern Cricket Jersey - Red", "Vibrant red", category, True, True),
    ]
    products = {}
    for offset, (slug, name, description, cat, active, featured) in enumerate(specs):
        products[slug] = Product(
            name=name,
            slug=slug,
            description=description,
            price=Decimal("1199.00"),
            category_id=cat.id,
            is_active=active,
            is_featured=featured,
            stock=5,
            created_at=base + timedelta(days=offset),
        )
    test_db.add_all(products.values())
    test_db.commit()
    return products
