import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="storefront-uploads-")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.hashing import hash_password
from storefront.core.jwt import create_admin_token
from storefront.core.storage import ObjectStorage, get_storage
from storefront.database import Base, get_db
from storefront.main import app
from storefront.models import AdminUser, Inquiry, Product
from storefront.services.seller import ensure_seller_profile

ADMIN_EMAIL = "owner@gadgethub.com"
ADMIN_PASSWORD = "correct-horse-battery"
# bcrypt is slow on purpose, hash once per run
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    return ObjectStorage(tmp_path / "uploads", "http://testserver")


@pytest.fixture
def admin_user(db_session):
    admin = AdminUser(email=ADMIN_EMAIL, password_hash=ADMIN_PASSWORD_HASH)
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def client(db_session, storage, admin_user):
    ensure_seller_profile(db_session)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(admin_user):
    token = create_admin_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_product(db_session):
    def _make_product(**overrides):
        fields = {
            "name": "iPhone 15 Pro",
            "category": "iPhones",
            "price": Decimal("999.00"),
            "stock_count": 10,
            "availability": True,
            "featured": False,
        }
        fields.update(overrides)

        product = Product(**fields)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make_product


@pytest.fixture
def make_inquiry(db_session):
    def _make_inquiry(product=None, **overrides):
        fields = {
            "product_id": product.id if product else None,
            "customer_name": "Jane Buyer",
            "customer_email": "jane@buyers.com",
            "message": "Is this still available?",
            "status": "pending",
        }
        fields.update(overrides)

        inquiry = Inquiry(**fields)
        db_session.add(inquiry)
        db_session.commit()
        db_session.refresh(inquiry)
        return inquiry

    return _make_inquiry

