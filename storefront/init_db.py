# storefront/init_db.py

import logging

from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.hashing import hash_password
from storefront.database import Base, SessionLocal, engine
from storefront.models.users import AdminUser
from storefront.services.seller import ensure_seller_profile

import storefront.models  # noqa: F401

logger = logging.getLogger(__name__)


def ensure_admin_user(db: Session, email: str | None, password: str | None) -> AdminUser | None:
    if not email or not password:
        return None

    admin = db.query(AdminUser).filter(AdminUser.email == email).first()

    if admin is None:
        admin = AdminUser(email=email, password_hash=hash_password(password))
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info(f"Seeded admin account {email}")

    return admin


def seed(db: Session):
    ensure_seller_profile(db)
    ensure_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


def init_db():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
