# storefront/services/seller.py

import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.errors import NotFoundError, UpstreamError
from storefront.core.storage import (
    ObjectStorage,
    StorageError,
    SELLER_PROFILE_BUCKET,
    new_object_key,
)
from storefront.models.seller import SellerProfile
from storefront.schemas.seller import SellerProfileUpdate

logger = logging.getLogger(__name__)

DEFAULT_SELLER_NAME = "Store Owner"


def ensure_seller_profile(db: Session) -> SellerProfile:
    """Create the single profile row if it does not exist yet."""
    profile = db.query(SellerProfile).order_by(SellerProfile.id).first()

    if profile is None:
        profile = SellerProfile(name=DEFAULT_SELLER_NAME)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("Seeded seller profile")

    return profile


def get_seller_profile(db: Session) -> SellerProfile:
    profile = db.query(SellerProfile).order_by(SellerProfile.id).first()

    if profile is None:
        raise NotFoundError("Seller profile not found")

    return profile


def _save(db: Session, profile: SellerProfile, action: str):
    try:
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to {action}")
        raise UpstreamError(f"Unable to {action}") from e


def update_seller_profile(db: Session, data: SellerProfileUpdate) -> SellerProfile:
    profile = get_seller_profile(db)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(profile, field, value)

    _save(db, profile, "update seller profile")
    return profile


def upload_profile_picture(
    db: Session,
    storage: ObjectStorage,
    filename: str | None,
    content: bytes,
) -> SellerProfile:
    """Store the new picture, switch the profile to it, then drop the old one."""
    profile = get_seller_profile(db)
    old_path = profile.profile_picture_path

    key = new_object_key("profile", filename)
    try:
        storage.upload(SELLER_PROFILE_BUCKET, key, content)
    except StorageError as e:
        logger.error(f"Profile picture upload error: {e}")
        raise UpstreamError("Unable to upload profile picture") from e

    profile.profile_picture_url = storage.public_url(SELLER_PROFILE_BUCKET, key)
    profile.profile_picture_path = key

    try:
        _save(db, profile, "update profile picture")
    except UpstreamError:
        try:
            storage.remove(SELLER_PROFILE_BUCKET, [key])
        except StorageError as e:
            logger.error(f"Could not clean up {key}: {e}")
        raise

    if old_path:
        try:
            storage.remove(SELLER_PROFILE_BUCKET, [old_path])
        except StorageError as e:
            logger.warning(f"Old profile picture {old_path} not removed: {e}")

    return profile


def remove_profile_picture(db: Session, storage: ObjectStorage) -> SellerProfile:
    profile = get_seller_profile(db)

    if profile.profile_picture_path:
        try:
            storage.remove(SELLER_PROFILE_BUCKET, [profile.profile_picture_path])
        except StorageError as e:
            logger.warning(f"Profile picture {profile.profile_picture_path} not removed: {e}")

    profile.profile_picture_url = None
    profile.profile_picture_path = None

    _save(db, profile, "remove profile picture")
    return profile
