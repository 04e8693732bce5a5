# storefront/services/reviews.py

import logging

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.errors import NotFoundError, UpstreamError, ValidationError, field_error
from storefront.core.storage import (
    ObjectStorage,
    StorageError,
    REVIEW_IMAGES_BUCKET,
    new_object_key,
)
from storefront.models.products import Product
from storefront.models.reviews import Review, ReviewImage, MAX_REVIEW_IMAGES
from storefront.models.sales import Sale
from storefront.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)

FEATURED_REVIEWS_LIMIT = 5


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to {action}")
        raise UpstreamError(f"Unable to {action}") from e


def _remove_objects(storage: ObjectStorage, keys: list[str]):
    if not keys:
        return
    try:
        storage.remove(REVIEW_IMAGES_BUCKET, keys)
    except StorageError as e:
        logger.error(f"Storage delete error for review images {keys}: {e}")


def list_reviews(db: Session, featured_only: bool = False) -> list[Review]:
    query = db.query(Review).options(selectinload(Review.images))

    if featured_only:
        query = query.filter(Review.is_featured.is_(True))

    query = query.order_by(Review.created_at.desc(), Review.id.desc())

    if featured_only:
        query = query.limit(FEATURED_REVIEWS_LIMIT)

    return query.all()


def get_review(db: Session, review_id: int) -> Review:
    review = (
        db.query(Review)
        .options(selectinload(Review.images))
        .filter(Review.id == review_id)
        .first()
    )

    if review is None:
        raise NotFoundError("Review not found")

    return review


def create_review(db: Session, data: ReviewCreate) -> Review:
    product_id = data.product_id

    if data.sale_id is not None:
        sale = db.query(Sale).filter(Sale.id == data.sale_id).first()
        if sale is None:
            raise field_error("sale_id", "Sale not found")
        # Seeded from a sale: inherit its product unless one was given
        if product_id is None:
            product_id = sale.product_id

    if product_id is not None:
        if db.query(Product.id).filter(Product.id == product_id).first() is None:
            raise field_error("product_id", "Product not found")

    review = Review(
        customer_name=data.customer_name,
        product_name=data.product_name,
        product_id=product_id,
        sale_id=data.sale_id,
        description=data.description,
        rating=data.rating,
        is_featured=data.is_featured,
    )

    db.add(review)
    _commit(db, "create review")
    db.refresh(review)

    logger.info(f"Review {review.id} created for {review.product_name}")
    return review


def update_review(db: Session, review_id: int, data: ReviewUpdate) -> Review:
    review = get_review(db, review_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(review, field, value)

    _commit(db, "update review")
    db.refresh(review)

    return review


def set_featured(db: Session, review_id: int, is_featured: bool) -> Review:
    review = get_review(db, review_id)

    review.is_featured = is_featured
    _commit(db, "update review")
    db.refresh(review)

    return review


def upload_review_images(
    db: Session,
    storage: ObjectStorage,
    review_id: int,
    files: list[tuple[str | None, bytes]],
) -> list[ReviewImage]:
    """
    All-or-nothing: any failure rolls back the rows and removes the
    objects stored so far in this batch. Files beyond the per-review
    limit are ignored.
    """
    review = get_review(db, review_id)
    existing = len(review.images)

    if existing >= MAX_REVIEW_IMAGES:
        raise ValidationError(f"Maximum {MAX_REVIEW_IMAGES} images per review")

    if not files:
        raise ValidationError("No images provided")

    to_upload = files[: MAX_REVIEW_IMAGES - existing]
    stored_keys = []
    images = []

    try:
        for index, (filename, content) in enumerate(to_upload):
            key = new_object_key(review_id, filename)
            storage.upload(REVIEW_IMAGES_BUCKET, key, content)
            stored_keys.append(key)

            image = ReviewImage(
                review_id=review_id,
                image_url=storage.public_url(REVIEW_IMAGES_BUCKET, key),
                storage_path=key,
                display_order=existing + index,
            )
            db.add(image)
            images.append(image)

        db.commit()

    except (StorageError, SQLAlchemyError) as e:
        db.rollback()
        _remove_objects(storage, stored_keys)
        logger.error(f"Upload review images error for review {review_id}: {e}")
        raise UpstreamError("Unable to upload review images") from e

    for image in images:
        db.refresh(image)

    logger.info(f"Uploaded {len(images)} images for review {review_id}")
    return images


def delete_review_image(db: Session, storage: ObjectStorage, image_id: int):
    image = db.query(ReviewImage).filter(ReviewImage.id == image_id).first()

    if image is None:
        raise NotFoundError("Image not found")

    if image.storage_path:
        _remove_objects(storage, [image.storage_path])

    db.delete(image)
    _commit(db, "delete review image")


def delete_review(db: Session, storage: ObjectStorage, review_id: int):
    review = get_review(db, review_id)

    _remove_objects(storage, [image.storage_path for image in review.images if image.storage_path])

    db.delete(review)
    _commit(db, "delete review")

    logger.info(f"Review {review_id} deleted")
