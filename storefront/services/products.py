# storefront/services/products.py

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.errors import NotFoundError, UpstreamError, ValidationError
from storefront.core.storage import (
    ObjectStorage,
    StorageError,
    PRODUCT_IMAGES_BUCKET,
    new_object_key,
)
from storefront.models.products import Product, ProductImage
from storefront.schemas.product import (
    ImageOrderItem,
    ProductCreate,
    ProductImageCreate,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to {action}")
        raise UpstreamError(f"Unable to {action}") from e


# =========================================================
# CATALOG
# =========================================================
def list_products(
    db: Session,
    category: str | None = None,
    availability: bool | None = None,
    featured: bool | None = None,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[Product], int]:
    query = db.query(Product)

    if category:
        query = query.filter(Product.category == category)

    if availability is not None:
        query = query.filter(Product.availability.is_(availability))

    if featured is not None:
        query = query.filter(Product.featured.is_(featured))

    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))

    total = query.count()

    products = (
        query
        .options(selectinload(Product.images))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )

    return products, total


def get_product(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(selectinload(Product.images))
        .filter(Product.id == product_id)
        .first()
    )

    if product is None:
        raise NotFoundError("Product not found")

    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(**data.model_dump())

    db.add(product)
    _commit(db, "create product")
    db.refresh(product)

    logger.info(f"Product {product.id} created: {product.name}")
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = get_product(db, product_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in ("description", "specifications"):
            continue
        setattr(product, field, value)

    _commit(db, "update product")
    db.refresh(product)

    return product


def delete_product(db: Session, product_id: int):
    product = get_product(db, product_id)

    db.delete(product)
    _commit(db, "delete product")

    logger.info(f"Product {product_id} deleted")


# =========================================================
# IMAGES
# =========================================================
def add_product_image(db: Session, product_id: int, data: ProductImageCreate) -> ProductImage:
    get_product(db, product_id)

    # At most one primary image per product
    if data.is_primary:
        db.query(ProductImage).filter(
            ProductImage.product_id == product_id,
        ).update({ProductImage.is_primary: False}, synchronize_session=False)

    image = ProductImage(
        product_id=product_id,
        image_url=data.image_url,
        is_primary=data.is_primary,
        display_order=data.display_order,
    )

    db.add(image)
    _commit(db, "add product image")
    db.refresh(image)

    return image


def upload_product_images(
    db: Session,
    storage: ObjectStorage,
    product_id: int,
    files: list[tuple[str | None, bytes]],
) -> list[ProductImage]:
    """
    Store each file and register it, one at a time, so display_order is
    assigned in upload order. A file that fails is logged and skipped;
    the others still go through.
    """
    if not files:
        raise ValidationError("No files uploaded")

    get_product(db, product_id)

    max_order = (
        db.query(func.max(ProductImage.display_order))
        .filter(ProductImage.product_id == product_id)
        .scalar()
    )
    display_order = 0 if max_order is None else max_order + 1

    uploaded = []

    for filename, content in files:
        key = new_object_key(product_id, filename)

        try:
            storage.upload(PRODUCT_IMAGES_BUCKET, key, content)
        except StorageError as e:
            logger.error(f"Upload error for {filename} on product {product_id}: {e}")
            continue

        image = ProductImage(
            product_id=product_id,
            image_url=storage.public_url(PRODUCT_IMAGES_BUCKET, key),
            display_order=display_order,
            is_primary=display_order == 0,
        )

        try:
            db.add(image)
            db.commit()
            db.refresh(image)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to register image {key} for product {product_id}")
            try:
                storage.remove(PRODUCT_IMAGES_BUCKET, [key])
            except StorageError as e:
                logger.error(f"Could not clean up {key}: {e}")
            continue

        uploaded.append(image)
        display_order += 1

    logger.info(f"Uploaded {len(uploaded)}/{len(files)} images for product {product_id}")
    return uploaded


def delete_product_image(db: Session, storage: ObjectStorage, image_id: int):
    image = db.query(ProductImage).filter(ProductImage.id == image_id).first()

    if image is None:
        raise NotFoundError("Image not found")

    key = storage.key_from_url(PRODUCT_IMAGES_BUCKET, image.image_url)
    if key:
        try:
            storage.remove(PRODUCT_IMAGES_BUCKET, [key])
        except StorageError as e:
            logger.error(f"Storage delete error for image {image_id}: {e}")

    db.delete(image)
    _commit(db, "delete image")


def update_image_order(db: Session, items: list[ImageOrderItem]):
    ids = [item.id for item in items]
    images = {
        image.id: image
        for image in db.query(ProductImage).filter(ProductImage.id.in_(ids)).all()
    }

    missing = [image_id for image_id in ids if image_id not in images]
    if missing:
        raise NotFoundError(f"Image not found: {missing[0]}")

    for item in items:
        images[item.id].display_order = item.display_order

    _commit(db, "update image order")
