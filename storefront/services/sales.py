# =========================================================
# SALE RECORDER
#
# Recording a sale is one transaction:
#   1. insert the sale (status "completed")
#   2. decrement product stock, floored at 0
#   3. mark the linked inquiry as converted
#
# The unique constraint on sales.inquiry_id is the source of
# truth for "one sale per inquiry"; the lookup before the
# insert only gives a friendlier error on the common path.
# =========================================================

import logging

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.core.errors import ConflictError, NotFoundError, UpstreamError
from storefront.models.inquiries import Inquiry, INQUIRY_STATUS_CONVERTED
from storefront.models.products import Product
from storefront.models.sales import Sale, SALE_STATUS_COMPLETED
from storefront.schemas.sale import SaleCreate, SaleUpdate

logger = logging.getLogger(__name__)

ALREADY_CONVERTED = "This inquiry has already been converted to a sale"
NULLABLE_SALE_FIELDS = ("customer_phone", "payment_method", "notes")


def _inquiry_has_sale(db: Session, inquiry_id: int) -> bool:
    return db.query(Sale.id).filter(Sale.inquiry_id == inquiry_id).first() is not None


def record_sale(db: Session, data: SaleCreate) -> Sale:
    inquiry = None

    if data.inquiry_id is not None:
        inquiry = (
            db.query(Inquiry)
            .filter(Inquiry.id == data.inquiry_id)
            .with_for_update()
            .first()
        )

        if inquiry is None:
            raise NotFoundError("Inquiry not found")

        if _inquiry_has_sale(db, inquiry.id):
            raise ConflictError(ALREADY_CONVERTED)

    product = (
        db.query(Product)
        .filter(Product.id == data.product_id)
        .with_for_update()
        .first()
    )

    if product is None:
        raise NotFoundError("Product not found")

    try:
        sale = Sale(**data.model_dump(), status=SALE_STATUS_COMPLETED)
        db.add(sale)
        db.flush()

        current_stock = product.stock_count or 0
        if data.quantity > current_stock:
            logger.warning(
                f"Sale for product {product.id} exceeds stock "
                f"({data.quantity} > {current_stock}), flooring at 0"
            )
        product.stock_count = max(0, current_stock - data.quantity)

        if inquiry is not None:
            inquiry.status = INQUIRY_STATUS_CONVERTED

        db.commit()
        db.refresh(sale)

    except IntegrityError as e:
        db.rollback()

        if data.inquiry_id is not None and _inquiry_has_sale(db, data.inquiry_id):
            raise ConflictError(ALREADY_CONVERTED) from e

        logger.exception("Integrity failure while recording sale")
        raise UpstreamError("Unable to record sale") from e

    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database failure while recording sale")
        raise UpstreamError("Unable to record sale") from e

    logger.info(
        f"Sale {sale.id} recorded: product {sale.product_id} x{sale.quantity}"
        + (f", inquiry {sale.inquiry_id} converted" if sale.inquiry_id else "")
    )
    return sale


def get_sale(db: Session, sale_id: int) -> Sale:
    sale = (
        db.query(Sale)
        .options(joinedload(Sale.product))
        .filter(Sale.id == sale_id)
        .first()
    )

    if sale is None:
        raise NotFoundError("Sale not found")

    return sale


def list_sales(db: Session, limit: int = 50, offset: int = 0) -> list[Sale]:
    return (
        db.query(Sale)
        .options(joinedload(Sale.product))
        .order_by(Sale.sold_at.desc(), Sale.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def update_sale(db: Session, sale_id: int, data: SaleUpdate) -> Sale:
    sale = get_sale(db, sale_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_SALE_FIELDS:
            continue
        setattr(sale, field, value)

    try:
        db.commit()
        db.refresh(sale)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to update sale {sale_id}")
        raise UpstreamError("Unable to update sale") from e

    return sale


def delete_sale(db: Session, sale_id: int):
    """Remove a sale. Stock is not restored."""
    sale = get_sale(db, sale_id)

    try:
        db.delete(sale)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to delete sale {sale_id}")
        raise UpstreamError("Unable to delete sale") from e

    logger.info(f"Sale {sale_id} deleted")
