# =========================================================
# INQUIRY LIFECYCLE
#
# - Public submission always starts at "pending"
# - Admins may move between any statuses freely
# - Once a sale references the inquiry it is converted:
#   its status is frozen and it can no longer be deleted
# =========================================================

import logging

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.core.errors import ConflictError, NotFoundError, UpstreamError, field_error
from storefront.models.inquiries import Inquiry, INQUIRY_STATUS_PENDING
from storefront.models.products import Product
from storefront.schemas.inquiry import InquiryCreate

logger = logging.getLogger(__name__)


def submit_inquiry(db: Session, data: InquiryCreate) -> Inquiry:
    if data.product_id is not None:
        product = db.query(Product.id).filter(Product.id == data.product_id).first()
        if product is None:
            raise field_error("product_id", "Product not found")

    inquiry = Inquiry(
        product_id=data.product_id,
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        message=data.message,
        status=INQUIRY_STATUS_PENDING,
    )

    try:
        db.add(inquiry)
        db.commit()
        db.refresh(inquiry)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to store inquiry")
        raise UpstreamError("Unable to submit inquiry") from e

    logger.info(f"Inquiry {inquiry.id} submitted for product {inquiry.product_id}")
    return inquiry


def get_inquiry(db: Session, inquiry_id: int) -> Inquiry:
    inquiry = (
        db.query(Inquiry)
        .options(joinedload(Inquiry.product), joinedload(Inquiry.sale))
        .filter(Inquiry.id == inquiry_id)
        .first()
    )

    if inquiry is None:
        raise NotFoundError("Inquiry not found")

    return inquiry


def list_inquiries(
    db: Session,
    status: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Inquiry]:
    query = db.query(Inquiry).options(
        joinedload(Inquiry.product),
        joinedload(Inquiry.sale),
    )

    if status:
        query = query.filter(Inquiry.status == status)

    return (
        query
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def update_status(db: Session, inquiry_id: int, status: str) -> Inquiry:
    inquiry = get_inquiry(db, inquiry_id)

    if inquiry.is_converted:
        raise ConflictError("Cannot change the status of an inquiry that has been converted to a sale")

    # Same status again: nothing to write
    if inquiry.status == status:
        return inquiry

    previous = inquiry.status
    inquiry.status = status

    try:
        db.commit()
        db.refresh(inquiry)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to update status of inquiry {inquiry_id}")
        raise UpstreamError("Unable to update inquiry") from e

    logger.info(f"Inquiry {inquiry_id} status {previous} -> {status}")
    return inquiry


def delete_inquiry(db: Session, inquiry_id: int):
    inquiry = get_inquiry(db, inquiry_id)

    if inquiry.is_converted:
        raise ConflictError("Cannot delete inquiry that has been converted to a sale")

    try:
        db.delete(inquiry)
        db.commit()
    except IntegrityError as e:
        # A sale was recorded against it in the meantime
        db.rollback()
        raise ConflictError("Cannot delete inquiry that has been converted to a sale") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Failed to delete inquiry {inquiry_id}")
        raise UpstreamError("Unable to delete inquiry") from e

    logger.info(f"Inquiry {inquiry_id} deleted")
