# storefront/models/sales.py

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from storefront.database import Base


SALE_STATUS_COMPLETED = "completed"


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    # At most one sale per inquiry; NULLs (walk-in sales) never collide
    inquiry_id = Column(
        Integer,
        ForeignKey("inquiries.id", ondelete="RESTRICT"),
        nullable=True,
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    sale_amount = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    payment_method = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String, nullable=False, default=SALE_STATUS_COMPLETED, index=True)

    sold_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    inquiry = relationship("Inquiry", back_populates="sale")
    product = relationship("Product")

    __table_args__ = (
        UniqueConstraint("inquiry_id", name="uq_sales_inquiry_id"),
        CheckConstraint("sale_amount >= 0", name="ck_sale_amount_non_negative"),
        CheckConstraint("quantity >= 1", name="ck_sale_quantity_positive"),
    )
