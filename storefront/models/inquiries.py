# storefront/models/inquiries.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from storefront.database import Base


INQUIRY_STATUSES = ("pending", "responded", "contacted", "completed", "cancelled")
INQUIRY_STATUS_PENDING = "pending"
# Status an inquiry is moved to once a sale has been recorded against it
INQUIRY_STATUS_CONVERTED = "completed"


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)

    status = Column(String, nullable=False, default=INQUIRY_STATUS_PENDING)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    product = relationship("Product")
    sale = relationship("Sale", back_populates="inquiry", uselist=False)

    __table_args__ = (
        Index("ix_inquiries_status", "status"),
        CheckConstraint(
            "status IN ('pending', 'responded', 'contacted', 'completed', 'cancelled')",
            name="ck_inquiry_status_valid",
        ),
    )

    @property
    def is_converted(self) -> bool:
        return self.sale is not None
