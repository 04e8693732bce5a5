from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import List, Literal

from storefront.schemas.product import ProductSummary


InquiryStatus = Literal["pending", "responded", "contacted", "completed", "cancelled"]


class InquiryCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, description="Name is required")
    customer_email: EmailStr = Field(..., description="Valid email is required")
    customer_phone: str | None = None
    message: str = Field(..., min_length=1, description="Message is required")
    product_id: int | None = None

    class Config:
        str_strip_whitespace = True

    @field_validator("customer_phone")
    @classmethod
    def blank_phone_is_none(cls, value):
        return value or None


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus


class InquiryResponse(BaseModel):
    id: int
    product_id: int | None
    customer_name: str
    customer_email: str
    customer_phone: str | None
    message: str
    status: str
    is_converted: bool
    created_at: datetime
    updated_at: datetime | None
    product: ProductSummary | None = None

    class Config:
        from_attributes = True


class InquiryCreatedResponse(BaseModel):
    message: str
    inquiry: InquiryResponse


class InquiryListResponse(BaseModel):
    inquiries: List[InquiryResponse]
