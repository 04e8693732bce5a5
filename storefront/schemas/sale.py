# schemas/sale.py

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import List
from decimal import Decimal

from storefront.schemas.product import ProductSummary


class SaleCreate(BaseModel):
    inquiry_id: int | None = None
    product_id: int = Field(..., description="Valid product ID required")
    customer_name: str = Field(..., min_length=1)
    customer_email: EmailStr
    customer_phone: str | None = None
    sale_amount: Decimal = Field(..., ge=0, lt=100_000_000)
    quantity: int = Field(1, ge=1)
    payment_method: str | None = None
    notes: str | None = None

    class Config:
        str_strip_whitespace = True


# inquiry_id and product_id are fixed once a sale is recorded
class SaleUpdate(BaseModel):
    customer_name: str | None = Field(None, min_length=1)
    customer_email: EmailStr | None = None
    customer_phone: str | None = None
    sale_amount: Decimal | None = Field(None, ge=0, lt=100_000_000)
    quantity: int | None = Field(None, ge=1)
    payment_method: str | None = None
    notes: str | None = None
    status: str | None = Field(None, min_length=1)

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class SaleResponse(BaseModel):
    id: int
    inquiry_id: int | None
    product_id: int | None
    customer_name: str
    customer_email: str
    customer_phone: str | None
    sale_amount: float
    quantity: int
    payment_method: str | None
    notes: str | None
    status: str
    sold_at: datetime
    product: ProductSummary | None = None

    class Config:
        from_attributes = True


class SaleCreatedResponse(BaseModel):
    message: str
    sale: SaleResponse


class SaleListResponse(BaseModel):
    sales: List[SaleResponse]
