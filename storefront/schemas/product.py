from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Literal


ProductCategory = Literal["iPhones", "Android", "Laptops", "Accessories"]


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Product name is required")
    category: ProductCategory

    price: Decimal = Field(
        ...,
        ge=0,
        lt=100_000_000,
        description="Price must be a positive number below 100 million"
    )

    description: str | None = None
    specifications: Dict[str, Any] | None = None
    availability: bool = True
    featured: bool = False
    stock_count: int = Field(0, ge=0)

    class Config:
        str_strip_whitespace = True


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    category: ProductCategory | None = None
    price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    description: str | None = None
    specifications: Dict[str, Any] | None = None
    availability: bool | None = None
    featured: bool | None = None
    stock_count: int | None = Field(None, ge=0)

    class Config:
        str_strip_whitespace = True


class ProductImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1)
    is_primary: bool = False
    display_order: int = Field(0, ge=0)


class ProductImageResponse(BaseModel):
    id: int
    product_id: int
    image_url: str
    display_order: int
    is_primary: bool

    class Config:
        from_attributes = True


class ImageOrderItem(BaseModel):
    id: int
    display_order: int = Field(..., ge=0)


class ImageOrderUpdate(BaseModel):
    images: List[ImageOrderItem]


class ProductSummary(BaseModel):
    id: int
    name: str
    category: str
    price: float

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    price: float
    description: str | None
    specifications: Dict[str, Any] | None
    availability: bool
    featured: bool
    stock_count: int
    created_at: datetime
    updated_at: datetime | None
    images: List[ProductImageResponse] = []

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    total: int
    limit: int
    offset: int


class ProductImagesResponse(BaseModel):
    message: str
    images: List[ProductImageResponse]
