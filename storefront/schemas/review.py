from pydantic import BaseModel, Field
from datetime import datetime
from typing import List


class ReviewCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, description="Customer name is required")
    product_name: str = Field(..., min_length=1, description="Product name is required")
    product_id: int | None = None
    sale_id: int | None = None
    description: str = Field(..., min_length=1, description="Description is required")
    rating: int = Field(5, ge=1, le=5, description="Rating must be 1-5")
    is_featured: bool = False

    class Config:
        str_strip_whitespace = True


class ReviewUpdate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    rating: int | None = Field(None, ge=1, le=5)
    is_featured: bool | None = None

    class Config:
        str_strip_whitespace = True


class ReviewFeaturedUpdate(BaseModel):
    is_featured: bool


class ReviewImageResponse(BaseModel):
    id: int
    image_url: str
    storage_path: str
    display_order: int

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    customer_name: str
    product_name: str
    product_id: int | None
    sale_id: int | None
    description: str
    rating: int
    is_featured: bool
    created_at: datetime
    updated_at: datetime | None
    images: List[ReviewImageResponse] = []

    class Config:
        from_attributes = True


class ReviewEnvelope(BaseModel):
    review: ReviewResponse


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]


class ReviewImagesResponse(BaseModel):
    images: List[ReviewImageResponse]
