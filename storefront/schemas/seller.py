from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class SellerProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    business_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    bio: str | None = None

    class Config:
        str_strip_whitespace = True


class SellerProfileResponse(BaseModel):
    id: int
    name: str
    business_name: str | None
    email: str | None
    phone: str | None
    address: str | None
    bio: str | None
    profile_picture_url: str | None
    updated_at: datetime | None

    class Config:
        from_attributes = True
