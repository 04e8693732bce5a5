# storefront/models/seller.py

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from storefront.database import Base


class SellerProfile(Base):
    __tablename__ = "seller_profile"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    business_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    profile_picture_url = Column(String, nullable=True)
    # Object key inside the storage bucket, needed to remove the old picture
    profile_picture_path = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
