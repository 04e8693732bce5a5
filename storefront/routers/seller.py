# storefront/routers/seller.py

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.core.storage import (
    MAX_PROFILE_PICTURE_SIZE,
    ObjectStorage,
    get_storage,
    read_image,
)
from storefront.schemas.seller import SellerProfileResponse, SellerProfileUpdate
from storefront.services import seller as seller_service

router = APIRouter(prefix="/seller", tags=["Seller"])


@router.get("/profile", response_model=SellerProfileResponse)
def get_profile(db: Session = Depends(get_db)):
    return seller_service.get_seller_profile(db)


@router.put("/profile", response_model=SellerProfileResponse)
def update_profile(
    profile_data: SellerProfileUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return seller_service.update_seller_profile(db, profile_data)


@router.post("/profile/picture", response_model=SellerProfileResponse)
def upload_profile_picture(
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    content = read_image(image, MAX_PROFILE_PICTURE_SIZE, field="image")

    return seller_service.upload_profile_picture(db, storage, image.filename, content)


@router.delete("/profile/picture", response_model=SellerProfileResponse)
def remove_profile_picture(
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    return seller_service.remove_profile_picture(db, storage)
