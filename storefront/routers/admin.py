# =========================================================
# ADMIN ROUTER
#
# - Login (bearer token for every admin route)
# - Product image uploads, removal and re-ordering
# =========================================================

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.core.errors import ValidationError
from storefront.core.hashing import verify_password
from storefront.core.jwt import create_admin_token
from storefront.core.rate_limiter import limiter
from storefront.core.storage import (
    MAX_PRODUCT_IMAGE_SIZE,
    ObjectStorage,
    get_storage,
    read_image,
)
from storefront.models.users import AdminUser
from storefront.schemas.product import ImageOrderUpdate, ProductImagesResponse
from storefront.schemas.user import AdminLogin, TokenResponse
from storefront.services import products as product_service

router = APIRouter(prefix="/admin", tags=["Admin"])

MAX_UPLOAD_FILES = 10


# ---------------- LOGIN ----------------
@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
def login(
    request: Request,
    credentials: AdminLogin,
    db: Session = Depends(get_db),
):
    admin = db.query(AdminUser).filter(AdminUser.email == credentials.email).first()

    if not admin or not verify_password(credentials.password, admin.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_admin_token(admin.id, email=admin.email)

    return {
        "access_token": token,
        "token_type": "bearer",
        "user": admin,
    }


# ---------------- UPLOAD PRODUCT IMAGES ----------------
@router.post(
    "/products/{product_id}/images",
    response_model=ProductImagesResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_product_images(
    product_id: int,
    images: List[UploadFile] | None = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    images = images or []

    if len(images) > MAX_UPLOAD_FILES:
        raise ValidationError(f"At most {MAX_UPLOAD_FILES} images per upload")

    files = [(image.filename, read_image(image, MAX_PRODUCT_IMAGE_SIZE)) for image in images]

    uploaded = product_service.upload_product_images(db, storage, product_id, files)

    return {
        "message": "Images uploaded successfully",
        "images": uploaded,
    }


# ---------------- DELETE PRODUCT IMAGE ----------------
@router.delete("/images/{image_id}")
def delete_product_image(
    image_id: int,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    product_service.delete_product_image(db, storage, image_id)

    return {"message": "Image deleted successfully"}


# ---------------- REORDER PRODUCT IMAGES ----------------
@router.put("/images/order")
def update_image_order(
    order_data: ImageOrderUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    product_service.update_image_order(db, order_data.images)

    return {"message": "Image order updated successfully"}
