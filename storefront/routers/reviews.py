# =========================================================
# REVIEWS ROUTER
#
# PUBLIC:
# - All reviews, featured reviews (homepage)
#
# ADMIN:
# - Create / edit / feature / delete reviews
# - Up to 5 images per review
# =========================================================

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.core.storage import (
    MAX_REVIEW_IMAGE_SIZE,
    ObjectStorage,
    get_storage,
    read_image,
)
from storefront.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewFeaturedUpdate,
    ReviewImagesResponse,
    ReviewListResponse,
    ReviewUpdate,
)
from storefront.services import reviews as review_service

router = APIRouter(prefix="/reviews", tags=["Reviews"])


# ---------------- PUBLIC ----------------
@router.get("", response_model=ReviewListResponse)
def list_reviews(db: Session = Depends(get_db)):
    return {"reviews": review_service.list_reviews(db)}


@router.get("/featured", response_model=ReviewListResponse)
def featured_reviews(db: Session = Depends(get_db)):
    return {"reviews": review_service.list_reviews(db, featured_only=True)}


# ---------------- ADMIN ----------------
@router.post("", response_model=ReviewEnvelope, status_code=status.HTTP_201_CREATED)
def create_review(
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return {"review": review_service.create_review(db, review_data)}


@router.post("/{review_id}/images", response_model=ReviewImagesResponse)
def upload_review_images(
    review_id: int,
    images: List[UploadFile] | None = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    files = [(image.filename, read_image(image, MAX_REVIEW_IMAGE_SIZE)) for image in images or []]

    return {"images": review_service.upload_review_images(db, storage, review_id, files)}


@router.put("/{review_id}", response_model=ReviewEnvelope)
def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return {"review": review_service.update_review(db, review_id, review_data)}


@router.patch("/{review_id}/featured", response_model=ReviewEnvelope)
def toggle_featured(
    review_id: int,
    featured_data: ReviewFeaturedUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return {"review": review_service.set_featured(db, review_id, featured_data.is_featured)}


@router.delete("/images/{image_id}")
def delete_review_image(
    image_id: int,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    review_service.delete_review_image(db, storage, image_id)

    return {"message": "Image deleted successfully"}


@router.delete("/{review_id}")
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    admin=Depends(get_current_admin),
):
    review_service.delete_review(db, storage, review_id)

    return {"message": "Review deleted successfully"}
