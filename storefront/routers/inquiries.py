# =========================================================
# INQUIRIES ROUTER
#
# PUBLIC:
# - Submit an inquiry (starts as "pending")
#
# ADMIN:
# - List / filter inquiries
# - Move an inquiry between statuses
# - Delete inquiries that were never converted to a sale
# =========================================================

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.core.rate_limiter import limiter
from storefront.schemas.inquiry import (
    InquiryCreate,
    InquiryCreatedResponse,
    InquiryListResponse,
    InquiryResponse,
    InquiryStatus,
    InquiryStatusUpdate,
)
from storefront.services import inquiries as inquiry_service

router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


# =========================================================
# SUBMIT INQUIRY (PUBLIC)
# =========================================================
@router.post("", response_model=InquiryCreatedResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def submit_inquiry(
    request: Request,
    inquiry_data: InquiryCreate,
    db: Session = Depends(get_db),
):
    inquiry = inquiry_service.submit_inquiry(db, inquiry_data)

    return {
        "message": "Inquiry submitted successfully",
        "inquiry": inquiry,
    }


# =========================================================
# LIST INQUIRIES
# =========================================================
@router.get("", response_model=InquiryListResponse)
def list_inquiries(
    status: InquiryStatus | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    inquiries = inquiry_service.list_inquiries(db, status=status, limit=limit, offset=offset)

    return {"inquiries": inquiries}


# =========================================================
# UPDATE STATUS
# =========================================================
@router.put("/{inquiry_id}/status", response_model=InquiryResponse)
def update_inquiry_status(
    inquiry_id: int,
    status_data: InquiryStatusUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return inquiry_service.update_status(db, inquiry_id, status_data.status)


# =========================================================
# DELETE INQUIRY
# =========================================================
@router.delete("/{inquiry_id}")
def delete_inquiry(
    inquiry_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    inquiry_service.delete_inquiry(db, inquiry_id)

    return {"message": "Inquiry deleted successfully"}
