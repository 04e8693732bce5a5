# =========================================================
# SALES ROUTER (ADMIN ONLY)
#
# - Record a sale, optionally converting an inquiry
#   (one sale per inquiry, stock decremented, inquiry frozen)
# - List sales, newest first
# - Edit or remove a sale (stock is never restored)
# =========================================================

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.schemas.sale import (
    SaleCreate,
    SaleCreatedResponse,
    SaleListResponse,
    SaleResponse,
    SaleUpdate,
)
from storefront.services import sales as sale_service

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# RECORD SALE
# =========================================================
@router.post("", response_model=SaleCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    sale = sale_service.record_sale(db, sale_data)

    return {"sale": sale, "message": "Sale created successfully"}


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=SaleListResponse)
def list_sales(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return {"sales": sale_service.list_sales(db, limit=limit, offset=offset)}


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return sale_service.get_sale(db, sale_id)


# =========================================================
# UPDATE / DELETE
# =========================================================
@router.put("/{sale_id}", response_model=SaleCreatedResponse)
def update_sale(
    sale_id: int,
    sale_data: SaleUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    sale = sale_service.update_sale(db, sale_id, sale_data)

    return {"sale": sale, "message": "Sale updated successfully"}


@router.delete("/{sale_id}")
def delete_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    sale_service.delete_sale(db, sale_id)

    return {"message": "Sale deleted successfully"}
