# storefront/routers/products.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.auth import get_current_admin
from storefront.schemas.product import (
    ProductCategory,
    ProductCreate,
    ProductImageCreate,
    ProductImageResponse,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from storefront.services import products as product_service

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.get("", response_model=ProductListResponse)
def list_products(
    category: ProductCategory | None = None,
    availability: bool | None = None,
    search: str | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    products, total = product_service.list_products(
        db,
        category=category,
        availability=availability,
        search=search,
        limit=limit,
        offset=offset,
    )

    return {
        "products": products,
        "total": total,
        "limit": limit,
        "offset": offset,
    }


@router.get("/featured")
def featured_products(
    limit: int = Query(6, ge=1, le=50),
    db: Session = Depends(get_db),
):
    products, _ = product_service.list_products(
        db,
        availability=True,
        featured=True,
        limit=limit,
    )

    return {"products": [ProductResponse.model_validate(p) for p in products]}


@router.get("/category/{category}")
def products_by_category(
    category: ProductCategory,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    products, _ = product_service.list_products(
        db,
        category=category,
        availability=True,
        limit=limit,
        offset=offset,
    )

    return {"products": [ProductResponse.model_validate(p) for p in products]}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
):
    return product_service.get_product(db, product_id)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return product_service.create_product(db, product_data)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    return product_service.update_product(db, product_id, product_data)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    product_service.delete_product(db, product_id)

    return {"message": "Product deleted successfully"}


@router.post("/{product_id}/images")
def add_product_image(
    product_id: int,
    image_data: ProductImageCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_current_admin),
):
    image = product_service.add_product_image(db, product_id, image_data)

    return {
        "image": ProductImageResponse.model_validate(image),
        "message": "Image added successfully",
    }
