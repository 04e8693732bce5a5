# =========================================================
# DASHBOARD AGGREGATION
#
# Snapshot computed on every call, read-only.
# Ranking and revenue are pure reducers over plain records
# so they can be exercised without a database.
# Empty tables give zeros and empty lists, never an error.
# =========================================================

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from storefront.models.inquiries import Inquiry, INQUIRY_STATUS_PENDING
from storefront.models.products import Product
from storefront.models.sales import Sale, SALE_STATUS_COMPLETED

TOP_PRODUCTS_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 5
LOW_STOCK_THRESHOLD = 5


class InquiryRecord(NamedTuple):
    product_id: Optional[int]


class SaleRecord(NamedTuple):
    product_id: Optional[int]
    quantity: Optional[int] = None
    sale_amount: Any = None


# =========================================================
# PURE REDUCERS
# =========================================================
def parse_amount(value) -> Decimal:
    if value is None:
        return Decimal("0")

    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")

    return amount if amount.is_finite() else Decimal("0")


def total_revenue(sales: Iterable[SaleRecord]) -> Decimal:
    return sum((parse_amount(sale.sale_amount) for sale in sales), Decimal("0"))


def _top(totals: dict, limit: int) -> list[tuple[int, int]]:
    # sorted() is stable, so ties keep first-seen order
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]


def rank_inquired_products(
    inquiries: Iterable[InquiryRecord],
    limit: int = TOP_PRODUCTS_LIMIT,
) -> list[tuple[int, int]]:
    """(product_id, inquiry_count) pairs, most inquired first."""
    counts: dict[int, int] = {}

    for inquiry in inquiries:
        if inquiry.product_id is None:
            continue
        counts[inquiry.product_id] = counts.get(inquiry.product_id, 0) + 1

    return _top(counts, limit)


def rank_selling_products(
    sales: Iterable[SaleRecord],
    limit: int = TOP_PRODUCTS_LIMIT,
) -> list[tuple[int, int]]:
    """(product_id, total_sold) pairs, a missing quantity counting as 1."""
    totals: dict[int, int] = {}

    for sale in sales:
        if sale.product_id is None:
            continue
        totals[sale.product_id] = totals.get(sale.product_id, 0) + (sale.quantity or 1)

    return _top(totals, limit)


# =========================================================
# SNAPSHOT
# =========================================================
def _count(db: Session, column, *criteria) -> int:
    return db.query(func.count(column)).filter(*criteria).scalar() or 0


def _product_summary(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "price": float(product.price),
        "primary_image": product.primary_image,
    }


def _load_products(db: Session, product_ids: list[int]) -> dict[int, Product]:
    if not product_ids:
        return {}

    products = (
        db.query(Product)
        .options(selectinload(Product.images))
        .filter(Product.id.in_(product_ids))
        .all()
    )
    return {product.id: product for product in products}


def get_stats(db: Session) -> dict:
    completed_sales = [
        SaleRecord(row.product_id, row.quantity, row.sale_amount)
        for row in (
            db.query(Sale.product_id, Sale.quantity, Sale.sale_amount)
            .filter(Sale.status == SALE_STATUS_COMPLETED)
            .order_by(Sale.id)
            .all()
        )
    ]

    inquiries = [
        InquiryRecord(row.product_id)
        for row in (
            db.query(Inquiry.product_id)
            .filter(Inquiry.product_id.isnot(None))
            .order_by(Inquiry.id)
            .all()
        )
    ]

    top_inquired = rank_inquired_products(inquiries)
    top_selling = rank_selling_products(completed_sales)

    products = _load_products(
        db,
        list({product_id for product_id, _ in top_inquired + top_selling}),
    )

    # Products removed after the fact drop out of the rankings
    top_inquired_products = [
        {**_product_summary(products[product_id]), "inquiry_count": count}
        for product_id, count in top_inquired
        if product_id in products
    ]
    top_selling_products = [
        {**_product_summary(products[product_id]), "total_sold": total}
        for product_id, total in top_selling
        if product_id in products
    ]

    recent_inquiries = [
        {
            "id": inquiry.id,
            "customer_name": inquiry.customer_name,
            "created_at": inquiry.created_at,
            "status": inquiry.status,
            "product_name": inquiry.product.name if inquiry.product else None,
        }
        for inquiry in (
            db.query(Inquiry)
            .options(joinedload(Inquiry.product))
            .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
            .limit(RECENT_ACTIVITY_LIMIT)
            .all()
        )
    ]

    recent_sales = [
        {
            "id": sale.id,
            "customer_name": sale.customer_name,
            "sale_amount": float(parse_amount(sale.sale_amount)),
            "sold_at": sale.sold_at,
            "product_name": sale.product.name if sale.product else None,
        }
        for sale in (
            db.query(Sale)
            .options(joinedload(Sale.product))
            .order_by(Sale.sold_at.desc(), Sale.id.desc())
            .limit(RECENT_ACTIVITY_LIMIT)
            .all()
        )
    ]

    low_stock_products = [
        {
            "id": product.id,
            "name": product.name,
            "stock_count": product.stock_count,
            "category": product.category,
        }
        for product in (
            db.query(Product)
            .filter(
                Product.stock_count < LOW_STOCK_THRESHOLD,
                Product.availability.is_(True),
            )
            .order_by(Product.stock_count.asc(), Product.id.asc())
            .limit(TOP_PRODUCTS_LIMIT)
            .all()
        )
    ]

    return {
        "stats": {
            "totalProducts": _count(db, Product.id),
            "availableProducts": _count(db, Product.id, Product.availability.is_(True)),
            "featuredProducts": _count(db, Product.id, Product.featured.is_(True)),
            "totalInquiries": _count(db, Inquiry.id),
            "pendingInquiries": _count(db, Inquiry.id, Inquiry.status == INQUIRY_STATUS_PENDING),
            "totalSales": len(completed_sales),
            "totalRevenue": float(total_revenue(completed_sales)),
        },
        "topInquiredProducts": top_inquired_products,
        "topSellingProducts": top_selling_products,
        "recentInquiries": recent_inquiries,
        "recentSales": recent_sales,
        "lowStockProducts": low_stock_products,
    }
