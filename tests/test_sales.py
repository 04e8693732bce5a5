from decimal import Decimal

import pytest

from storefront.core.errors import ConflictError, NotFoundError
from storefront.models import Inquiry, Product, Sale
from storefront.schemas.sale import SaleCreate
from storefront.services import sales as sales_service
from storefront.services.sales import record_sale


def sale_payload(product, inquiry=None, **overrides):
    payload = {
        "product_id": product.id,
        "customer_name": "Jane Buyer",
        "customer_email": "jane@buyers.com",
        "sale_amount": "850.00",
        "quantity": 1,
        "payment_method": "GCash",
    }
    if inquiry is not None:
        payload["inquiry_id"] = inquiry.id
    payload.update(overrides)
    return payload


def test_record_walk_in_sale(client, admin_headers, db_session, make_product):
    product = make_product(stock_count=4)

    response = client.post(
        "/api/sales",
        json=sale_payload(product, quantity=3),
        headers=admin_headers,
    )

    assert response.status_code == 201
    sale = response.json()["sale"]
    assert sale["status"] == "completed"
    assert sale["inquiry_id"] is None
    assert sale["sale_amount"] == 850.0
    assert db_session.get(Product, product.id).stock_count == 1


def test_quantity_defaults_to_one(client, admin_headers, db_session, make_product):
    product = make_product(stock_count=2)
    payload = sale_payload(product)
    del payload["quantity"]

    response = client.post("/api/sales", json=payload, headers=admin_headers)

    assert response.json()["sale"]["quantity"] == 1
    assert db_session.get(Product, product.id).stock_count == 1


def test_stock_floors_at_zero(client, admin_headers, db_session, make_product):
    product = make_product(stock_count=2)

    response = client.post(
        "/api/sales",
        json=sale_payload(product, quantity=5),
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert db_session.get(Product, product.id).stock_count == 0


def test_sale_converts_inquiry(client, admin_headers, db_session, make_product, make_inquiry):
    product = make_product()
    inquiry = make_inquiry(product, status="responded")

    response = client.post(
        "/api/sales",
        json=sale_payload(product, inquiry),
        headers=admin_headers,
    )

    assert response.status_code == 201
    stored = db_session.get(Inquiry, inquiry.id)
    assert stored.status == "completed"
    assert stored.is_converted


def test_second_sale_for_same_inquiry_conflicts(client, admin_headers, db_session, make_product, make_inquiry):
    product = make_product(stock_count=10)
    inquiry = make_inquiry(product)

    first = client.post("/api/sales", json=sale_payload(product, inquiry, quantity=2), headers=admin_headers)
    second = client.post("/api/sales", json=sale_payload(product, inquiry, quantity=2), headers=admin_headers)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {"error": "This inquiry has already been converted to a sale"}
    assert db_session.query(Sale).filter(Sale.inquiry_id == inquiry.id).count() == 1
    assert db_session.get(Product, product.id).stock_count == 8


def test_unique_constraint_backs_the_conflict_check(db_session, make_product, make_inquiry, monkeypatch):
    product = make_product(stock_count=10)
    inquiry = make_inquiry(product)

    db_session.add(Sale(
        inquiry_id=inquiry.id,
        product_id=product.id,
        customer_name="Jane Buyer",
        customer_email="jane@buyers.com",
        sale_amount=Decimal("100"),
    ))
    db_session.commit()

    # Simulate a concurrent request that passed the lookup before the first insert landed
    real_check = sales_service._inquiry_has_sale
    calls = []

    def stale_check(db, inquiry_id):
        calls.append(inquiry_id)
        return False if len(calls) == 1 else real_check(db, inquiry_id)

    monkeypatch.setattr(sales_service, "_inquiry_has_sale", stale_check)

    with pytest.raises(ConflictError):
        record_sale(db_session, SaleCreate(**sale_payload(product, inquiry, quantity=3)))

    assert db_session.query(Sale).count() == 1
    assert db_session.get(Product, product.id).stock_count == 10


def test_sale_for_unknown_inquiry(db_session, make_product):
    product = make_product()

    with pytest.raises(NotFoundError):
        record_sale(db_session, SaleCreate(**sale_payload(product, inquiry_id=123)))

    assert db_session.query(Sale).count() == 0


def test_sale_for_unknown_product(client, admin_headers, db_session):
    response = client.post(
        "/api/sales",
        json={
            "product_id": 77,
            "customer_name": "Jane",
            "customer_email": "jane@buyers.com",
            "sale_amount": 10,
        },
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert db_session.query(Sale).count() == 0


def test_sale_validation(client, admin_headers, make_product):
    product = make_product()

    response = client.post(
        "/api/sales",
        json=sale_payload(product, sale_amount=-1, quantity=0, customer_email="nope"),
        headers=admin_headers,
    )

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"sale_amount", "quantity", "customer_email"}


def test_list_sales_newest_first(client, admin_headers, make_product):
    phone = make_product(name="Pixel 8", category="Android")
    laptop = make_product(name="MacBook Air", category="Laptops")

    client.post("/api/sales", json=sale_payload(phone), headers=admin_headers)
    client.post("/api/sales", json=sale_payload(laptop), headers=admin_headers)

    sales = client.get("/api/sales", headers=admin_headers).json()["sales"]

    assert [s["product"]["name"] for s in sales] == ["MacBook Air", "Pixel 8"]


def test_update_sale_cannot_move_inquiry(client, admin_headers, make_product, make_inquiry):
    product = make_product()
    inquiry = make_inquiry(product)
    sale = client.post("/api/sales", json=sale_payload(product, inquiry), headers=admin_headers).json()["sale"]

    moved = client.put(
        f"/api/sales/{sale['id']}",
        json={"inquiry_id": make_inquiry(product).id},
        headers=admin_headers,
    )
    edited = client.put(
        f"/api/sales/{sale['id']}",
        json={"notes": "Paid in two installments"},
        headers=admin_headers,
    )

    assert moved.status_code == 400
    assert edited.status_code == 200
    assert edited.json()["sale"]["notes"] == "Paid in two installments"
    assert edited.json()["sale"]["inquiry_id"] == inquiry.id


def test_delete_sale_does_not_restock(client, admin_headers, db_session, make_product):
    product = make_product(stock_count=5)
    sale = client.post("/api/sales", json=sale_payload(product, quantity=2), headers=admin_headers).json()["sale"]

    response = client.delete(f"/api/sales/{sale['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert db_session.query(Sale).count() == 0
    assert db_session.get(Product, product.id).stock_count == 3


def test_sales_require_admin(client, make_product):
    product = make_product()

    assert client.post("/api/sales", json=sale_payload(product)).status_code == 401
    assert client.get("/api/sales").status_code == 401


def test_update_sale_ignores_null_for_required_fields(client, admin_headers, make_product):
    product = make_product()
    sale = client.post("/api/sales", json=sale_payload(product), headers=admin_headers).json()["sale"]

    response = client.put(
        f"/api/sales/{sale['id']}",
        json={"customer_name": None, "sale_amount": None, "quantity": None, "notes": None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()["sale"]
    assert updated["customer_name"] == "Jane Buyer"
    assert updated["sale_amount"] == 850.0
    assert updated["quantity"] == 1
    assert updated["notes"] is None


def test_update_sale_clears_nullable_field(client, admin_headers, make_product):
    product = make_product()
    sale = client.post("/api/sales", json=sale_payload(product), headers=admin_headers).json()["sale"]

    response = client.put(
        f"/api/sales/{sale['id']}",
        json={"payment_method": None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["sale"]["payment_method"] is None


def test_deleting_sale_unlocks_inquiry(client, admin_headers, db_session, make_product, make_inquiry):
    product = make_product()
    inquiry = make_inquiry(product)
    sale = client.post("/api/sales", json=sale_payload(product, inquiry), headers=admin_headers).json()["sale"]

    client.delete(f"/api/sales/{sale['id']}", headers=admin_headers)

    stored = db_session.get(Inquiry, inquiry.id)
    assert stored.status == "completed"
    assert not stored.is_converted

    response = client.put(
        f"/api/inquiries/{inquiry.id}/status",
        json={"status": "responded"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "responded"
    assert response.json()["is_converted"] is False
