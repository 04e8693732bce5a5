from decimal import Decimal

from storefront.models import Inquiry, Sale


def test_submit_inquiry_is_public_and_pending(client, make_product):
    product = make_product()

    response = client.post(
        "/api/inquiries",
        json={
            "customer_name": "  Jane Buyer ",
            "customer_email": "jane@buyers.com",
            "customer_phone": "",
            "message": "Do you ship to Cebu?",
            "product_id": product.id,
        },
    )

    assert response.status_code == 201
    inquiry = response.json()["inquiry"]
    assert inquiry["status"] == "pending"
    assert inquiry["customer_name"] == "Jane Buyer"
    assert inquiry["customer_phone"] is None
    assert inquiry["product_id"] == product.id
    assert inquiry["is_converted"] is False


def test_submit_inquiry_without_product(client):
    response = client.post(
        "/api/inquiries",
        json={
            "customer_name": "Walk In",
            "customer_email": "walkin@buyers.com",
            "message": "Do you buy used laptops?",
        },
    )

    assert response.status_code == 201
    assert response.json()["inquiry"]["product_id"] is None


def test_submit_inquiry_reports_each_invalid_field(client):
    response = client.post(
        "/api/inquiries",
        json={"customer_name": "   ", "customer_email": "not-an-email", "message": ""},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    fields = {detail["field"] for detail in body["details"]}
    assert {"customer_name", "customer_email", "message"} <= fields


def test_submit_inquiry_for_unknown_product(client, db_session):
    response = client.post(
        "/api/inquiries",
        json={
            "customer_name": "Jane",
            "customer_email": "jane@buyers.com",
            "message": "Hello",
            "product_id": 999,
        },
    )

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "product_id", "message": "Product not found"}]
    assert db_session.query(Inquiry).count() == 0


def test_list_inquiries_requires_admin(client):
    response = client.get("/api/inquiries")

    assert response.status_code == 401
    assert "error" in response.json()


def test_list_inquiries_newest_first_with_filter(client, admin_headers, make_product, make_inquiry):
    product = make_product()
    first = make_inquiry(product)
    second = make_inquiry(product, status="contacted")
    third = make_inquiry(None)

    response = client.get("/api/inquiries", headers=admin_headers)

    assert response.status_code == 200
    inquiries = response.json()["inquiries"]
    assert [i["id"] for i in inquiries] == [third.id, second.id, first.id]
    assert inquiries[1]["product"] == {
        "id": product.id,
        "name": product.name,
        "category": "iPhones",
        "price": 999.0,
    }
    assert inquiries[0]["product"] is None

    response = client.get("/api/inquiries?status=contacted", headers=admin_headers)
    assert [i["id"] for i in response.json()["inquiries"]] == [second.id]


def test_list_inquiries_paginates(client, admin_headers, make_inquiry):
    created = [make_inquiry() for _ in range(4)]

    response = client.get("/api/inquiries?limit=2&offset=1", headers=admin_headers)

    assert [i["id"] for i in response.json()["inquiries"]] == [created[2].id, created[1].id]


def test_update_status_any_transition(client, admin_headers, make_inquiry):
    inquiry = make_inquiry()

    for status in ("contacted", "pending", "cancelled", "responded"):
        response = client.put(
            f"/api/inquiries/{inquiry.id}/status",
            json={"status": status},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == status


def test_update_status_is_idempotent(client, admin_headers, make_inquiry):
    inquiry = make_inquiry()

    first = client.put(
        f"/api/inquiries/{inquiry.id}/status",
        json={"status": "responded"},
        headers=admin_headers,
    ).json()
    second = client.put(
        f"/api/inquiries/{inquiry.id}/status",
        json={"status": "responded"},
        headers=admin_headers,
    ).json()

    assert first == second


def test_update_status_rejects_unknown_status(client, admin_headers, make_inquiry):
    inquiry = make_inquiry()

    response = client.put(
        f"/api/inquiries/{inquiry.id}/status",
        json={"status": "sold"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"


def test_update_status_unknown_inquiry(client, admin_headers):
    response = client.put(
        "/api/inquiries/404/status",
        json={"status": "responded"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Inquiry not found"}


def test_delete_inquiry(client, admin_headers, db_session, make_inquiry):
    inquiry = make_inquiry()

    response = client.delete(f"/api/inquiries/{inquiry.id}", headers=admin_headers)

    assert response.status_code == 200
    assert db_session.query(Inquiry).count() == 0


def test_converted_inquiry_is_locked(client, admin_headers, db_session, make_product, make_inquiry):
    product = make_product()
    inquiry = make_inquiry(product)
    db_session.add(Sale(
        inquiry_id=inquiry.id,
        product_id=product.id,
        customer_name=inquiry.customer_name,
        customer_email=inquiry.customer_email,
        sale_amount=Decimal("900.00"),
    ))
    db_session.commit()

    status_response = client.put(
        f"/api/inquiries/{inquiry.id}/status",
        json={"status": "cancelled"},
        headers=admin_headers,
    )
    delete_response = client.delete(f"/api/inquiries/{inquiry.id}", headers=admin_headers)

    assert status_response.status_code == 400
    assert delete_response.status_code == 400
    assert delete_response.json() == {"error": "Cannot delete inquiry that has been converted to a sale"}
    assert db_session.query(Inquiry).count() == 1
