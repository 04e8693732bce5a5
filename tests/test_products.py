from storefront.core.storage import PRODUCT_IMAGES_BUCKET, ObjectStorage, StorageError, get_storage
from storefront.main import app
from storefront.models import Product, ProductImage


def png(name="photo.png", content=b"\x89PNG fake image bytes"):
    return ("images", (name, content, "image/png"))


class FlakyStorage(ObjectStorage):
    def upload(self, bucket, key, content):
        if content == b"fail":
            raise StorageError("bucket unavailable")
        return super().upload(bucket, key, content)


# ---------------- CATALOG ----------------
def test_create_product(client, admin_headers):
    response = client.post(
        "/api/products",
        json={
            "name": "Galaxy S24 Ultra",
            "category": "Android",
            "price": "1199.99",
            "specifications": {"storage": "512GB", "color": "Titanium"},
            "stock_count": 4,
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    product = response.json()
    assert product["price"] == 1199.99
    assert product["availability"] is True
    assert product["featured"] is False
    assert product["specifications"]["storage"] == "512GB"
    assert product["images"] == []


def test_create_product_validation(client, admin_headers):
    response = client.post(
        "/api/products",
        json={"name": "", "category": "Tablets", "price": -5, "stock_count": -1},
        headers=admin_headers,
    )

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"name", "category", "price", "stock_count"}


def test_create_product_requires_admin(client):
    response = client.post("/api/products", json={"name": "x", "category": "Android", "price": 1})

    assert response.status_code == 401


def test_list_products_filters(client, make_product):
    make_product(name="iPhone 14", category="iPhones")
    make_product(name="iPhone 13 mini", category="iPhones", availability=False)
    make_product(name="MacBook Pro", category="Laptops")

    everything = client.get("/api/products").json()
    iphones = client.get("/api/products?category=iPhones").json()
    available = client.get("/api/products?availability=true").json()
    search = client.get("/api/products?search=MINI").json()

    assert everything["total"] == 3
    assert everything["limit"] == 50
    assert iphones["total"] == 2
    assert available["total"] == 2
    assert [p["name"] for p in search["products"]] == ["iPhone 13 mini"]


def test_featured_and_category_listings(client, make_product):
    make_product(name="Featured Phone", featured=True)
    make_product(name="Featured But Hidden", featured=True, availability=False)
    make_product(name="Plain Laptop", category="Laptops")

    featured = client.get("/api/products/featured").json()["products"]
    laptops = client.get("/api/products/category/Laptops").json()["products"]

    assert [p["name"] for p in featured] == ["Featured Phone"]
    assert [p["name"] for p in laptops] == ["Plain Laptop"]


def test_get_product_sorts_images(client, db_session, make_product):
    product = make_product()
    db_session.add_all([
        ProductImage(product_id=product.id, image_url="http://img/2.png", display_order=2),
        ProductImage(product_id=product.id, image_url="http://img/0.png", display_order=0),
    ])
    db_session.commit()

    images = client.get(f"/api/products/{product.id}").json()["images"]

    assert [image["display_order"] for image in images] == [0, 2]


def test_get_missing_product(client):
    response = client.get("/api/products/12345")

    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_update_and_delete_product(client, admin_headers, db_session, make_product):
    product = make_product(price=100)

    updated = client.put(
        f"/api/products/{product.id}",
        json={"price": 120, "featured": True},
        headers=admin_headers,
    ).json()
    assert updated["price"] == 120.0
    assert updated["featured"] is True
    assert updated["name"] == product.name

    response = client.delete(f"/api/products/{product.id}", headers=admin_headers)
    assert response.status_code == 200
    assert db_session.query(Product).count() == 0


def test_update_product_rejects_zero_price(client, admin_headers, make_product):
    product = make_product()

    response = client.put(f"/api/products/{product.id}", json={"price": 0}, headers=admin_headers)

    assert response.status_code == 400


# ---------------- IMAGES ----------------
def test_only_one_primary_image(client, admin_headers, db_session, make_product):
    product = make_product()

    for url in ("http://img/a.png", "http://img/b.png"):
        response = client.post(
            f"/api/products/{product.id}/images",
            json={"image_url": url, "is_primary": True},
            headers=admin_headers,
        )
        assert response.status_code == 200

    primaries = (
        db_session.query(ProductImage)
        .filter(ProductImage.product_id == product.id, ProductImage.is_primary.is_(True))
        .all()
    )
    assert [image.image_url for image in primaries] == ["http://img/b.png"]


def test_upload_images_assigns_order_and_primary(client, admin_headers, storage, make_product):
    product = make_product()

    first = client.post(
        f"/api/admin/products/{product.id}/images",
        files=[png("front.png"), png("back.png")],
        headers=admin_headers,
    )
    second = client.post(
        f"/api/admin/products/{product.id}/images",
        files=[png("side.png")],
        headers=admin_headers,
    )

    assert first.status_code == 201
    images = first.json()["images"] + second.json()["images"]
    assert [image["display_order"] for image in images] == [0, 1, 2]
    assert [image["is_primary"] for image in images] == [True, False, False]

    key = storage.key_from_url(PRODUCT_IMAGES_BUCKET, images[0]["image_url"])
    assert key.startswith(f"{product.id}/")
    assert key.endswith(".png")
    assert storage.exists(PRODUCT_IMAGES_BUCKET, key)


def test_upload_images_skips_failed_files(client, admin_headers, db_session, tmp_path, make_product):
    product = make_product()
    app.dependency_overrides[get_storage] = lambda: FlakyStorage(tmp_path / "flaky", "http://testserver")

    response = client.post(
        f"/api/admin/products/{product.id}/images",
        files=[png("a.png"), png("broken.png", b"fail"), png("c.png")],
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert [image["display_order"] for image in response.json()["images"]] == [0, 1]
    assert db_session.query(ProductImage).count() == 2


def test_upload_images_rejects_non_images(client, admin_headers, make_product):
    product = make_product()

    response = client.post(
        f"/api/admin/products/{product.id}/images",
        files=[("images", ("notes.txt", b"hello", "text/plain"))],
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["message"] == "Only image files are allowed"


def test_upload_images_errors(client, admin_headers, make_product):
    product = make_product()

    missing_product = client.post("/api/admin/products/999/images", files=[png()], headers=admin_headers)
    no_files = client.post(f"/api/admin/products/{product.id}/images", headers=admin_headers)

    assert missing_product.status_code == 404
    assert no_files.status_code == 400
    assert no_files.json() == {"error": "No files uploaded"}


def test_delete_image_removes_object(client, admin_headers, db_session, storage, make_product):
    product = make_product()
    image = client.post(
        f"/api/admin/products/{product.id}/images",
        files=[png()],
        headers=admin_headers,
    ).json()["images"][0]
    key = storage.key_from_url(PRODUCT_IMAGES_BUCKET, image["image_url"])

    response = client.delete(f"/api/admin/images/{image['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert not storage.exists(PRODUCT_IMAGES_BUCKET, key)
    assert db_session.query(ProductImage).count() == 0


def test_reorder_images(client, admin_headers, db_session, make_product):
    product = make_product()
    first = ProductImage(product_id=product.id, image_url="http://img/1.png", display_order=0)
    second = ProductImage(product_id=product.id, image_url="http://img/2.png", display_order=1)
    db_session.add_all([first, second])
    db_session.commit()

    response = client.put(
        "/api/admin/images/order",
        json={"images": [{"id": first.id, "display_order": 1}, {"id": second.id, "display_order": 0}]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    urls = [image["image_url"] for image in client.get(f"/api/products/{product.id}").json()["images"]]
    assert urls == ["http://img/2.png", "http://img/1.png"]


def test_reorder_unknown_image(client, admin_headers):
    response = client.put(
        "/api/admin/images/order",
        json={"images": [{"id": 42, "display_order": 0}]},
        headers=admin_headers,
    )

    assert response.status_code == 404
