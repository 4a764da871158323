import pytest

from vibeshop.db import SessionLocal
from vibeshop.exceptions import ValidationError
from vibeshop.models.product import PLACEHOLDER_IMAGE
from vibeshop.services.catalog_service import SAMPLE_PRODUCTS, CatalogService, normalize_product_fields


def test_list_products_empty_store_is_not_seeded_on_read(client):
    res = client.get("/api/products")
    assert res.status_code == 200
    assert res.json() == []


def test_list_products(client, make_product):
    make_product(name="Tea 100g", price=3.0)
    make_product(name="Coffee 200g", price=6.0)
    res = client.get("/api/products")
    assert res.status_code == 200
    names = [p["name"] for p in res.json()]
    assert names == ["Tea 100g", "Coffee 200g"]


def test_create_product_applies_defaults(client):
    res = client.post("/api/products", json={"name": "  Yoga Mat ", "price": 34.99})
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Yoga Mat"
    assert body["price"] == 34.99
    assert body["description"] == ""
    assert body["image"] == PLACEHOLDER_IMAGE
    assert body["category"] == "general"
    assert body["stock"] == 100
    assert body["createdAt"]


def test_create_product_requires_name_and_price(client):
    res = client.post("/api/products", json={"name": "No price"})
    assert res.status_code == 400
    assert res.json() == {"error": "Name and price are required"}

    res = client.post("/api/products", json={"price": 5})
    assert res.status_code == 400


def test_create_product_rejects_negative_values(client):
    res = client.post("/api/products", json={"name": "Bad", "price": -1})
    assert res.status_code == 400
    assert res.json()["error"] == "Price cannot be negative"

    res = client.post("/api/products", json={"name": "Bad", "price": 1, "stock": -3})
    assert res.status_code == 400
    assert res.json()["error"] == "Stock cannot be negative"


def test_create_product_malformed_body(client):
    res = client.post("/api/products", json={"name": "Bad", "price": 1, "stock": "lots"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request"


def test_create_product_rejects_values_too_large_for_storage(client):
    res = client.post("/api/products", json={"name": "Gold Bar", "price": 1e20})
    assert res.status_code == 400
    assert res.json() == {"error": "Price is too large"}

    res = client.post("/api/products", json={"name": "Gold Bar", "price": 1, "stock": 10**19})
    assert res.status_code == 400
    assert res.json() == {"error": "Stock is too large"}
    assert client.get("/api/products").json() == []


def test_seed_entries_with_string_stock_are_coerced():
    db = SessionLocal()
    try:
        p = CatalogService(db).create_product({"name": "Tea", "price": 1, "stock": "5"})
        assert p.stock == 5
    finally:
        db.close()

    with pytest.raises(ValidationError) as exc:
        normalize_product_fields({"name": "Tea", "price": 1, "stock": "lots"})
    assert exc.value.error == "Stock must be an integer"


def test_get_product(client, make_product):
    pid = make_product(name="Sunglasses", price=149.99, stock=60)
    res = client.get(f"/api/products/{pid}")
    assert res.status_code == 200
    assert res.json()["name"] == "Sunglasses"
    assert res.json()["stock"] == 60


def test_get_product_not_found(client):
    assert client.get("/api/products/999").status_code == 404
    res = client.get("/api/products/not-an-id")
    assert res.status_code == 404
    assert res.json() == {"error": "Product not found"}


def test_seed_sample_products_only_into_empty_store(client):
    db = SessionLocal()
    try:
        svc = CatalogService(db)
        assert svc.seed_sample_products() == len(SAMPLE_PRODUCTS)
        assert svc.seed_sample_products() == 0
    finally:
        db.close()

    products = client.get("/api/products").json()
    assert len(products) == 8
    headphones = products[0]
    assert headphones["name"] == "Wireless Bluetooth Headphones"
    assert headphones["price"] == 79.99
    assert headphones["stock"] == 50
