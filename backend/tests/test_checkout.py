import re

from vibeshop.db import SessionLocal
from vibeshop.models.order import Order
from vibeshop.models.product import Product

CUSTOMER = {"name": "Ada Lovelace", "email": "ada@example.com"}


def _order_count():
    db = SessionLocal()
    try:
        return db.query(Order).count()
    finally:
        db.close()


def test_checkout_success(client, make_product, stock_of):
    pid = make_product(name="Product A", price=10.00, stock=5)
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 2}]},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Order placed successfully"
    receipt = body["receipt"]
    assert receipt["total"] == 20.00
    assert receipt["status"] == "confirmed"
    assert receipt["customer"] == CUSTOMER
    assert receipt["items"] == [{"productId": pid, "name": "Product A", "price": 10.0, "quantity": 2}]
    assert receipt["timestamp"]
    assert re.match(r"^ORD-\d{13}-[0-9A-Z]{9}$", receipt["orderId"])
    assert stock_of(pid) == 3

    stored = client.get(f"/api/checkout/orders/{receipt['orderId']}").json()
    assert stored["status"] == "confirmed"
    assert stored["total"] == 20.00


def test_checkout_total_is_sum_of_lines(client, make_product, stock_of):
    a = make_product(name="A", price=19.99, stock=10)
    b = make_product(name="B", price=0.10, stock=10)
    c = make_product(name="C", price=0.20, stock=10)
    r = client.post(
        "/api/checkout",
        json={
            "customer": CUSTOMER,
            "cartItems": [
                {"productId": a, "quantity": 3},
                {"productId": b, "quantity": 1},
                {"productId": c, "quantity": 1},
            ],
        },
    )
    assert r.status_code == 201
    receipt = r.json()["receipt"]
    assert receipt["total"] == 60.27
    assert [l["name"] for l in receipt["items"]] == ["A", "B", "C"]
    assert (stock_of(a), stock_of(b), stock_of(c)) == (7, 9, 9)


def test_checkout_empty_cart(client):
    r = client.post("/api/checkout", json={"customer": CUSTOMER, "cartItems": []})
    assert r.status_code == 400
    assert r.json() == {"error": "Cart is empty"}
    r = client.post("/api/checkout", json={"customer": CUSTOMER})
    assert r.status_code == 400
    assert _order_count() == 0


def test_checkout_requires_customer(client, make_product):
    pid = make_product()
    for customer in (None, {"name": "Ada"}, {"name": "", "email": "ada@example.com"}):
        r = client.post(
            "/api/checkout",
            json={"customer": customer, "cartItems": [{"id": pid, "quantity": 1}]},
        )
        assert r.status_code == 400
        assert r.json()["error"] == "Customer name and email are required"


def test_checkout_rejects_non_positive_quantity(client, make_product, stock_of):
    pid = make_product(stock=5)
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": -2}]},
    )
    assert r.status_code == 400
    assert stock_of(pid) == 5


def test_checkout_rejects_quantity_too_large(client, make_product, stock_of):
    pid = make_product(stock=5)
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 10**19}]},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"
    assert stock_of(pid) == 5
    assert _order_count() == 0


def test_checkout_unknown_product(client):
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"productId": 4242, "quantity": 1}]},
    )
    assert r.status_code == 404
    assert r.json()["error"] == "Product 4242 not found"
    assert _order_count() == 0


def test_checkout_insufficient_stock(client, make_product, stock_of):
    pid = make_product(name="Smart Watch Pro", stock=5)
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 10}]},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Insufficient stock for Smart Watch Pro"}
    assert stock_of(pid) == 5
    assert _order_count() == 0


def test_failed_checkout_keeps_earlier_stock(client, make_product, stock_of):
    a = make_product(name="A", stock=5)
    b = make_product(name="B", stock=1)
    r = client.post(
        "/api/checkout",
        json={
            "customer": CUSTOMER,
            "cartItems": [{"id": a, "quantity": 2}, {"id": b, "quantity": 3}],
        },
    )
    assert r.status_code == 400
    assert stock_of(a) == 5
    assert stock_of(b) == 1


def test_checkout_clears_the_users_cart(client, make_product):
    pid = make_product(stock=10)
    client.post("/api/cart", json={"productId": pid, "quantity": 2, "userId": "alice"})
    client.post("/api/cart", json={"productId": pid, "quantity": 1, "userId": "bob"})

    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"productId": pid, "quantity": 2}], "userId": "alice"},
    )
    assert r.status_code == 201

    alice = client.get("/api/cart", params={"userId": "alice"}).json()
    assert alice["items"] == []
    assert alice["total"] == 0
    assert len(client.get("/api/cart", params={"userId": "bob"}).json()["items"]) == 1


def test_checkout_without_cart_is_fine(client, make_product):
    pid = make_product()
    r = client.post(
        "/api/checkout",
        json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 1}], "userId": "no-cart"},
    )
    assert r.status_code == 201


def test_order_lines_are_snapshots(client, make_product):
    pid = make_product(name="Old name", price=10.0)
    order_id = client.post(
        "/api/checkout", json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 1}]}
    ).json()["receipt"]["orderId"]

    db = SessionLocal()
    try:
        p = db.get(Product, pid)
        p.name = "New name"
        p.price_cents = 99900
        db.commit()
    finally:
        db.close()

    order = client.get(f"/api/checkout/orders/{order_id}").json()
    assert order["items"][0]["name"] == "Old name"
    assert order["items"][0]["price"] == 10.0
    assert order["total"] == 10.0


def test_list_orders_newest_first(client, make_product):
    pid = make_product(stock=10)
    ids = []
    for _ in range(3):
        r = client.post(
            "/api/checkout", json={"customer": CUSTOMER, "cartItems": [{"id": pid, "quantity": 1}]}
        )
        ids.append(r.json()["receipt"]["orderId"])

    res = client.get("/api/checkout/orders")
    assert res.status_code == 200
    assert [o["orderId"] for o in res.json()] == list(reversed(ids))


def test_get_order_not_found(client):
    res = client.get("/api/checkout/orders/ORD-0-NOPE")
    assert res.status_code == 404
    assert res.json() == {"error": "Order not found"}
