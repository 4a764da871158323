import logging
from typing import Dict, List, Optional

import requests

log = logging.getLogger("storefront")

DEFAULT_API = "http://localhost:5000/api"


class StorefrontError(Exception):
    """Non-2xx response from the shop API, carrying its {error, message} body."""

    def __init__(self, status_code: int, error: str, message: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {error}")
        self.status_code = status_code
        self.error = error
        self.message = message


def cart_total(items: List[Dict]) -> float:
    """Sum of price x quantity over cart lines (server carts or demo carts)."""
    total = 0.0
    for it in items:
        price = it.get("price")
        if price is None:
            price = (it.get("product") or {}).get("price", 0)
        total += price * it.get("quantity", 0)
    return round(total, 2)


def cart_count(items: List[Dict]) -> int:
    return sum(it.get("quantity", 0) for it in items)


class StorefrontClient:
    """
    Thin client for the Vibe Shop HTTP API.

    `session` can be any requests-compatible client (requests.Session,
    fastapi's TestClient), which is how the tests drive it in-process.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API,
        user_id: str = "guest",
        session=None,
        timeout: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs):
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {"error": r.text or f"HTTP {r.status_code}"}
            log.debug("%s %s -> %s %s", method, path, r.status_code, body)
            raise StorefrontError(r.status_code, body.get("error", "Request failed"), body.get("message"))
        return r.json()

    # Catalogue
    def list_products(self) -> List[Dict]:
        return self._request("GET", "/products")

    def get_product(self, product_id) -> Dict:
        return self._request("GET", f"/products/{product_id}")

    def create_product(self, name: str, price: float, **fields) -> Dict:
        return self._request("POST", "/products", json={"name": name, "price": price, **fields})

    # Cart
    def get_cart(self) -> Dict:
        return self._request("GET", "/cart", params={"userId": self.user_id})

    def add_to_cart(self, product_id, quantity: int = 1) -> Dict:
        return self._request(
            "POST",
            "/cart",
            json={"productId": product_id, "quantity": quantity, "userId": self.user_id},
        )

    def update_quantity(self, item_id: int, quantity: int) -> Dict:
        return self._request(
            "PUT", f"/cart/{item_id}", json={"quantity": quantity, "userId": self.user_id}
        )

    def change_quantity(self, item: Dict, delta: int) -> Dict:
        """Step a cart line up or down; stepping below 1 removes it."""
        new_quantity = item["quantity"] + delta
        if new_quantity < 1:
            return self.remove_from_cart(item["id"])
        return self.update_quantity(item["id"], new_quantity)

    def remove_from_cart(self, item_id: int) -> Dict:
        return self._request("DELETE", f"/cart/{item_id}", params={"userId": self.user_id})

    def clear_cart(self) -> Dict:
        return self._request("DELETE", "/cart", params={"userId": self.user_id})

    # Checkout
    def checkout(self, name: str, email: str, items: Optional[List[Dict]] = None) -> Dict:
        """Place an order for `items` (defaults to the server cart) and return the receipt."""
        if items is None:
            items = [
                {"productId": it["productId"], "quantity": it["quantity"]}
                for it in self.get_cart()["items"]
            ]
        body = self._request(
            "POST",
            "/checkout",
            json={
                "customer": {"name": name, "email": email},
                "cartItems": items,
                "userId": self.user_id,
            },
        )
        return body["receipt"]

    def list_orders(self) -> List[Dict]:
        return self._request("GET", "/checkout/orders")

    def get_order(self, order_id: str) -> Dict:
        return self._request("GET", f"/checkout/orders/{order_id}")
