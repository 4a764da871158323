import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Dict, List

import requests

from storefront.client import StorefrontError, cart_total

log = logging.getLogger("storefront")

FAKE_STORE_API = "https://fakestoreapi.com"
DEFAULT_CART_FILE = os.path.join(os.path.expanduser("~"), ".vibeshop_cart.json")


class DemoStorefront:
    """
    Offline-ish storefront: products come from the public Fake Store API and
    the cart lives in a local JSON file instead of the shop backend.
    Checkout never reaches a server; it produces a local receipt.
    """

    def __init__(self, cart_path: str = DEFAULT_CART_FILE, base_url: str = FAKE_STORE_API, session=None, timeout: int = 10):
        self.cart_path = cart_path
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_products(self, limit: int = 8) -> List[Dict]:
        r = self.session.get(f"{self.base_url}/products", params={"limit": limit}, timeout=self.timeout)
        if r.status_code >= 400:
            raise StorefrontError(r.status_code, "Failed to fetch products")
        return r.json()

    def load_cart(self) -> List[Dict]:
        if not os.path.exists(self.cart_path):
            return []
        with open(self.cart_path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError:
                log.warning("ignoring unreadable cart file %s", self.cart_path)
                return []

    def save_cart(self, items: List[Dict]) -> List[Dict]:
        with open(self.cart_path, "w", encoding="utf-8") as f:
            json.dump(items, f)
        return items

    def add_to_cart(self, product: Dict) -> List[Dict]:
        cart = self.load_cart()
        existing = next((it for it in cart if it["id"] == product["id"]), None)
        if existing:
            existing["quantity"] += 1
        else:
            cart.append({**product, "quantity": 1})
        return self.save_cart(cart)

    def update_quantity(self, product_id, quantity: int) -> List[Dict]:
        if quantity < 1:
            return self.remove_from_cart(product_id)
        cart = self.load_cart()
        for it in cart:
            if it["id"] == product_id:
                it["quantity"] = quantity
        return self.save_cart(cart)

    def remove_from_cart(self, product_id) -> List[Dict]:
        return self.save_cart([it for it in self.load_cart() if it["id"] != product_id])

    def clear_cart(self) -> List[Dict]:
        return self.save_cart([])

    def checkout(self, name: str, email: str) -> Dict:
        if not name or not email:
            raise StorefrontError(400, "Customer name and email are required")
        cart = self.load_cart()
        if not cart:
            raise StorefrontError(400, "Cart is empty")
        receipt = {
            "orderId": f"ORD-{int(time.time() * 1000)}",
            "customer": {"name": name, "email": email},
            "items": cart,
            "total": cart_total(cart),
            "status": "confirmed",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.clear_cart()
        return receipt
