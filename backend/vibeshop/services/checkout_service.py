import logging
import time
from typing import Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from vibeshop.exceptions import InsufficientStockError, NotFoundError, ValidationError
from vibeshop.models.order import Order, OrderLine
from vibeshop.repositories.cart_repo import CartRepository
from vibeshop.repositories.order_repo import OrderRepository
from vibeshop.repositories.product_repo import ProductRepository
from vibeshop.schemas.order_schema import receipt_from_order
from vibeshop.utils.transactions import smart_transaction

log = logging.getLogger("checkout")

ORDER_STATUS_CONFIRMED = "confirmed"


def gen_order_id() -> str:
    return f"ORD-{int(time.time() * 1000)}-{uuid4().hex[:9].upper()}"


class CheckoutService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.orders = OrderRepository(db)
        self.carts = CartRepository(db)

    def _validate(self, customer: Optional[Dict], items: Optional[List[Dict]]) -> List[tuple]:
        customer = customer or {}
        if not customer.get("name") or not customer.get("email"):
            raise ValidationError("Customer name and email are required")
        if not items:
            raise ValidationError("Cart is empty")

        requested = []
        for it in items:
            ref = it.get("id")
            if ref is None:
                ref = it.get("productId")
            if ref is None or ref == "":
                raise ValidationError("Each cart item needs a product id")
            qty = it.get("quantity")
            if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
                raise ValidationError(f"Invalid quantity for product {ref}")
            requested.append((ref, qty))
        return requested

    def place_order(
        self,
        customer: Optional[Dict],
        items: Optional[List[Dict]],
        user_id: str,
    ) -> Dict:
        """
        customer: {name, email}
        items: list of {id|productId, quantity}
        Returns the receipt for the new order.

        Stock decrements, the order insert and the cart clear share one
        transaction: any failure rolls all of them back.
        """
        requested = self._validate(customer, items)

        with smart_transaction(self.db):
            total_cents = 0
            lines = []
            for ref, qty in requested:
                product = self.products.get(ref)
                if not product:
                    raise NotFoundError(f"Product {ref} not found")
                if product.stock < qty or not self.products.decrement_stock(product, qty):
                    log.info(
                        "checkout rejected: %s has %s in stock, %s requested",
                        product.name, product.stock, qty,
                    )
                    raise InsufficientStockError(f"Insufficient stock for {product.name}")

                lines.append(
                    OrderLine(
                        product_id=product.id,
                        name=product.name,
                        price_cents=product.price_cents,
                        quantity=qty,
                    )
                )
                total_cents += product.price_cents * qty

            order = self.orders.add(
                Order(
                    order_id=gen_order_id(),
                    user_id=user_id,
                    customer_name=customer["name"],
                    customer_email=customer["email"],
                    status=ORDER_STATUS_CONFIRMED,
                    total_cents=total_cents,
                ),
                lines,
            )

            cart = self.carts.get_by_user(user_id)
            if cart:
                self.carts.clear(cart)

        log.info(
            "order %s placed for %s: %d line(s), total_cents=%d",
            order.order_id, user_id, len(lines), total_cents,
        )
        return receipt_from_order(order)

    def list_orders(self) -> List[Order]:
        return self.orders.list_newest_first()

    def get_order(self, order_id: str) -> Order:
        order = self.orders.get_by_order_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order
