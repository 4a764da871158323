import logging

from sqlalchemy.orm import Session

from vibeshop.exceptions import InsufficientStockError, NotFoundError, ValidationError
from vibeshop.models.cart import Cart
from vibeshop.repositories.cart_repo import CartRepository
from vibeshop.repositories.product_repo import ProductRepository
from vibeshop.utils.transactions import smart_transaction

log = logging.getLogger("cart")


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)

    def _existing_cart(self, user_id: str) -> Cart:
        cart = self.cart_repo.get_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    def get_cart(self, user_id: str) -> Cart:
        with smart_transaction(self.db):
            return self.cart_repo.get_or_create(user_id)

    def add_item(self, user_id: str, product_id, qty) -> Cart:
        if product_id in (None, "") or not qty:
            raise ValidationError("ProductId and quantity are required")
        if qty < 0:
            raise ValidationError("Quantity must be positive")
        with smart_transaction(self.db):
            product = self.product_repo.get(product_id)
            if not product:
                raise NotFoundError("Product not found")
            # availability check only; stock is taken at checkout
            if product.stock < qty:
                raise InsufficientStockError("Insufficient stock")
            cart = self.cart_repo.get_or_create(user_id)
            self.cart_repo.add_or_merge_item(cart, product, qty)
        log.debug("cart %s: added %s x%s", user_id, product_id, qty)
        return cart

    def set_item_quantity(self, user_id: str, item_id: int, qty) -> Cart:
        if qty is None:
            raise ValidationError("Quantity is required")
        if qty < 0:
            raise ValidationError("Quantity cannot be negative")
        with smart_transaction(self.db):
            cart = self._existing_cart(user_id)
            item = self.cart_repo.find_item(cart, item_id)
            if not item:
                raise NotFoundError("Item not found in cart")
            self.cart_repo.set_quantity(cart, item, qty)
        return cart

    def remove_item(self, user_id: str, item_id: int) -> Cart:
        with smart_transaction(self.db):
            cart = self._existing_cart(user_id)
            self.cart_repo.remove_item(cart, item_id)
        return cart

    def clear_cart(self, user_id: str) -> Cart:
        with smart_transaction(self.db):
            cart = self._existing_cart(user_id)
            self.cart_repo.clear(cart)
        log.debug("cart %s cleared", user_id)
        return cart
