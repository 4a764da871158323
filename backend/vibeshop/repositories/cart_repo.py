from sqlalchemy.orm import Session
from typing import Optional
from vibeshop.models.cart import Cart
from vibeshop.models.cart_item import CartItem
from vibeshop.models.product import Product

class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def create(self, user_id: str) -> Cart:
        c = Cart(user_id=user_id, total_cents=0)
        self.db.add(c)
        self.db.flush()
        return c

    def get_or_create(self, user_id: str) -> Cart:
        return self.get_by_user(user_id) or self.create(user_id)

    def find_item(self, cart: Cart, item_id: int) -> Optional[CartItem]:
        return next((it for it in cart.items if it.id == item_id), None)

    def add_or_merge_item(self, cart: Cart, product: Product, qty: int) -> CartItem:
        item = next((it for it in cart.items if it.product_id == product.id), None)
        if item:
            # keep the original price snapshot
            item.quantity += qty
        else:
            item = CartItem(product_id=product.id, quantity=qty, price_cents=product.price_cents)
            cart.items.append(item)
        self._recalculate(cart)
        return item

    def set_quantity(self, cart: Cart, item: CartItem, qty: int):
        if qty == 0:
            cart.items.remove(item)
        else:
            item.quantity = qty
        self._recalculate(cart)

    def remove_item(self, cart: Cart, item_id: int):
        it = self.find_item(cart, item_id)
        if it:
            cart.items.remove(it)
        self._recalculate(cart)

    def clear(self, cart: Cart):
        cart.items = []
        cart.total_cents = 0
        self.db.flush()

    def _recalculate(self, cart: Cart):
        cart.total_cents = sum(it.quantity * it.price_cents for it in cart.items)
        self.db.flush()
