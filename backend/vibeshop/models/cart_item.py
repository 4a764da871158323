from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from vibeshop.db import Base


class CartItem(Base):
    __tablename__ = "cart_items"
    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(
        Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True
    )
    quantity = Column(Integer, nullable=False, default=1)
    price_cents = Column(
        Integer, nullable=False, default=0
    )  # price at time of add, never re-synced

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")
