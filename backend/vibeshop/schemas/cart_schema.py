from typing import Optional, Union

from pydantic import BaseModel, Field

from vibeshop.models.cart import Cart
from vibeshop.schemas.product_schema import product_to_dict
from vibeshop.utils.money import MAX_INT, from_cents


class AddItemIn(BaseModel):
    productId: Optional[Union[int, str]] = None
    quantity: Optional[int] = Field(None, le=MAX_INT)
    userId: Optional[str] = None


class UpdateItemIn(BaseModel):
    quantity: Optional[int] = Field(None, le=MAX_INT)
    userId: Optional[str] = None


def cart_to_dict(cart: Cart) -> dict:
    return {
        "id": cart.id,
        "userId": cart.user_id,
        "items": [
            {
                "id": it.id,
                "productId": it.product_id,
                "product": product_to_dict(it.product) if it.product else None,
                "quantity": it.quantity,
                "price": from_cents(it.price_cents),
            }
            for it in cart.items
        ],
        "total": from_cents(cart.total_cents),
        "createdAt": cart.created_at.isoformat() if cart.created_at else None,
        "updatedAt": cart.updated_at.isoformat() if cart.updated_at else None,
    }
