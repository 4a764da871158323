from typing import List, Optional, Union

from pydantic import BaseModel, Field

from vibeshop.models.order import Order
from vibeshop.utils.money import MAX_INT, from_cents


class CustomerIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class CheckoutItemIn(BaseModel):
    # the storefront sends either the product id as `id` or as `productId`
    id: Optional[Union[int, str]] = None
    productId: Optional[Union[int, str]] = None
    quantity: Optional[int] = Field(None, le=MAX_INT)


class CheckoutIn(BaseModel):
    customer: Optional[CustomerIn] = None
    cartItems: Optional[List[CheckoutItemIn]] = None
    userId: Optional[str] = None


def order_to_dict(order: Order) -> dict:
    return {
        "id": order.id,
        "orderId": order.order_id,
        "userId": order.user_id,
        "customer": {"name": order.customer_name, "email": order.customer_email},
        "items": [
            {
                "productId": l.product_id,
                "name": l.name,
                "price": from_cents(l.price_cents),
                "quantity": l.quantity,
            }
            for l in order.lines
        ],
        "total": from_cents(order.total_cents),
        "status": order.status,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
    }


def receipt_from_order(order: Order) -> dict:
    full = order_to_dict(order)
    return {
        "orderId": full["orderId"],
        "customer": full["customer"],
        "items": full["items"],
        "total": full["total"],
        "status": full["status"],
        "timestamp": full["createdAt"],
    }
