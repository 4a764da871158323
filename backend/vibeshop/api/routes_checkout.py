from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vibeshop.api.deps import current_user_id
from vibeshop.db import get_db
from vibeshop.exceptions import storage_errors
from vibeshop.schemas.order_schema import CheckoutIn, order_to_dict
from vibeshop.services.checkout_service import CheckoutService

router = APIRouter(tags=["checkout"])

@router.post("", summary="Place order (checkout)", status_code=status.HTTP_201_CREATED)
def checkout(payload: CheckoutIn, user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    customer = payload.customer.model_dump() if payload.customer else None
    items = [it.model_dump() for it in payload.cartItems] if payload.cartItems else None
    with storage_errors("Failed to process checkout"):
        receipt = CheckoutService(db).place_order(customer, items, payload.userId or user_id)
    return {"success": True, "message": "Order placed successfully", "receipt": receipt}

@router.get("/orders", summary="List orders, newest first")
def list_orders(db: Session = Depends(get_db)):
    with storage_errors("Failed to fetch orders"):
        return [order_to_dict(o) for o in CheckoutService(db).list_orders()]

@router.get("/orders/{order_id}", summary="Get order by order id")
def get_order(order_id: str, db: Session = Depends(get_db)):
    with storage_errors("Failed to fetch order"):
        return order_to_dict(CheckoutService(db).get_order(order_id))
