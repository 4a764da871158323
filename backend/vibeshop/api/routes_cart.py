from vibeshop.api.deps import current_user_id
from vibeshop.db import get_db
from vibeshop.exceptions import storage_errors
from vibeshop.schemas.cart_schema import AddItemIn, UpdateItemIn, cart_to_dict
from vibeshop.services.cart_service import CartService
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", summary="Get cart")
def get_cart(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    with storage_errors("Failed to fetch cart"):
        return cart_to_dict(CartService(db).get_cart(user_id))


@router.post("", summary="Add item to cart", status_code=status.HTTP_201_CREATED)
def add_item(
    payload: AddItemIn,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    with storage_errors("Failed to add item to cart"):
        cart = CartService(db).add_item(
            payload.userId or user_id, payload.productId, payload.quantity
        )
        return cart_to_dict(cart)


@router.put("/{item_id}", summary="Update cart item quantity")
def update_item(
    item_id: int,
    payload: UpdateItemIn,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    with storage_errors("Failed to update cart"):
        cart = CartService(db).set_item_quantity(
            payload.userId or user_id, item_id, payload.quantity
        )
        return cart_to_dict(cart)


@router.delete("/{item_id}", summary="Remove item")
def remove_item(item_id: int, user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    with storage_errors("Failed to remove item from cart"):
        return cart_to_dict(CartService(db).remove_item(user_id, item_id))


@router.delete("", summary="Clear cart")
def clear_cart(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    with storage_errors("Failed to clear cart"):
        cart = CartService(db).clear_cart(user_id)
        return {"message": "Cart cleared successfully", "cart": cart_to_dict(cart)}
