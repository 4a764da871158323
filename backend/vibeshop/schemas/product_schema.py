from typing import Optional, Union
from pydantic import BaseModel

from vibeshop.models.product import Product
from vibeshop.utils.money import from_cents


class ProductIn(BaseModel):
    # everything optional so missing fields produce the API's own 400 message
    name: Optional[str] = None
    price: Optional[Union[float, str]] = None
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = None


def product_to_dict(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "price": from_cents(p.price_cents),
        "description": p.description,
        "image": p.image,
        "category": p.category,
        "stock": p.stock,
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }
