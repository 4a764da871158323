from typing import Iterable, List, Optional, Union

from vibeshop.models.product import Product
from sqlalchemy import func
from sqlalchemy.orm import Session

ProductRef = Union[int, str, None]


def parse_product_id(ref: ProductRef) -> Optional[int]:
    """Product ids are integers; anything that isn't one can never match a row."""
    if ref is None or isinstance(ref, bool):
        return None
    try:
        return int(str(ref).strip())
    except ValueError:
        return None


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, ref: ProductRef) -> Optional[Product]:
        pid = parse_product_id(ref)
        if pid is None:
            return None
        return self.db.get(Product, pid)

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def create(self, **fields) -> Product:
        # drop explicit Nones so the column defaults apply
        p = Product(**{k: v for k, v in fields.items() if v is not None})
        self.db.add(p)
        self.db.flush()
        return p

    def bulk_create(self, entries: Iterable[dict]) -> List[Product]:
        return [self.create(**entry) for entry in entries]

    def decrement_stock(self, product: Product, qty: int) -> bool:
        """
        Guarded decrement: UPDATE ... SET stock = stock - qty WHERE stock >= qty.
        Returns False (and changes nothing) when the row no longer has enough
        stock, including when a concurrent checkout got there first.
        """
        updated = (
            self.db.query(Product)
            .filter(Product.id == product.id, Product.stock >= qty)
            .update({Product.stock: Product.stock - qty}, synchronize_session=False)
        )
        self.db.expire(product, ["stock", "updated_at"])
        return updated == 1
