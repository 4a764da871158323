import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from vibeshop.exceptions import NotFoundError, ValidationError
from vibeshop.models.product import Product
from vibeshop.repositories.product_repo import ProductRepository
from vibeshop.utils.money import MAX_INT, to_cents
from vibeshop.utils.transactions import smart_transaction

log = logging.getLogger("catalogue")

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Bluetooth Headphones",
        "price": 79.99,
        "description": "High-quality wireless headphones with noise cancellation",
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
        "category": "electronics",
        "stock": 50,
    },
    {
        "name": "Smart Watch Pro",
        "price": 299.99,
        "description": "Advanced fitness tracking and notifications",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
        "category": "electronics",
        "stock": 30,
    },
    {
        "name": "Leather Backpack",
        "price": 89.99,
        "description": "Stylish and durable leather backpack",
        "image": "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400",
        "category": "accessories",
        "stock": 75,
    },
    {
        "name": "Running Shoes",
        "price": 129.99,
        "description": "Comfortable running shoes for all terrains",
        "image": "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=400",
        "category": "footwear",
        "stock": 100,
    },
    {
        "name": "Stainless Steel Water Bottle",
        "price": 24.99,
        "description": "Insulated water bottle keeps drinks cold for 24 hours",
        "image": "https://images.unsplash.com/photo-1602143407151-7111542de6e8?w=400",
        "category": "accessories",
        "stock": 200,
    },
    {
        "name": "Wireless Mouse",
        "price": 39.99,
        "description": "Ergonomic wireless mouse with USB receiver",
        "image": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=400",
        "category": "electronics",
        "stock": 150,
    },
    {
        "name": "Sunglasses",
        "price": 149.99,
        "description": "UV protection designer sunglasses",
        "image": "https://images.unsplash.com/photo-1572635196237-14b3f281503f?w=400",
        "category": "accessories",
        "stock": 60,
    },
    {
        "name": "Yoga Mat",
        "price": 34.99,
        "description": "Non-slip yoga mat with carrying strap",
        "image": "https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=400",
        "category": "fitness",
        "stock": 80,
    },
]


def normalize_product_fields(fields: Dict) -> Dict:
    """
    Validate API-shaped product fields ({name, price, ...}) and return
    column values for Product. Raises ValidationError.
    """
    name = fields.get("name")
    name = name.strip() if isinstance(name, str) else name
    price = fields.get("price")
    if not name or price is None or price == "":
        raise ValidationError("Name and price are required")
    try:
        price_cents = to_cents(price)
    except ValueError:
        raise ValidationError("Price must be a number")
    if price_cents < 0:
        raise ValidationError("Price cannot be negative")
    if price_cents > MAX_INT:
        raise ValidationError("Price is too large")
    stock = fields.get("stock")
    if stock is not None:
        try:
            stock = int(stock)
        except (TypeError, ValueError):
            raise ValidationError("Stock must be an integer")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        if stock > MAX_INT:
            raise ValidationError("Stock is too large")
    return {
        "name": name,
        "price_cents": price_cents,
        "description": fields.get("description"),
        "image": fields.get("image") or None,
        "category": fields.get("category") or None,
        "stock": stock,
    }


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def list_products(self) -> List[Product]:
        return self.repo.list()

    def get_product(self, product_id) -> Product:
        p = self.repo.get(product_id)
        if not p:
            raise NotFoundError("Product not found")
        return p

    def create_product(self, fields: Dict) -> Product:
        values = normalize_product_fields(fields)
        with smart_transaction(self.db):
            p = self.repo.create(**values)
        log.info("created product %s (%s)", p.id, values["name"])
        return p

    def seed_sample_products(self, entries: List[Dict] = None) -> int:
        """Insert the sample catalog if the store holds no products. Returns rows inserted."""
        with smart_transaction(self.db):
            if self.repo.count():
                return 0
            rows = [normalize_product_fields(e) for e in (entries or SAMPLE_PRODUCTS)]
            self.repo.bulk_create(rows)
        log.info("seeded %d sample products", len(rows))
        return len(rows)
