import os
import tempfile

# must be set before vibeshop.config is imported anywhere
_DB_PATH = os.path.join(tempfile.gettempdir(), f"vibeshop-test-{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["DEFAULT_USER_ID"] = "guest"

import pytest
from fastapi.testclient import TestClient

from vibeshop.db import SessionLocal, init_db
from vibeshop.main import app
from vibeshop.models.product import Product
from vibeshop.services.catalog_service import CatalogService


@pytest.fixture(autouse=True)
def fresh_db():
    # Recreate DB fresh for every test
    init_db(reset=True)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_product():
    def _make(name="Test Coffee", price=10.0, stock=5, **extra):
        db = SessionLocal()
        try:
            p = CatalogService(db).create_product({"name": name, "price": price, "stock": stock, **extra})
            return p.id
        finally:
            db.close()

    return _make


@pytest.fixture
def stock_of():
    def _stock(product_id):
        db = SessionLocal()
        try:
            return db.get(Product, product_id).stock
        finally:
            db.close()

    return _stock
