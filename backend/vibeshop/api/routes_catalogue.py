from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vibeshop.db import get_db
from vibeshop.exceptions import storage_errors
from vibeshop.schemas.product_schema import ProductIn, product_to_dict
from vibeshop.services.catalog_service import CatalogService

router = APIRouter(tags=["catalogue"])

@router.get("", summary="List products")
def list_products(db: Session = Depends(get_db)):
    with storage_errors("Failed to fetch products"):
        return [product_to_dict(p) for p in CatalogService(db).list_products()]

@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    with storage_errors("Failed to fetch product"):
        return product_to_dict(CatalogService(db).get_product(product_id))

@router.post("", summary="Create product", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    with storage_errors("Failed to create product"):
        p = CatalogService(db).create_product(payload.model_dump())
        return product_to_dict(p)
