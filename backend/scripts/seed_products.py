#!/usr/bin/env python3
"""
Seed the product catalog.

Without --file the built-in sample catalog is inserted (only into an empty
store). With --file, entries from a JSON file are added; the file may hold a
list of products or an object with an "items" list, each entry shaped like
the API's POST /api/products body ({name, price, description?, image?,
category?, stock?}). Entries using "title" or "price_cents" are accepted too.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file catalogue.json --reset
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from vibeshop.db import SessionLocal, init_db
from vibeshop.services.catalog_service import CatalogService
from vibeshop.utils.log_config import configure_logging

log = logging.getLogger("seed")


def _normalize_entry(entry):
    """Return a dict with the API's product field names."""
    price = entry.get("price")
    if price is None and entry.get("price_cents") is not None:
        price = int(entry["price_cents"]) / 100
    image = entry.get("image")
    if not image:
        imgs = entry.get("images") or []
        image = imgs[0] if isinstance(imgs, (list, tuple)) and imgs else None
    return {
        "name": entry.get("name") or entry.get("title"),
        "price": price,
        "description": entry.get("description") or "",
        "image": image,
        "category": entry.get("category"),
        "stock": entry.get("stock"),
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", list(data.values()))
    return [_normalize_entry(e) for e in data if isinstance(e, dict)]


def seed(path: str = None, reset: bool = False) -> int:
    init_db(reset=reset)
    db = SessionLocal()
    try:
        svc = CatalogService(db)
        if not path:
            return svc.seed_sample_products()
        created = 0
        for entry in load_entries(path):
            svc.create_product(entry)
            created += 1
        return created
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a product JSON file")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    args = parser.parse_args()
    configure_logging()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    print("Seeded products:", seed(args.file, reset=args.reset))
