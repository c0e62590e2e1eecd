#!/usr/bin/env python3
"""
Seed products from a JSON file.

The file may hold a list of product entries or an object with a "products"
list. Entries use the API field names (name, sku, brand, price, description,
imageUrl, category, isActive). Entries whose sku already exists, or that fail
validation, are skipped and reported.

Usage:
    python scripts/seed_products.py --file catalogue.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pydantic import ValidationError

from app.db import SessionLocal, init_db
from app.errors import DuplicateSku
from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductCreate
from app.services.product_service import ProductService


def load_entries(path):
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("products", [])
    if not isinstance(data, list):
        raise ValueError("expected a list of products or {'products': [...]}")
    return data


def seed_entries(svc, entries):
    """Create each entry through the service. Returns (created, skipped) lists of skus/reasons."""
    created, skipped = [], []
    for i, entry in enumerate(entries):
        try:
            payload = ProductCreate.model_validate(entry)
        except ValidationError as e:
            skipped.append(f"entry {i}: invalid ({e.error_count()} error(s))")
            continue
        try:
            svc.create_product(payload)
            created.append(payload.sku)
        except DuplicateSku:
            skipped.append(f"entry {i}: sku {payload.sku} already exists")
    return created, skipped


def seed_from_file(path):
    init_db()
    db = SessionLocal()
    try:
        svc = ProductService(ProductRepository(db))
        created, skipped = seed_entries(svc, load_entries(path))
    finally:
        db.close()
    print("Seeded products:", len(created))
    for reason in skipped:
        print("Skipped", reason)
    return created, skipped


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", required=True, help="Path to product json")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
