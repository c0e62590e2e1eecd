import os
import tempfile

# settings are read at import time, so the environment must be ready first
_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="catalog-tests-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "secret-pass"
os.environ["ADMIN_TOKEN"] = "admin-token-123"
os.environ["RESET_DB"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.db import SessionLocal, init_db
from app.main import app
from app.models.product import Product

TOKEN = "admin-token-123"
AUTH = {"Authorization": TOKEN}


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    init_db(reset=True)


@pytest.fixture(autouse=True)
def clean_products():
    db = SessionLocal()
    try:
        db.query(Product).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()
