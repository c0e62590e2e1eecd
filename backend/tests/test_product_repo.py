import concurrent.futures
from datetime import timedelta
from decimal import Decimal

import pytest

from app.db import SessionLocal
from app.errors import DuplicateSku
from app.models.product import Product
from app.repositories.product_repo import ProductRepository, utcnow


def _fields(**overrides):
    base = {"name": "Tea 100g", "sku": "T1", "brand": "Leaf", "price": Decimal("3.00")}
    base.update(overrides)
    return base


def test_create_assigns_id_and_timestamps(db):
    repo = ProductRepository(db)
    p = repo.create(_fields())
    assert p.id is not None
    assert p.is_active is True
    assert p.created_at == p.updated_at
    assert repo.get(p.id) == p


def test_create_duplicate_sku_raises_and_keeps_count(db):
    repo = ProductRepository(db)
    repo.create(_fields())
    with pytest.raises(DuplicateSku) as exc:
        repo.create(_fields(name="Other"))
    assert exc.value.sku == "T1"
    assert repo.count() == 1


def test_update_keeps_created_at_and_advances_updated_at(db):
    repo = ProductRepository(db)
    p = repo.create(_fields())
    first = repo.update(p.id, {"price": Decimal("4.50")})
    second = repo.update(p.id, {"category": "Drinks"})
    assert first.created_at == p.created_at == second.created_at
    assert p.updated_at < first.updated_at < second.updated_at
    assert second.price == Decimal("4.50")
    assert second.category == "Drinks"


def test_update_advances_even_if_clock_is_behind(db):
    repo = ProductRepository(db)
    p = repo.create(_fields())
    # push updatedAt into the future so the next update sees a "slow" clock
    row = db.query(Product).filter(Product.id == p.id).first()
    future = utcnow() + timedelta(hours=1)
    row.updated_at = future
    db.commit()

    updated = repo.update(p.id, {"name": "Tea 200g"})
    assert updated.updated_at == future + timedelta(microseconds=1)


def test_update_ignores_store_managed_fields(db):
    repo = ProductRepository(db)
    p = repo.create(_fields())
    updated = repo.update(p.id, {"id": 999, "created_at": utcnow() - timedelta(days=1)})
    assert updated.id == p.id
    assert updated.created_at == p.created_at


def test_update_duplicate_sku_leaves_row_unchanged(db):
    repo = ProductRepository(db)
    repo.create(_fields(sku="A"))
    b = repo.create(_fields(sku="B"))
    with pytest.raises(DuplicateSku):
        repo.update(b.id, {"sku": "A", "name": "Renamed"})
    assert repo.get(b.id) == b


def test_missing_rows(db):
    repo = ProductRepository(db)
    assert repo.get(12345) is None
    assert repo.update(12345, {"name": "x"}) is None
    assert repo.delete(12345) is False


def test_delete_is_hard(db):
    repo = ProductRepository(db)
    p = repo.create(_fields())
    assert repo.delete(p.id) is True
    assert repo.get(p.id) is None
    assert repo.count() == 0
    # the sku is free again once the row is gone
    assert repo.create(_fields()).sku == "T1"


def test_list_all_in_id_order(db):
    repo = ProductRepository(db)
    ids = [repo.create(_fields(sku=f"S{i}")).id for i in range(3)]
    assert [p.id for p in repo.list_all()] == ids


def test_same_sku_from_two_sessions(db):
    other = SessionLocal()
    try:
        first = ProductRepository(db)
        second = ProductRepository(other)
        # both writers see the sku as free before either inserts
        assert first.count() == second.count() == 0
        first.create(_fields())
        with pytest.raises(DuplicateSku):
            second.create(_fields(name="Loser"))
        assert second.count() == 1
        assert [p.name for p in first.list_all()] == ["Tea 100g"]
    finally:
        other.close()


def _create_in_own_session(name):
    s = SessionLocal()
    try:
        ProductRepository(s).create(_fields(name=name))
        return "created"
    except DuplicateSku:
        return "duplicate"
    finally:
        s.close()


def test_racing_inserts_of_same_sku_leave_one_row(db):
    workers = 4
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        results = list(ex.map(_create_in_own_session, [f"Racer {i}" for i in range(workers)]))
    assert results.count("created") == 1
    assert results.count("duplicate") == workers - 1
    assert ProductRepository(db).count() == 1
