import pytest
from sqlalchemy import create_engine

from app import db as db_module
from app.db import SCHEMA_VERSION, SchemaVersionError, check_connection, init_db
from app.models.schema_version import SchemaVersion


def test_init_db_records_schema_version(db):
    assert init_db() == SCHEMA_VERSION
    versions = [v.version for v in db.query(SchemaVersion).all()]
    assert versions == [SCHEMA_VERSION]


def test_init_db_is_repeatable(db):
    init_db()
    init_db()
    assert db.query(SchemaVersion).count() == 1


def test_init_db_refuses_newer_store(db):
    newer = db.query(SchemaVersion).first()
    newer.version = SCHEMA_VERSION + 1
    db.commit()
    try:
        with pytest.raises(SchemaVersionError):
            init_db()
    finally:
        newer.version = SCHEMA_VERSION
        db.commit()


def test_unreachable_store_fails_fast(monkeypatch, tmp_path):
    # a directory that does not exist cannot hold the sqlite file
    bad = create_engine(f"sqlite:///{tmp_path}/missing/dir/x.db")
    monkeypatch.setattr(db_module, "engine", bad)
    assert check_connection() is False
    with pytest.raises(Exception):
        init_db()
