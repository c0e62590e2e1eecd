from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import DuplicateSku
from app.models.product import Product

# fields a caller may write; id and timestamps belong to the store
WRITABLE_FIELDS = (
    "name",
    "sku",
    "brand",
    "price",
    "description",
    "image_url",
    "category",
    "is_active",
)


@dataclass(frozen=True)
class ProductRecord:
    id: int
    name: str
    sku: str
    brand: str
    price: Optional[Decimal]
    description: Optional[str]
    image_url: Optional[str]
    category: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ProductStore(Protocol):
    def list_all(self) -> List[ProductRecord]: ...

    def get(self, product_id: int) -> Optional[ProductRecord]: ...

    def create(self, fields: Mapping[str, Any]) -> ProductRecord: ...

    def update(self, product_id: int, changes: Mapping[str, Any]) -> Optional[ProductRecord]: ...

    def delete(self, product_id: int) -> bool: ...

    def count(self) -> int: ...


def utcnow() -> datetime:
    # naive UTC; SQLite drops tzinfo on the way back anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_record(p: Product) -> ProductRecord:
    return ProductRecord(
        id=p.id,
        name=p.name,
        sku=p.sku,
        brand=p.brand,
        price=p.price,
        description=p.description,
        image_url=p.image_url,
        category=p.category,
        is_active=p.is_active,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


class ProductRepository:
    """SQLAlchemy-backed ProductStore. Every write commits or rolls back before returning."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def _sku_taken(self, sku: str) -> bool:
        return self.db.query(Product.id).filter(Product.sku == sku).first() is not None

    def list_all(self) -> List[ProductRecord]:
        return [_to_record(p) for p in self.db.query(Product).order_by(Product.id).all()]

    def get(self, product_id: int) -> Optional[ProductRecord]:
        p = self._get_row(product_id)
        return _to_record(p) if p else None

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def create(self, fields: Mapping[str, Any]) -> ProductRecord:
        now = utcnow()
        data = {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}
        if data.get("is_active") is None:
            data["is_active"] = True
        p = Product(**data, created_at=now, updated_at=now)
        self.db.add(p)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # the unique index on sku is the only constraint a valid payload can hit
            if self._sku_taken(data.get("sku")):
                raise DuplicateSku(data.get("sku"))
            raise
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(p)
        return _to_record(p)

    def update(self, product_id: int, changes: Mapping[str, Any]) -> Optional[ProductRecord]:
        p = self._get_row(product_id)
        if p is None:
            return None
        for key, value in changes.items():
            if key in WRITABLE_FIELDS:
                setattr(p, key, value)

        # updatedAt must strictly advance even when the clock has not
        now = utcnow()
        if p.updated_at is not None and now <= p.updated_at:
            now = p.updated_at + timedelta(microseconds=1)
        p.updated_at = now
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            sku = changes.get("sku")
            if sku is not None and self._sku_taken(sku):
                raise DuplicateSku(sku)
            raise
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(p)
        return _to_record(p)

    def delete(self, product_id: int) -> bool:
        try:
            deleted = (
                self.db.query(Product)
                .filter(Product.id == product_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted > 0
