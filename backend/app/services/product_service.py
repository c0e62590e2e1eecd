from typing import List

from app.errors import DuplicateSku, ProductNotFound
from app.repositories.product_repo import ProductRecord, ProductStore
from app.schemas.product_schema import ProductCreate, ProductUpdate
from app.utils.logs import get_logger

log = get_logger("products")


class ProductService:
    """
    Product lifecycle on top of any ProductStore.

    Lookups by id are answered before any write is attempted; sku uniqueness
    is left to the store's constraint so racing writers cannot both win.
    """

    def __init__(self, store: ProductStore):
        self.store = store

    def list_products(self) -> List[ProductRecord]:
        return self.store.list_all()

    def get_product(self, product_id: int) -> ProductRecord:
        product = self.store.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def create_product(self, payload: ProductCreate) -> ProductRecord:
        try:
            product = self.store.create(payload.model_dump())
        except DuplicateSku:
            log.info("create rejected: duplicate sku=%s", payload.sku)
            raise
        log.info("created id=%s sku=%s", product.id, product.sku)
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductRecord:
        # 404 wins over any validation problem in the body
        self.get_product(product_id)
        changes = payload.changes()
        try:
            product = self.store.update(product_id, changes)
        except DuplicateSku:
            log.info("update of id=%s rejected: duplicate sku=%s", product_id, changes.get("sku"))
            raise
        if product is None:
            # removed between the lookup and the write
            raise ProductNotFound(product_id)
        log.info("updated id=%s fields=%s", product_id, sorted(changes))
        return product

    def delete_product(self, product_id: int) -> None:
        if not self.store.delete(product_id):
            log.info("delete of id=%s: not found", product_id)
            raise ProductNotFound(product_id)
        log.info("deleted id=%s", product_id)
