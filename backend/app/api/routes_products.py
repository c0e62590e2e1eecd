from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.auth import require_admin_token
from app.api.errors import INTERNAL_ERROR
from app.db import get_db
from app.errors import ProductNotFound, ProductValidationError
from app.repositories.product_repo import ProductRepository
from app.schemas.auth_schema import MessageOut
from app.schemas.product_schema import ProductCreate, ProductOut, ProductUpdate
from app.services.product_service import ProductService
from app.utils.logs import get_logger

log = get_logger("products")

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=[Depends(require_admin_token)],
    responses={401: {"model": MessageOut}},
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db))


def _internal_error(action: str) -> HTTPException:
    # details stay in the server log
    log.exception("Error %s", action)
    return HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("", summary="List products", response_model=List[ProductOut])
def list_products(svc: ProductService = Depends(get_product_service)):
    try:
        return svc.list_products()
    except Exception:
        raise _internal_error("listing products")


@router.get(
    "/{product_id}",
    summary="Get product by id",
    response_model=ProductOut,
    responses={404: {"model": MessageOut}},
)
def get_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.get_product(product_id)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        raise _internal_error(f"fetching product {product_id}")


@router.post(
    "",
    summary="Create product",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": MessageOut}},
)
def create_product(payload: ProductCreate, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.create_product(payload)
    except ProductValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        raise _internal_error(f"creating product sku={payload.sku}")


@router.put(
    "/{product_id}",
    summary="Update product (partial)",
    response_model=ProductOut,
    responses={400: {"model": MessageOut}, 404: {"model": MessageOut}},
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product(product_id, payload)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProductValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        raise _internal_error(f"updating product {product_id}")


@router.delete(
    "/{product_id}",
    summary="Delete product",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": MessageOut}},
)
def delete_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        svc.delete_product(product_id)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        raise _internal_error(f"deleting product {product_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
