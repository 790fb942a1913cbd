from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_api.core.responses import success_response
from inventory_api.dependencies import get_db
from inventory_api.schemas.product import ProductCreate, ProductUpdate, StockAdjustmentRequest
from inventory_api.services import product_service

router = APIRouter(tags=["Products"])


def _dump(model):
    return model.model_dump(mode="json", by_alias=True)


def _quantity(payload: Optional[StockAdjustmentRequest]):
    return payload.quantity if payload is not None else None


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    product = product_service.create_product(db, payload)
    return success_response(
        _dump(product),
        message="Product created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("")
def list_products(db: Session = Depends(get_db)):
    products = product_service.list_products(db)
    return success_response([_dump(product) for product in products], count=len(products))


# Registered before /{product_id} so "low-stock" is never read as an id.
@router.get("/low-stock")
def list_low_stock_products(db: Session = Depends(get_db)):
    products = product_service.list_low_stock(db)
    return success_response(
        [_dump(product) for product in products],
        message="Low stock products retrieved successfully",
        count=len(products),
    )


@router.get("/{product_id}")
def get_product(product_id: str, db: Session = Depends(get_db)):
    return success_response(_dump(product_service.get_product(db, product_id)))


@router.put("/{product_id}")
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    product = product_service.update_product(db, product_id, payload)
    return success_response(_dump(product), message="Product updated successfully")


@router.delete("/{product_id}")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    product_service.delete_product(db, product_id)
    return success_response(message="Product deleted successfully")


@router.patch("/{product_id}/add-stock")
def add_stock(
    product_id: str,
    payload: Optional[StockAdjustmentRequest] = None,
    db: Session = Depends(get_db),
):
    result = product_service.add_stock(db, product_id, _quantity(payload))
    return success_response(
        _dump(result),
        message="Added {} units to stock".format(result.quantity_added),
    )


@router.patch("/{product_id}/remove-stock")
def remove_stock(
    product_id: str,
    payload: Optional[StockAdjustmentRequest] = None,
    db: Session = Depends(get_db),
):
    result = product_service.remove_stock(db, product_id, _quantity(payload))
    return success_response(
        _dump(result),
        message="Removed {} units from stock".format(result.quantity_removed),
    )


__all__ = ["router"]
