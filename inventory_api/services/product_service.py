import logging
from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from inventory_api.core.constants import MAX_COUNT
from inventory_api.core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    ValidationError,
)
from inventory_api.core.validation import describe_validation_errors
from inventory_api.schemas.product import (
    ProductCreate,
    ProductRead,
    ProductUpdate,
    StockAddition,
    StockRemoval,
)
from inventory_api.services import product_store

logger = logging.getLogger(__name__)

_MAX_ID = 2 ** 63 - 1

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _validate(schema: Type[SchemaT], fields: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
    if isinstance(fields, schema):
        return fields
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors())) from exc


def parse_product_id(product_id: Any) -> int:
    """Ids are positive integers; anything else cannot name a product."""
    if isinstance(product_id, bool):
        raise ProductNotFoundError()
    if isinstance(product_id, int):
        value = product_id
    else:
        text = str(product_id).strip()
        if not (text.isascii() and text.isdigit()):
            raise ProductNotFoundError()
        value = int(text)
    if value <= 0 or value > _MAX_ID:
        raise ProductNotFoundError()
    return value


def require_positive_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise InvalidQuantityError()
    if isinstance(quantity, float):
        if not quantity.is_integer():
            raise InvalidQuantityError("Quantity must be a whole number")
        quantity = int(quantity)
    if quantity <= 0:
        raise InvalidQuantityError()
    if quantity > MAX_COUNT:
        raise InvalidQuantityError("Quantity cannot exceed {}".format(MAX_COUNT))
    return quantity


def create_product(db: Session, fields: Union[ProductCreate, Mapping[str, Any]]) -> ProductRead:
    payload = _validate(ProductCreate, fields)
    product = product_store.insert_product(db, payload.model_dump())
    logger.info(
        "Created product %s (%s)", product.id, product.name, extra={"product_id": product.id}
    )
    return ProductRead.model_validate(product)


def list_products(db: Session) -> list[ProductRead]:
    return [ProductRead.model_validate(product) for product in product_store.fetch_products(db)]


def get_product(db: Session, product_id: Any) -> ProductRead:
    product = product_store.fetch_product(db, parse_product_id(product_id))
    if product is None:
        raise ProductNotFoundError()
    return ProductRead.model_validate(product)


def update_product(
    db: Session,
    product_id: Any,
    fields: Union[ProductUpdate, Mapping[str, Any]],
) -> ProductRead:
    payload = _validate(ProductUpdate, fields)
    product = product_store.apply_changes(db, parse_product_id(product_id), payload.changes())
    if product is None:
        raise ProductNotFoundError()
    return ProductRead.model_validate(product)


def delete_product(db: Session, product_id: Any) -> None:
    product_id = parse_product_id(product_id)
    if not product_store.remove_product(db, product_id):
        raise ProductNotFoundError()
    logger.info("Deleted product %s", product_id, extra={"product_id": product_id})


def add_stock(db: Session, product_id: Any, quantity: Any) -> StockAddition:
    quantity = require_positive_quantity(quantity)
    product_id = parse_product_id(product_id)
    while True:
        row = product_store.increment_stock(db, product_id, quantity)
        if row is not None:
            break
        product = product_store.fetch_product(db, product_id)
        if product is None:
            raise ProductNotFoundError()
        if product.stock_quantity > MAX_COUNT - quantity:
            raise InvalidQuantityError(
                "Stock cannot exceed {}. Current: {}, Adding: {}".format(
                    MAX_COUNT, product.stock_quantity, quantity
                )
            )
        # Stock dropped between the two statements; try again.
    logger.info(
        "Added %s units to product %s (now %s)",
        quantity,
        row.id,
        row.stock_quantity,
        extra={"product_id": row.id, "quantity": quantity, "stock_quantity": row.stock_quantity},
    )
    return StockAddition(
        id=row.id,
        name=row.name,
        previous_stock=row.stock_quantity - quantity,
        current_stock=row.stock_quantity,
        quantity_added=quantity,
    )


def remove_stock(db: Session, product_id: Any, quantity: Any) -> StockRemoval:
    quantity = require_positive_quantity(quantity)
    product_id = parse_product_id(product_id)
    while True:
        row = product_store.decrement_stock(db, product_id, quantity)
        if row is not None:
            break
        product = product_store.fetch_product(db, product_id)
        if product is None:
            raise ProductNotFoundError()
        if product.stock_quantity < quantity:
            logger.warning(
                "Rejected removal of %s units from product %s (available %s)",
                quantity,
                product_id,
                product.stock_quantity,
                extra={
                    "product_id": product_id,
                    "quantity": quantity,
                    "stock_quantity": product.stock_quantity,
                },
            )
            raise InsufficientStockError(available=product.stock_quantity, requested=quantity)
        # Stock grew between the two statements; try again.
    logger.info(
        "Removed %s units from product %s (now %s)",
        quantity,
        row.id,
        row.stock_quantity,
        extra={"product_id": row.id, "quantity": quantity, "stock_quantity": row.stock_quantity},
    )
    return StockRemoval(
        id=row.id,
        name=row.name,
        previous_stock=row.stock_quantity + quantity,
        current_stock=row.stock_quantity,
        quantity_removed=quantity,
    )

def list_low_stock(db: Session) -> list[ProductRead]:
    return [ProductRead.model_validate(product) for product in product_store.fetch_low_stock(db)]


__all__ = [
    "add_stock",
    "create_product",
    "delete_product",
    "get_product",
    "list_low_stock",
    "list_products",
    "parse_product_id",
    "remove_stock",
    "require_positive_quantity",
    "update_product",
]
