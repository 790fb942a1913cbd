import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_api.core.constants import MAX_COUNT
from inventory_api.core.exceptions import StoreError
from inventory_api.models.product import Product

logger = logging.getLogger(__name__)


def store_operation(operation: str):
    """Roll back and re-raise database failures as StoreError."""

    def decorator(func):
        @wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception("Database error during %s", operation)
                raise StoreError("Database operation failed for {}".format(operation)) from exc

        return wrapper

    return decorator


@store_operation("inserting product")
def insert_product(db: Session, values: dict[str, Any]) -> Product:
    product = Product(**values)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@store_operation("loading product")
def fetch_product(db: Session, product_id: int) -> Optional[Product]:
    return db.get(Product, product_id, populate_existing=True)


@store_operation("listing products")
def fetch_products(db: Session) -> list[Product]:
    stmt = select(Product).order_by(Product.id).execution_options(populate_existing=True)
    return list(db.execute(stmt).scalars().all())


@store_operation("listing low stock products")
def fetch_low_stock(db: Session) -> list[Product]:
    stmt = (
        select(Product)
        .where(Product.stock_quantity <= Product.low_stock_threshold)
        .order_by(Product.id)
        .execution_options(populate_existing=True)
    )
    return list(db.execute(stmt).scalars().all())


@store_operation("updating product")
def apply_changes(db: Session, product_id: int, changes: dict[str, Any]) -> Optional[Product]:
    stmt = (
        select(Product)
        .where(Product.id == product_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    product = db.execute(stmt).scalars().first()
    if product is None:
        db.rollback()
        return None
    for key, value in changes.items():
        setattr(product, key, value)
    if changes:
        product.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    return product


@store_operation("deleting product")
def remove_product(db: Session, product_id: int) -> bool:
    result = db.execute(delete(Product).where(Product.id == product_id))
    db.commit()
    return result.rowcount > 0


def _adjust_stock(
    db: Session,
    product_id: int,
    delta: int,
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[Row]:
    conditions = [Product.id == product_id]
    if minimum is not None:
        conditions.append(Product.stock_quantity >= minimum)
    if maximum is not None:
        conditions.append(Product.stock_quantity <= maximum)
    stmt = (
        update(Product)
        .where(*conditions)
        .values(
            stock_quantity=Product.stock_quantity + delta,
            updated_at=datetime.now(timezone.utc),
        )
        .returning(Product.id, Product.name, Product.stock_quantity)
        .execution_options(synchronize_session=False)
    )
    row = db.execute(stmt).first()
    db.commit()
    return row


@store_operation("adding stock")
def increment_stock(db: Session, product_id: int, quantity: int) -> Optional[Row]:
    """Atomically add ``quantity`` unless the total would pass MAX_COUNT.

    Returns (id, name, new stock), or None when the product is missing or full.
    """
    return _adjust_stock(db, product_id, quantity, maximum=MAX_COUNT - quantity)


@store_operation("removing stock")
def decrement_stock(db: Session, product_id: int, quantity: int) -> Optional[Row]:
    """Atomically remove ``quantity`` when enough stock exists.

    Returns None when the product is missing or holds less than ``quantity``.
    """
    return _adjust_stock(db, product_id, -quantity, minimum=quantity)


__all__ = [
    "apply_changes",
    "decrement_stock",
    "fetch_low_stock",
    "fetch_product",
    "fetch_products",
    "increment_stock",
    "insert_product",
    "remove_product",
    "store_operation",
]
