from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from inventory_api.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    FIELD_LABELS,
    MAX_COUNT,
    NAME_MAX_LENGTH,
)

_TEXT_LIMITS = {
    "name": (NAME_MAX_LENGTH, "Product name cannot exceed {} characters"),
    "description": (DESCRIPTION_MAX_LENGTH, "Description cannot exceed {} characters"),
}


def clean_text(value: Any, field_name: str) -> str:
    label = FIELD_LABELS[field_name]
    if value is None:
        raise ValueError("{} is required".format(label))
    if not isinstance(value, str):
        raise ValueError("{} must be text".format(label))
    value = value.strip()
    if not value:
        raise ValueError("{} is required".format(label))
    max_length, message = _TEXT_LIMITS[field_name]
    if len(value) > max_length:
        raise ValueError(message.format(max_length))
    return value


def whole_number(value: Any, field_name: str) -> int:
    """Accept ints and integral floats up to MAX_COUNT; bools and strings are not counts."""
    label = FIELD_LABELS[field_name]
    if value is None:
        raise ValueError("{} is required".format(label))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("{} must be a whole number".format(label))
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("{} must be a whole number".format(label))
        value = int(value)
    if value > MAX_COUNT:
        raise ValueError("{} cannot exceed {}".format(label, MAX_COUNT))
    return value


def clean_count(value: Any, field_name: str) -> int:
    value = whole_number(value, field_name)
    if value < 0:
        raise ValueError("{} cannot be negative".format(FIELD_LABELS[field_name]))
    return value


class _ProductFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("name", "description", mode="before", check_fields=False)
    @classmethod
    def _validate_text(cls, value, info: ValidationInfo):
        return clean_text(value, info.field_name)

    @field_validator("stock_quantity", "low_stock_threshold", mode="before", check_fields=False)
    @classmethod
    def _validate_count(cls, value, info: ValidationInfo):
        return clean_count(value, info.field_name)


class ProductCreate(_ProductFields):
    name: str
    description: str
    stock_quantity: int
    low_stock_threshold: int


class ProductUpdate(_ProductFields):
    """Patch semantics: only fields present in the request are applied."""

    name: Optional[str] = None
    description: Optional[str] = None
    stock_quantity: Optional[int] = None
    low_stock_threshold: Optional[int] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class StockAdjustmentRequest(BaseModel):
    quantity: Optional[int] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _validate_quantity(cls, value):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("Quantity must be a positive number")
        return whole_number(value, "quantity")


class ProductRead(BaseModel):
    id: int
    name: str
    description: str
    stock_quantity: int
    low_stock_threshold: int
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without an offset.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class StockAdjustmentBase(BaseModel):
    id: int
    name: str
    previous_stock: int = Field(serialization_alias="previousStock")
    current_stock: int = Field(serialization_alias="currentStock")


class StockAddition(StockAdjustmentBase):
    quantity_added: int = Field(serialization_alias="quantityAdded")


class StockRemoval(StockAdjustmentBase):
    quantity_removed: int = Field(serialization_alias="quantityRemoved")


__all__ = [
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "StockAddition",
    "StockAdjustmentRequest",
    "StockRemoval",
    "clean_count",
    "clean_text",
    "whole_number",
]
