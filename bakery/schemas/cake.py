from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

from bakery.models.enums import Occasion


def _check_name(value: Any) -> str:
    if value is None:
        raise ValueError("name required")
    return value if isinstance(value, str) else str(value)


def _check_occasion(value: Any) -> int:
    # Runs before type coercion so booleans and numeric strings are not folded into codes.
    if not Occasion.is_valid(value):
        raise ValueError("invalid occasion")
    return int(value)


class CakeCreate(BaseModel):
    """Fields a new catalog row must carry. Price and quantity pass through unchecked."""

    name: str
    occasion: int

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return _check_name(value)

    @field_validator("occasion", mode="before")
    @classmethod
    def validate_occasion(cls, value: Any) -> int:
        return _check_occasion(value)


class CakeUpdate(BaseModel):
    """Partial update; only fields that are present get validated."""

    name: str | None = None
    occasion: int | None = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return _check_name(value)

    @field_validator("occasion", mode="before")
    @classmethod
    def validate_occasion(cls, value: Any) -> int:
        return _check_occasion(value)


class CakeWrite(BaseModel):
    """Request body accepted by the HTTP routes for inserts and updates."""

    name: str | None = None
    occasion: StrictInt | None = None
    price: float | None = None
    quantity: int | None = None


class CakeRead(BaseModel):
    id: int
    name: str
    occasion: Occasion
    price: float
    quantity: int

    model_config = ConfigDict(from_attributes=True)
