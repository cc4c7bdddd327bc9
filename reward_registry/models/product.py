from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Self

from pydantic import Field, ValidationInfo, field_validator, model_validator

from reward_registry import validators
from reward_registry.models.base import (
    RecordResult,
    RegistryRecord,
    ValidationFailure,
    rejection,
)

REGISTRY_CONTEXT_KEY = "registry"


class ProductIDRegistry:
    """Every product ID issued so far.

    IDs are never released: removing a product from a catalog does not make
    its ID available again.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(ids)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def register(self, product_id: str) -> None:
        self._ids.add(product_id)

    def staged(self) -> ProductIDRegistry:
        """Return an independent copy to validate a batch against."""
        return ProductIDRegistry(self._ids)

    def merge(self, other: ProductIDRegistry) -> None:
        self._ids.update(other)

    def clear(self) -> None:
        self._ids.clear()


DEFAULT_PRODUCT_IDS = ProductIDRegistry()


class Product(RegistryRecord):
    """A catalog entry with a unique ID, a price and a stock level."""

    product_id: str = Field(..., description="Prod + 5 digits, unique per registry")
    product_name: str = Field(..., description="Free-text display name")
    product_price: float = Field(..., description="Unit price, strictly positive")
    product_inventory: int = Field(..., description="Units in stock, never negative")

    @field_validator("product_id", mode="before")
    @classmethod
    def check_product_id(cls, value: Any) -> Any:
        if not validators.is_product_id_valid(value):
            raise rejection(
                ValidationFailure.INVALID_PRODUCT_ID,
                "Invalid product ID {value}",
                value=value,
            )
        return value

    @field_validator("product_name", mode="before")
    @classmethod
    def check_product_name(cls, value: Any) -> Any:
        if not validators.is_single_line(value):
            raise rejection(
                ValidationFailure.INVALID_PRODUCT_NAME,
                "Product name must be a single line of text",
            )
        return value

    @field_validator("product_price", mode="before")
    @classmethod
    def check_product_price(cls, value: Any) -> Any:
        if not validators.is_product_price_valid(value):
            raise rejection(
                ValidationFailure.INVALID_PRODUCT_PRICE,
                "Product price must be positive, got {value}",
                value=value,
            )
        return value

    @field_validator("product_inventory", mode="before")
    @classmethod
    def check_product_inventory(cls, value: Any) -> Any:
        if not validators.is_product_inventory_valid(value):
            raise rejection(
                ValidationFailure.INVALID_PRODUCT_INVENTORY,
                "Product inventory must be a non-negative integer, got {value}",
                value=value,
            )
        return value

    @model_validator(mode="after")
    def register_unique_id(self, info: ValidationInfo) -> Self:
        """Claim the product ID once every field check has passed."""

        registry = _registry_from(info.context)
        if self.product_id in registry:
            raise rejection(
                ValidationFailure.DUPLICATE_PRODUCT_ID,
                "Product ID {product_id} is not unique",
                product_id=self.product_id,
            )
        registry.register(self.product_id)
        return self

    @classmethod
    def create(
        cls, *, registry: ProductIDRegistry | None = None, **fields: Any
    ) -> Self:
        """Construct a product whose ID is checked against ``registry``.

        Raises:
            pydantic.ValidationError: If a field is invalid or the ID is taken.
        """
        return cls.model_validate(fields, context=_context_for(registry))

    @classmethod
    def try_create_in(
        cls, registry: ProductIDRegistry, **fields: Any
    ) -> RecordResult[Self]:
        return cls.try_create(context=_context_for(registry), **fields)

    def update_inventory(self, delta: int) -> int:
        """Add ``delta`` units, clamping the stock at zero.

        Returns:
            The new stock level.
        """
        self.product_inventory = max(0, self.product_inventory + delta)
        return self.product_inventory


def _context_for(registry: ProductIDRegistry | None) -> dict[str, Any] | None:
    if registry is None:
        return None
    return {REGISTRY_CONTEXT_KEY: registry}


def _registry_from(context: Any) -> ProductIDRegistry:
    if isinstance(context, dict):
        registry = context.get(REGISTRY_CONTEXT_KEY)
        if isinstance(registry, ProductIDRegistry):
            return registry
    return DEFAULT_PRODUCT_IDS
