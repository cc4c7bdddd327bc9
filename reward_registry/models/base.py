from __future__ import annotations

from enum import StrEnum
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_core import PydanticCustomError


class ValidationFailure(StrEnum):
    """Machine-readable reasons a record was rejected."""

    INVALID_USER_NAME = "invalid_user_name"
    INVALID_NAME = "invalid_name"
    INVALID_AGE = "invalid_age"
    INVALID_CREDIT_CARD = "invalid_credit_card"
    INVALID_PRODUCT_ID = "invalid_product_id"
    INVALID_PRODUCT_PRICE = "invalid_product_price"
    INVALID_PRODUCT_INVENTORY = "invalid_product_inventory"
    INVALID_REWARD_POINTS = "invalid_reward_points"
    INVALID_PRODUCT_NAME = "invalid_product_name"
    INVALID_GIFT_NAME = "invalid_gift_name"
    DUPLICATE_PRODUCT_ID = "duplicate_product_id"
    MALFORMED_FIELD = "malformed_field"


def rejection(
    failure: ValidationFailure, message: str, **context: Any
) -> PydanticCustomError:
    """Build the pydantic error raised by record validators.

    The error type is the failure's value so it survives in
    ``ValidationError.errors()`` and can be mapped back.
    """
    return PydanticCustomError(failure.value, message, context or None)


def failures_from(exc: ValidationError) -> tuple[ValidationFailure, ...]:
    failures: list[ValidationFailure] = []
    for error in exc.errors():
        try:
            failure = ValidationFailure(error["type"])
        except ValueError:
            failure = ValidationFailure.MALFORMED_FIELD
        if failure not in failures:
            failures.append(failure)
    return tuple(failures)


T = TypeVar("T")


class RecordResult(BaseModel, Generic[T]):
    """Outcome of a non-raising record construction.

    Holds either the constructed record or the reasons it was rejected.
    """

    value: T | None = Field(default=None, description="Constructed record")
    failures: tuple[ValidationFailure, ...] = Field(
        default=(), description="Rejection reasons, in field order"
    )

    @model_validator(mode="after")
    def validate_exclusive(self) -> Self:
        if (self.value is None) == (not self.failures):
            raise ValueError("a result holds either a value or failures")
        return self

    @property
    def ok(self) -> bool:
        return self.value is not None


class RegistryRecord(BaseModel):
    """Base for records that validate every field at construction."""

    @classmethod
    def try_create(
        cls, context: dict[str, Any] | None = None, **fields: Any
    ) -> RecordResult[Self]:
        """Construct a record, reporting rejection as a value instead of raising.

        Args:
            context: Optional pydantic validation context.
            **fields: Record fields by name.

        Returns:
            A result holding the record, or the validation failures.
        """
        try:
            record = cls.model_validate(fields, context=context)
        except ValidationError as exc:
            return RecordResult(failures=failures_from(exc))
        return RecordResult(value=record)
