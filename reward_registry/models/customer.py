from typing import Any

from pydantic import Field, field_validator

from reward_registry import validators
from reward_registry.models.base import RegistryRecord, ValidationFailure, rejection


class Customer(RegistryRecord):
    """A registered shopper and their reward balance."""

    customer_id: str = Field(..., description="System-assigned CustID identifier")
    user_name: str = Field(..., description="Login name, U + 0-3 digits + 6+ chars")
    first_name: str = Field(..., description="1-12 ASCII letters")
    last_name: str = Field(..., description="1-12 ASCII letters")
    age: int = Field(..., description="Age in years, 18-100")
    credit_card_number: str = Field(..., description="XXXX-XXXX-XXXX card number")
    reward_points: int = Field(default=0, description="Current reward balance")

    @field_validator("user_name", mode="before")
    @classmethod
    def check_user_name(cls, value: Any) -> Any:
        if not validators.is_user_name_valid(value):
            raise rejection(
                ValidationFailure.INVALID_USER_NAME,
                "Invalid user name {value}",
                value=value,
            )
        return value

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> Any:
        if not validators.is_name_valid(value):
            raise rejection(
                ValidationFailure.INVALID_NAME, "Invalid name {value}", value=value
            )
        return value

    @field_validator("age", mode="before")
    @classmethod
    def check_age(cls, value: Any) -> Any:
        if not validators.is_age_valid(value):
            raise rejection(
                ValidationFailure.INVALID_AGE,
                "Age must be between 18 and 100, got {value}",
                value=value,
            )
        return value

    @field_validator("credit_card_number", mode="before")
    @classmethod
    def check_credit_card(cls, value: Any) -> Any:
        if not validators.is_credit_card_valid(value):
            raise rejection(
                ValidationFailure.INVALID_CREDIT_CARD,
                "Invalid credit card number {value}",
                value=value,
            )
        return value

    @field_validator("reward_points", mode="before")
    @classmethod
    def check_reward_points(cls, value: Any) -> Any:
        if not validators.is_reward_points_valid(value):
            raise rejection(
                ValidationFailure.INVALID_REWARD_POINTS,
                "Reward points must be an integer, got {value}",
                value=value,
            )
        return value

    def add_reward_points(self, delta: int) -> int:
        """Adjust the balance by ``delta``.

        Negative deltas are accepted without a floor, so a redemption larger
        than the balance leaves it negative. Callers that must not overdraw
        check the balance first.

        Returns:
            The new balance.
        """
        self.reward_points += delta
        return self.reward_points
