from typing import Any

from pydantic import Field, field_validator

from reward_registry import validators
from reward_registry.models.base import RegistryRecord, ValidationFailure, rejection


class Gift(RegistryRecord):
    """A reward customers can redeem points for."""

    gift_name: str = Field(..., description="Display name, used for lookup")
    required_points: int = Field(..., description="Points needed to redeem")

    @field_validator("gift_name", mode="before")
    @classmethod
    def check_gift_name(cls, value: Any) -> Any:
        if not validators.is_single_line(value):
            raise rejection(
                ValidationFailure.INVALID_GIFT_NAME,
                "Gift name must be a single line of text",
            )
        return value
