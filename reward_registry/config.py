from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

CUSTOMERS_FILE = "customers.txt"
PRODUCTS_FILE = "products.txt"
TRANSACTIONS_FILE = "transactions.dat"
TRANSACTION_LOG_FILE = "transactions.log"
GIFTS_FILE = "gifts.yaml"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StoreConfig(BaseModel):
    """Locations and reward policy for a registry store."""

    data_dir: Path = Field(
        default=Path(os.getenv("REWARD_REGISTRY_DATA_DIR", ".")),
        description="Directory holding every persisted file",
    )
    points_per_dollar: int = Field(
        default=int(os.getenv("REWARD_REGISTRY_POINTS_PER_DOLLAR", "10")),
        ge=0,
        description="Reward points credited per dollar spent",
    )
    autosave: bool = Field(
        default=True, description="Save every collection after a checkout"
    )
    log_level: str = Field(
        default=os.getenv("REWARD_REGISTRY_LOG_LEVEL", "WARNING"),
        description="Root logging level used by the command line",
    )

    @property
    def customers_path(self) -> Path:
        return self.data_dir / CUSTOMERS_FILE

    @property
    def products_path(self) -> Path:
        return self.data_dir / PRODUCTS_FILE

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / TRANSACTIONS_FILE

    @property
    def transaction_log_path(self) -> Path:
        return self.data_dir / TRANSACTION_LOG_FILE

    @property
    def gifts_path(self) -> Path:
        return self.data_dir / GIFTS_FILE


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a stream handler on the root logger.

    Args:
        level: Logging level name or number.
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
