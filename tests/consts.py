"""Shared test path constants."""

from pathlib import Path
from typing import Final

TESTS_DIR: Final[Path] = Path(__file__).resolve().parent
PROJECT_ROOT: Final[Path] = TESTS_DIR.parent
TEST_DATA_DIR: Final[Path] = TESTS_DIR / "data"
SAMPLE_CUSTOMERS_FILE: Final[Path] = TEST_DATA_DIR / "customers.txt"
SAMPLE_PRODUCTS_FILE: Final[Path] = TEST_DATA_DIR / "products.txt"
SAMPLE_TRANSACTIONS_FILE: Final[Path] = TEST_DATA_DIR / "transactions.dat"
SAMPLE_GIFTS_FILE: Final[Path] = TEST_DATA_DIR / "gifts.yaml"
