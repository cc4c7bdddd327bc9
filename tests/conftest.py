from collections.abc import Iterator
from pathlib import Path

import pytest

from reward_registry.config import StoreConfig
from reward_registry.models.customer import Customer
from reward_registry.models.product import DEFAULT_PRODUCT_IDS
from reward_registry.services.store import RewardStore


@pytest.fixture(autouse=True)
def reset_default_product_ids() -> Iterator[None]:
    """Give every test an empty process-wide product ID registry."""
    DEFAULT_PRODUCT_IDS.clear()
    yield
    DEFAULT_PRODUCT_IDS.clear()


@pytest.fixture
def john() -> Customer:
    return Customer(
        customer_id="CustID0000000001",
        user_name="U111abcdef",
        first_name="John",
        last_name="Doe",
        age=30,
        credit_card_number="1111-1111-1111",
        reward_points=100,
    )


@pytest.fixture
def jane() -> Customer:
    return Customer(
        customer_id="CustID0000000002",
        user_name="U222thomasmuller",
        first_name="Jane",
        last_name="Smith",
        age=25,
        credit_card_number="2222-2222-2222",
        reward_points=150,
    )


@pytest.fixture
def store_config(tmp_path: Path) -> StoreConfig:
    return StoreConfig(data_dir=tmp_path, points_per_dollar=10)


@pytest.fixture
def store(store_config: StoreConfig) -> RewardStore:
    return RewardStore(store_config)
