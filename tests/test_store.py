"""Tests for the RewardStore facade."""

from __future__ import annotations

import logging
import random
import shutil
from pathlib import Path

import pytest
from pydantic import ValidationError

from reward_registry.config import StoreConfig
from reward_registry.errors import (
    CheckoutError,
    InsufficientPointsError,
    RecordNotFoundError,
)
from reward_registry.models import DEFAULT_PRODUCT_IDS, Customer, ValidationFailure
from reward_registry.services.demo_data import seed_demo_data
from reward_registry.services.id_generator import generate_id
from reward_registry.services.store import RewardStore
from tests.consts import TEST_DATA_DIR


def _seeded(store: RewardStore) -> RewardStore:
    seed_demo_data(store)
    return store


def test_generate_id_skips_used_ids() -> None:
    rng = random.Random(7)
    first = generate_id("CustID", set(), rng=random.Random(7))

    second = generate_id("CustID", {first}, rng=rng)

    assert second != first
    assert second.startswith("CustID")
    assert len(second) == len("CustID") + 10
    assert second[len("CustID") :].isdigit()


def test_register_customer_assigns_unique_id(store: RewardStore) -> None:
    customer = store.register_customer(
        "U123abcdef", "Ada", "Lovelace", 36, "4111-1111-1111"
    )

    assert customer.customer_id.startswith("CustID")
    assert customer.reward_points == 0
    assert store.customers == [customer]
    assert customer.customer_id in store.used_customer_ids


def test_invalid_registration_leaves_no_trace(store: RewardStore) -> None:
    with pytest.raises(ValidationError):
        store.register_customer("short", "Ada", "Lovelace", 36, "4111-1111-1111")

    assert store.customers == []
    assert store.used_customer_ids == set()


def test_try_register_customer_stores_valid_customer(store: RewardStore) -> None:
    result = store.try_register_customer(
        "U123abcdef", "Ada", "Lovelace", 36, "4111-1111-1111"
    )

    assert result.ok
    assert result.value is not None
    assert store.customers == [result.value]
    assert result.value.customer_id in store.used_customer_ids


def test_try_register_customer_reports_every_failure(store: RewardStore) -> None:
    result = store.try_register_customer(
        "short", "Ada", "Lovelace", 17, "4111-1111-1111"
    )

    assert result.value is None
    assert result.failures == (
        ValidationFailure.INVALID_USER_NAME,
        ValidationFailure.INVALID_AGE,
    )
    assert store.customers == []
    assert store.used_customer_ids == set()


def test_remove_customer(store: RewardStore, john: Customer) -> None:
    store.add_customer(john)

    assert store.remove_customer(john.customer_id) == john
    assert store.find_customer(john.customer_id) is None
    with pytest.raises(RecordNotFoundError, match="Customer with ID"):
        store.remove_customer(john.customer_id)


def test_removed_product_id_cannot_be_reused(store: RewardStore) -> None:
    store.add_product("Prod00001", "Laptop", 999.99, 10)
    store.remove_product("Prod00001")

    with pytest.raises(ValidationError):
        store.add_product("Prod00001", "Laptop", 899.99, 5)

    assert store.products == []


def test_store_registry_is_separate_from_default(store: RewardStore) -> None:
    store.add_product("Prod00001", "Laptop", 999.99, 10)

    assert "Prod00001" in store.product_ids
    assert "Prod00001" not in DEFAULT_PRODUCT_IDS


def test_remove_unknown_product(store: RewardStore) -> None:
    with pytest.raises(RecordNotFoundError):
        store.remove_product("Prod99999")


def test_save_then_load_restores_every_collection(store_config: StoreConfig) -> None:
    store = _seeded(RewardStore(store_config))
    store.add_gift("Coffee Mug", 500)
    store.checkout("CustID0000000001", [("Prod00002", 1)])
    store.save()

    reloaded = RewardStore(store_config)
    summary = reloaded.load()

    assert summary.customers == 2
    assert summary.products == 2
    assert summary.transactions == 1
    assert summary.gifts == 1
    assert reloaded.customers == store.customers
    assert reloaded.products == store.products
    assert reloaded.transactions == store.transactions
    assert reloaded.gifts == store.gifts
    assert reloaded.used_customer_ids == {"CustID0000000001", "CustID0000000002"}
    assert set(reloaded.product_ids) == {"Prod00001", "Prod00002"}


def test_load_sample_data(tmp_path: Path) -> None:
    for name in ("customers.txt", "products.txt", "transactions.dat", "gifts.yaml"):
        shutil.copy(TEST_DATA_DIR / name, tmp_path / name)
    store = RewardStore(StoreConfig(data_dir=tmp_path))

    summary = store.load()

    assert (summary.customers, summary.products) == (2, 2)
    assert (summary.transactions, summary.gifts) == (1, 2)


def test_loading_twice_keeps_the_catalog(store_config: StoreConfig) -> None:
    saved = _seeded(RewardStore(store_config))
    saved.remove_product("Prod00002")
    saved.save()
    store = RewardStore(store_config)
    store.load()

    summary = store.load()

    assert summary.products == 1
    assert [p.product_id for p in store.products] == ["Prod00001"]
    assert set(store.product_ids) == {"Prod00001"}


def test_reload_restores_saved_catalog_and_keeps_ids_reserved(
    store: RewardStore,
) -> None:
    _seeded(store)
    store.save()
    store.remove_product("Prod00002")

    summary = store.load()

    assert summary.products == 2
    assert [p.product_id for p in store.products] == ["Prod00001", "Prod00002"]
    with pytest.raises(ValidationError):
        store.add_product("Prod00002", "Phone", 1.0, 1)


def test_removed_product_id_stays_reserved_after_save_and_reload(
    store: RewardStore,
) -> None:
    _seeded(store)
    store.remove_product("Prod00002")
    store.save()

    summary = store.load()

    assert summary.products == 1
    assert "Prod00002" in store.product_ids


def test_load_falls_back_to_empty_collections(
    store: RewardStore, store_config: StoreConfig, caplog: pytest.LogCaptureFixture
) -> None:
    store_config.customers_path.write_text("CustID1\nbroken\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        summary = store.load()

    assert summary.customers == 0
    assert summary.products == 0
    assert "Could not load customers" in caplog.text


def test_checkout_updates_inventory_points_and_logs(
    store: RewardStore, store_config: StoreConfig
) -> None:
    _seeded(store)

    transaction = store.checkout(
        "CustID0000000001", [("Prod00001", 2), ("Prod00002", 1)]
    )

    assert transaction.customer_id == "CustID0000000001"
    assert transaction.product_ids == "Prod00001,Prod00002"
    assert transaction.total_amount == pytest.approx(2499.97)
    assert transaction.reward_points == int(transaction.total_amount * 10)
    assert transaction.transaction_id.startswith("TxnID")
    assert store.get_product("Prod00001").product_inventory == 8
    assert store.get_product("Prod00002").product_inventory == 24
    customer = store.get_customer("CustID0000000001")
    assert customer.reward_points == 100 + transaction.reward_points
    assert store.transactions == [transaction]

    log_text = store_config.transaction_log_path.read_text(encoding="utf-8")
    assert "Customer ID: CustID0000000001" in log_text
    assert "  - Product ID: Prod00001, Quantity: 2" in log_text
    assert store_config.transactions_path.exists()
    assert store_config.customers_path.exists()


def test_checkout_without_autosave_does_not_write(tmp_path: Path) -> None:
    store = _seeded(RewardStore(StoreConfig(data_dir=tmp_path, autosave=False)))

    store.checkout("CustID0000000002", [("Prod00002", 1)])

    assert not (tmp_path / "customers.txt").exists()
    assert (tmp_path / "transactions.log").exists()


def test_points_per_dollar_is_configurable(store: RewardStore) -> None:
    _seeded(store)
    store.set_points_per_dollar(1)

    transaction = store.checkout("CustID0000000002", [("Prod00002", 2)])

    assert transaction.reward_points == 999


def test_negative_points_per_dollar_is_rejected(store: RewardStore) -> None:
    with pytest.raises(ValueError):
        store.set_points_per_dollar(-1)


@pytest.mark.parametrize(
    "cart",
    [
        [],
        [("Prod99999", 1)],
        [("Prod00001", 0)],
        [("Prod00001", 11)],
        [("Prod00001", 6), ("Prod00001", 5)],
        [("Prod00002", 1), ("Prod00001", -1)],
    ],
)
def test_rejected_cart_changes_nothing(
    store: RewardStore, cart: list[tuple[str, int]]
) -> None:
    _seeded(store)

    with pytest.raises(CheckoutError):
        store.checkout("CustID0000000001", cart)

    assert store.get_product("Prod00001").product_inventory == 10
    assert store.get_product("Prod00002").product_inventory == 25
    assert store.get_customer("CustID0000000001").reward_points == 100
    assert store.transactions == []


def test_checkout_for_unknown_customer(store: RewardStore) -> None:
    with pytest.raises(RecordNotFoundError):
        store.checkout("CustID9999999999", [("Prod00001", 1)])


def test_redeem_gift_deducts_points(store: RewardStore) -> None:
    _seeded(store)
    store.add_gift("Sticker", 40)

    gift = store.redeem_gift("CustID0000000001", "Sticker")

    assert gift.gift_name == "Sticker"
    assert store.get_customer("CustID0000000001").reward_points == 60


def test_redeem_gift_with_exact_balance(store: RewardStore) -> None:
    _seeded(store)
    store.add_gift("Mug", 100)

    store.redeem_gift("CustID0000000001", "Mug")

    assert store.get_customer("CustID0000000001").reward_points == 0


def test_redeem_gift_with_insufficient_points(store: RewardStore) -> None:
    _seeded(store)
    store.add_gift("Headphones", 5000)

    with pytest.raises(InsufficientPointsError) as exc_info:
        store.redeem_gift("CustID0000000001", "Headphones")

    assert exc_info.value.balance == 100
    assert exc_info.value.required == 5000
    assert store.get_customer("CustID0000000001").reward_points == 100


def test_redeem_unknown_gift(store: RewardStore) -> None:
    _seeded(store)

    with pytest.raises(RecordNotFoundError, match="Gift"):
        store.redeem_gift("CustID0000000001", "Yacht")


def test_seed_is_idempotent(store: RewardStore) -> None:
    assert seed_demo_data(store) == (2, 2)
    assert seed_demo_data(store) == (0, 0)
    assert len(store.customers) == 2
