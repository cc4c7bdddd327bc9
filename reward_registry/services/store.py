from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from typing import TypeVar

from pydantic import BaseModel

from reward_registry.config import StoreConfig
from reward_registry.errors import (
    CheckoutError,
    InsufficientPointsError,
    ParseError,
    RecordNotFoundError,
)
from reward_registry.models.base import RecordResult
from reward_registry.models.customer import Customer
from reward_registry.models.gift import Gift
from reward_registry.models.product import Product, ProductIDRegistry
from reward_registry.models.transaction import Transaction
from reward_registry.repositories.customers import CustomerRepository
from reward_registry.repositories.gifts import GiftRepository
from reward_registry.repositories.products import ProductRepository
from reward_registry.repositories.transactions import (
    TransactionLog,
    TransactionRepository,
)
from reward_registry.services.id_generator import (
    CUSTOMER_ID_PREFIX,
    TRANSACTION_ID_PREFIX,
    generate_id,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class LoadSummary(BaseModel):
    """Record counts after a store load."""

    customers: int = 0
    products: int = 0
    transactions: int = 0
    gifts: int = 0


class RewardStore:
    """In-memory customer, product, transaction and gift collections.

    Collections keep insertion order, which is also display and save order.
    The store is not safe for concurrent use.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        *,
        product_ids: ProductIDRegistry | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config: StoreConfig = config or StoreConfig()
        self.product_ids: ProductIDRegistry = (
            product_ids if product_ids is not None else ProductIDRegistry()
        )
        self.points_per_dollar: int = self.config.points_per_dollar
        self._rng = rng

        self.customers: list[Customer] = []
        self.products: list[Product] = []
        self.transactions: list[Transaction] = []
        self.gifts: list[Gift] = []
        self.used_customer_ids: set[str] = set()

        self.customer_repository = CustomerRepository(self.config.customers_path)
        self.product_repository = ProductRepository(self.config.products_path)
        self.transaction_repository = TransactionRepository(
            self.config.transactions_path
        )
        self.transaction_log = TransactionLog(self.config.transaction_log_path)
        self.gift_repository = GiftRepository(self.config.gifts_path)

    # Persistence

    def load(self) -> LoadSummary:
        """Load every collection from disk.

        A collection whose file is missing or unreadable starts empty; the
        failure is logged and the other collections still load.
        """
        self.customers = self._load_or_empty(
            "customers", self.customer_repository.load
        )
        self.used_customer_ids.update(c.customer_id for c in self.customers)
        self.products = self._load_or_empty("products", self._load_products)
        self.transactions = self._load_or_empty(
            "transactions", self.transaction_repository.load
        )
        self.gifts = self._load_or_empty("gifts", self.gift_repository.load)

        summary = LoadSummary(
            customers=len(self.customers),
            products=len(self.products),
            transactions=len(self.transactions),
            gifts=len(self.gifts),
        )
        logger.info("Loaded store from %s: %s", self.config.data_dir, summary)
        return summary

    def _load_products(self) -> list[Product]:
        """Load the catalog file as the new catalog.

        The file is checked for duplicate IDs on its own, so loading again
        does not clash with the IDs of products it replaces. IDs issued
        earlier stay reserved.
        """
        loaded_ids = ProductIDRegistry()
        products = self.product_repository.load(loaded_ids)
        self.product_ids.merge(loaded_ids)
        return products

    @staticmethod
    def _load_or_empty(label: str, load: Callable[[], list[R]]) -> list[R]:
        try:
            return load()
        except FileNotFoundError:
            logger.info("No saved %s found, starting with an empty list", label)
        except (OSError, ParseError) as exc:
            logger.warning(
                "Could not load %s (%s), starting with an empty list", label, exc
            )
        return []

    def save(self) -> None:
        """Write every collection to disk.

        Raises:
            OSError: If any file cannot be written.
        """
        self.customer_repository.save(self.customers)
        self.product_repository.save(self.products)
        self.transaction_repository.save(self.transactions)
        self.gift_repository.save(self.gifts)
        logger.info("Saved store to %s", self.config.data_dir)

    # Customers

    def _new_customer_fields(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        age: int,
        credit_card_number: str,
    ) -> dict[str, object]:
        return {
            "customer_id": generate_id(
                CUSTOMER_ID_PREFIX, self.used_customer_ids, rng=self._rng
            ),
            "user_name": user_name,
            "first_name": first_name,
            "last_name": last_name,
            "age": age,
            "credit_card_number": credit_card_number,
            "reward_points": 0,
        }

    def register_customer(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        age: int,
        credit_card_number: str,
    ) -> Customer:
        """Create a customer with a fresh ID and no reward points.

        Raises:
            pydantic.ValidationError: If any field is invalid. The drawn ID
                is not marked as used.
        """
        customer = Customer.model_validate(
            self._new_customer_fields(
                user_name, first_name, last_name, age, credit_card_number
            )
        )
        self.add_customer(customer)
        logger.info("Registered customer %s", customer.customer_id)
        return customer

    def try_register_customer(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        age: int,
        credit_card_number: str,
    ) -> RecordResult[Customer]:
        """Like ``register_customer``, but report rejection as a result.

        Returns:
            The registered customer, or every reason the input was rejected.
            Nothing is stored on failure.
        """
        result = Customer.try_create(
            **self._new_customer_fields(
                user_name, first_name, last_name, age, credit_card_number
            )
        )
        if result.value is not None:
            self.add_customer(result.value)
            logger.info("Registered customer %s", result.value.customer_id)
        return result

    def add_customer(self, customer: Customer) -> None:
        """Append an already constructed customer, reserving its ID."""
        self.used_customer_ids.add(customer.customer_id)
        self.customers.append(customer)

    def find_customer(self, customer_id: str) -> Customer | None:
        return next((c for c in self.customers if c.customer_id == customer_id), None)

    def get_customer(self, customer_id: str) -> Customer:
        customer = self.find_customer(customer_id)
        if customer is None:
            raise RecordNotFoundError("Customer", customer_id)
        return customer

    def remove_customer(self, customer_id: str) -> Customer:
        customer = self.get_customer(customer_id)
        self.customers.remove(customer)
        logger.info("Removed customer %s", customer_id)
        return customer

    # Products

    def add_product(
        self,
        product_id: str,
        product_name: str,
        product_price: float,
        product_inventory: int,
    ) -> Product:
        """Create a product and claim its ID in this store's registry.

        Raises:
            pydantic.ValidationError: If a field is invalid or the ID has been
                used before, even by a product since removed.
        """
        product = Product.create(
            registry=self.product_ids,
            product_id=product_id,
            product_name=product_name,
            product_price=product_price,
            product_inventory=product_inventory,
        )
        self.products.append(product)
        logger.info("Added product %s", product_id)
        return product

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.product_id == product_id), None)

    def get_product(self, product_id: str) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise RecordNotFoundError("Product", product_id)
        return product

    def remove_product(self, product_id: str) -> Product:
        """Drop a product from the catalog. Its ID stays reserved."""
        product = self.get_product(product_id)
        self.products.remove(product)
        logger.info("Removed product %s", product_id)
        return product

    # Rewards

    def set_points_per_dollar(self, points: int) -> None:
        if points < 0:
            raise ValueError("Points per dollar cannot be negative")
        self.points_per_dollar = points

    def add_gift(self, gift_name: str, required_points: int) -> Gift:
        gift = Gift(gift_name=gift_name, required_points=required_points)
        self.gifts.append(gift)
        return gift

    def find_gift(self, gift_name: str) -> Gift | None:
        return next((g for g in self.gifts if g.gift_name == gift_name), None)

    def redeem_gift(self, customer_id: str, gift_name: str) -> Gift:
        """Spend a customer's points on a gift.

        Raises:
            RecordNotFoundError: If the customer or gift does not exist.
            InsufficientPointsError: If the balance is below the gift's cost.
        """
        customer = self.get_customer(customer_id)
        gift = self.find_gift(gift_name)
        if gift is None:
            raise RecordNotFoundError("Gift", gift_name)
        if customer.reward_points < gift.required_points:
            raise InsufficientPointsError(
                customer_id, customer.reward_points, gift.required_points
            )
        customer.add_reward_points(-gift.required_points)
        logger.info("Customer %s redeemed %s", customer_id, gift_name)
        return gift

    # Shopping

    def checkout(
        self, customer_id: str, cart: Sequence[tuple[str, int]]
    ) -> Transaction:
        """Sell the cart to a customer and record the transaction.

        Every line is checked before anything changes, so a rejected cart
        leaves inventory and balances untouched.

        Args:
            customer_id: Buyer's customer ID.
            cart: ``(product_id, quantity)`` pairs; a product may repeat.

        Returns:
            The recorded transaction.

        Raises:
            RecordNotFoundError: If the customer does not exist.
            CheckoutError: If the cart is empty, names an unknown product, or
                asks for a non-positive or unavailable quantity.
        """
        customer = self.get_customer(customer_id)
        if not cart:
            raise CheckoutError("Cart is empty")

        requested: dict[str, int] = {}
        for product_id, quantity in cart:
            product = self.find_product(product_id)
            if product is None:
                raise CheckoutError(f"Invalid product ID {product_id}")
            if quantity <= 0:
                raise CheckoutError(f"Invalid quantity {quantity} for {product_id}")
            requested[product_id] = requested.get(product_id, 0) + quantity
            if requested[product_id] > product.product_inventory:
                raise CheckoutError(
                    f"Only {product.product_inventory} of {product_id} in stock"
                )

        total_cost = 0.0
        for product_id, quantity in cart:
            product = self.get_product(product_id)
            product.update_inventory(-quantity)
            total_cost += product.product_price * quantity

        reward_points = int(total_cost * self.points_per_dollar)
        customer.add_reward_points(reward_points)

        transaction = Transaction(
            transaction_id=generate_id(
                TRANSACTION_ID_PREFIX,
                {t.transaction_id for t in self.transactions},
                rng=self._rng,
            ),
            customer_id=customer_id,
            product_ids=Transaction.join_product_ids([pid for pid, _ in cart]),
            total_amount=total_cost,
            reward_points=reward_points,
        )
        self.transactions.append(transaction)
        self.transaction_log.log_transaction(
            customer_id, cart, total_cost, reward_points
        )
        logger.info(
            "Checkout %s for %s: $%.2f, %d points",
            transaction.transaction_id,
            customer_id,
            total_cost,
            reward_points,
        )

        if self.config.autosave:
            self.save()
        return transaction
