from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from reward_registry.models.transaction import Transaction
from reward_registry.repositories._serialization import (
    format_float,
    format_int,
    parse_float,
    parse_int,
)
from reward_registry.repositories.base import StanzaRepository

logger = logging.getLogger(__name__)


class TransactionRepository(StanzaRepository[Transaction]):
    """Five-line transaction stanzas for structured save and load."""

    kind = "transaction"
    fields = (
        "transaction_id",
        "customer_id",
        "product_ids",
        "total_amount",
        "reward_points",
    )

    def _to_lines(self, record: Transaction) -> list[str]:
        return [
            record.transaction_id,
            record.customer_id,
            record.product_ids,
            format_float(record.total_amount),
            format_int(record.reward_points),
        ]

    def _from_lines(self, lines: list[str]) -> Transaction:
        transaction_id, customer_id, product_ids, total, points = lines
        return Transaction(
            transaction_id=transaction_id,
            customer_id=customer_id,
            product_ids=product_ids,
            total_amount=parse_float(total),
            reward_points=parse_int(points),
        )


class TransactionLog:
    """Append-only, human-readable audit trail of checkouts.

    The format is meant for people and is not read back.
    """

    def __init__(self, path: str | Path) -> None:
        self.path: Path = Path(path)

    @staticmethod
    def render(
        customer_id: str,
        cart: Sequence[tuple[str, int]],
        total_cost: float,
        reward_points: int,
    ) -> str:
        lines = [f"Customer ID: {customer_id}", "Items Purchased:"]
        lines.extend(
            f"  - Product ID: {product_id}, Quantity: {quantity}"
            for product_id, quantity in cart
        )
        lines.append(f"Total Cost: ${total_cost:.2f}")
        lines.append(f"Reward Points Earned: {reward_points}")
        return "\n".join(lines) + "\n\n"

    def log_transaction(
        self,
        customer_id: str,
        cart: Sequence[tuple[str, int]],
        total_cost: float,
        reward_points: int,
    ) -> bool:
        """Append one checkout to the log.

        A log that cannot be written is reported and skipped; the checkout
        it describes has already happened.

        Args:
            customer_id: Buyer's customer ID.
            cart: ``(product_id, quantity)`` pairs in purchase order.
            total_cost: Amount charged.
            reward_points: Points credited for the checkout.

        Returns:
            True if the entry was written.
        """
        entry = self.render(customer_id, cart, total_cost, reward_points)
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as exc:
            logger.warning("Unable to write transaction log %s: %s", self.path, exc)
            return False
        return True
