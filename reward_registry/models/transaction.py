from pydantic import Field

from reward_registry.models.base import RegistryRecord

PRODUCT_ID_SEPARATOR = ","


class Transaction(RegistryRecord):
    """A completed checkout, kept as a flat log entry.

    Customer and product IDs are copied, not linked: removing the customer or
    a product later leaves the transaction intact.
    """

    transaction_id: str = Field(..., description="TxnID identifier")
    customer_id: str = Field(..., description="Buyer's customer ID")
    product_ids: str = Field(..., description="Comma-joined product IDs")
    total_amount: float = Field(..., description="Amount charged")
    reward_points: int = Field(..., description="Points earned by the checkout")

    @property
    def product_id_list(self) -> list[str]:
        if not self.product_ids:
            return []
        return self.product_ids.split(PRODUCT_ID_SEPARATOR)

    @staticmethod
    def join_product_ids(product_ids: list[str]) -> str:
        return PRODUCT_ID_SEPARATOR.join(product_ids)
