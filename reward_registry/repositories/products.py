from __future__ import annotations

from reward_registry.models.product import (
    DEFAULT_PRODUCT_IDS,
    Product,
    ProductIDRegistry,
)
from reward_registry.repositories._serialization import (
    format_float,
    format_int,
    parse_float,
    parse_int,
)
from reward_registry.repositories.base import StanzaRepository


class ProductRepository(StanzaRepository[Product]):
    """Four-line product stanzas.

    Loading claims every product ID in a registry. IDs are checked against a
    staged copy and only merged back once the whole file has loaded, so a
    broken file leaves the registry unchanged.
    """

    kind = "product"
    fields = ("product_id", "product_name", "product_price", "product_inventory")

    def _to_lines(self, record: Product) -> list[str]:
        return [
            record.product_id,
            record.product_name,
            format_float(record.product_price),
            format_int(record.product_inventory),
        ]

    def _from_lines(self, lines: list[str]) -> Product:
        return self._build(lines, DEFAULT_PRODUCT_IDS)

    def _build(self, lines: list[str], registry: ProductIDRegistry) -> Product:
        product_id, name, price, inventory = lines
        return Product.create(
            registry=registry,
            product_id=product_id,
            product_name=name,
            product_price=parse_float(price),
            product_inventory=parse_int(inventory),
        )

    def load(self, registry: ProductIDRegistry | None = None) -> list[Product]:
        """Read every product, claiming their IDs in ``registry``.

        Args:
            registry: ID registry to check against; the process-wide default
                when omitted.
        """
        target = registry if registry is not None else DEFAULT_PRODUCT_IDS
        staged = target.staged()
        products = self._read(lambda lines: self._build(lines, staged))
        target.merge(staged)
        return products
