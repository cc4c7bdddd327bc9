from .base import RecordResult, RegistryRecord, ValidationFailure
from .customer import Customer
from .gift import Gift
from .product import DEFAULT_PRODUCT_IDS, Product, ProductIDRegistry
from .transaction import Transaction

__all__ = [
    "RecordResult",
    "RegistryRecord",
    "ValidationFailure",
    "Customer",
    "Gift",
    "DEFAULT_PRODUCT_IDS",
    "Product",
    "ProductIDRegistry",
    "Transaction",
]
