class RegistryError(Exception):
    """Base class for registry failures that are not field validation errors."""


class ParseError(RegistryError):
    """A stored stanza could not be turned back into a record."""


class RecordNotFoundError(RegistryError, KeyError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} with ID {record_id} not found")
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:
        return str(self.args[0])


class CheckoutError(RegistryError):
    """A cart line references an unknown product or an unavailable quantity."""


class InsufficientPointsError(RegistryError):
    def __init__(self, customer_id: str, balance: int, required: int) -> None:
        super().__init__(
            f"Customer {customer_id} has {balance} points, {required} required"
        )
        self.customer_id = customer_id
        self.balance = balance
        self.required = required
