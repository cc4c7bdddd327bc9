from reward_registry.models.customer import Customer
from reward_registry.repositories._serialization import format_int, parse_int
from reward_registry.repositories.base import StanzaRepository


class CustomerRepository(StanzaRepository[Customer]):
    """Seven-line customer stanzas."""

    kind = "customer"
    fields = (
        "customer_id",
        "user_name",
        "first_name",
        "last_name",
        "age",
        "credit_card_number",
        "reward_points",
    )

    def _to_lines(self, record: Customer) -> list[str]:
        return [
            record.customer_id,
            record.user_name,
            record.first_name,
            record.last_name,
            format_int(record.age),
            record.credit_card_number,
            format_int(record.reward_points),
        ]

    def _from_lines(self, lines: list[str]) -> Customer:
        customer_id, user_name, first_name, last_name, age, card, points = lines
        return Customer(
            customer_id=customer_id,
            user_name=user_name,
            first_name=first_name,
            last_name=last_name,
            age=parse_int(age),
            credit_card_number=card,
            reward_points=parse_int(points),
        )
