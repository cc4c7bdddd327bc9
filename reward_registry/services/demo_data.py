from typing import Any

from reward_registry.models.customer import Customer
from reward_registry.services.store import RewardStore

DEMO_CUSTOMERS: tuple[dict[str, Any], ...] = (
    {
        "customer_id": "CustID0000000001",
        "user_name": "U111thomasmuller",
        "first_name": "John",
        "last_name": "Doe",
        "age": 30,
        "credit_card_number": "1111-1111-1111",
        "reward_points": 100,
    },
    {
        "customer_id": "CustID0000000002",
        "user_name": "U222thomasmuller",
        "first_name": "Jane",
        "last_name": "Smith",
        "age": 25,
        "credit_card_number": "2222-2222-2222",
        "reward_points": 150,
    },
)

DEMO_PRODUCTS: tuple[dict[str, Any], ...] = (
    {
        "product_id": "Prod00001",
        "product_name": "Laptop",
        "product_price": 999.99,
        "product_inventory": 10,
    },
    {
        "product_id": "Prod00002",
        "product_name": "Phone",
        "product_price": 499.99,
        "product_inventory": 25,
    },
)


def seed_demo_data(store: RewardStore) -> tuple[int, int]:
    """Add the demo customers and products that are not already present.

    Returns:
        Number of customers and products added.
    """
    added_customers = 0
    for fields in DEMO_CUSTOMERS:
        if fields["customer_id"] in store.used_customer_ids:
            continue
        store.add_customer(Customer.model_validate(fields))
        added_customers += 1

    added_products = 0
    for fields in DEMO_PRODUCTS:
        if fields["product_id"] in store.product_ids:
            continue
        store.add_product(**fields)
        added_products += 1
    return added_customers, added_products
