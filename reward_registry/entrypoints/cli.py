from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from reward_registry.config import StoreConfig, configure_logging
from reward_registry.errors import RegistryError
from reward_registry.services.demo_data import seed_demo_data
from reward_registry.services.store import RewardStore

app = typer.Typer(
    name="reward-registry",
    add_completion=False,
    no_args_is_help=True,
    help="Customer reward registry backed by flat text files.",
)
customers_app = typer.Typer(no_args_is_help=True, help="Manage customers.")
products_app = typer.Typer(no_args_is_help=True, help="Manage the product catalog.")
gifts_app = typer.Typer(no_args_is_help=True, help="Manage redeemable gifts.")
app.add_typer(customers_app, name="customers")
app.add_typer(products_app, name="products")
app.add_typer(gifts_app, name="gifts")


def _describe(exc: Exception) -> str:
    """Render a domain error as a single line for the terminal."""
    if isinstance(exc, ValidationError):
        return "; ".join(error["msg"] for error in exc.errors())
    return str(exc)


@contextmanager
def _store_session(
    ctx: typer.Context, *, save: bool = True
) -> Generator[RewardStore, None, None]:
    """Load the store, run one command against it and save it back.

    Validation and registry errors, including a record that cannot be
    written, are printed in red and end the command with exit code 1.
    """
    config: StoreConfig = ctx.ensure_object(StoreConfig)
    store = RewardStore(config)
    store.load()
    try:
        yield store
        if save:
            store.save()
    except (RegistryError, ValueError) as exc:
        typer.secho(f"Error: {_describe(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _parse_cart_item(raw: str) -> tuple[str, int]:
    product_id, sep, quantity = raw.partition(":")
    if not sep:
        return product_id, 1
    try:
        return product_id, int(quantity)
    except ValueError as exc:
        raise typer.BadParameter(
            f"Expected PRODUCT_ID[:QUANTITY], got {raw!r}", param_hint="ITEMS"
        ) from exc


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[
        Path,
        typer.Option(
            "--data-dir",
            help="Directory holding the registry files.",
            envvar="REWARD_REGISTRY_DATA_DIR",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = StoreConfig().data_dir,
    points_per_dollar: Annotated[
        int,
        typer.Option(
            "--points-per-dollar",
            min=0,
            help="Reward points credited per dollar spent.",
            envvar="REWARD_REGISTRY_POINTS_PER_DOLLAR",
        ),
    ] = StoreConfig().points_per_dollar,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR).",
            envvar="REWARD_REGISTRY_LOG_LEVEL",
        ),
    ] = StoreConfig().log_level,
) -> None:
    """Configure the store location and logging for every command."""
    config = StoreConfig(
        data_dir=data_dir, points_per_dollar=points_per_dollar, log_level=log_level
    )
    configure_logging(config.log_level)
    ctx.obj = config


@customers_app.command("register")
def register_customer(
    ctx: typer.Context,
    user_name: Annotated[
        str, typer.Argument(help="'U', up to 3 digits, then 6+ letters or digits.")
    ],
    first_name: Annotated[str, typer.Argument(help="1-12 letters.")],
    last_name: Annotated[str, typer.Argument(help="1-12 letters.")],
    age: Annotated[int, typer.Argument(help="Age between 18 and 100.")],
    credit_card_number: Annotated[
        str, typer.Argument(help="Card number formatted xxxx-xxxx-xxxx.")
    ],
) -> None:
    """Register a customer and print the assigned customer ID."""
    with _store_session(ctx) as store:
        result = store.try_register_customer(
            user_name, first_name, last_name, age, credit_card_number
        )
        if result.value is None:
            raise RegistryError(
                "Invalid customer data: " + ", ".join(result.failures)
            )
        customer = result.value
    typer.secho(
        f"Customer registered successfully. CustomerID: {customer.customer_id}",
        fg=typer.colors.GREEN,
    )


@customers_app.command("remove")
def remove_customer(
    ctx: typer.Context,
    customer_id: Annotated[str, typer.Argument(help="Customer ID to remove.")],
) -> None:
    """Remove a customer by ID."""
    with _store_session(ctx) as store:
        store.remove_customer(customer_id)
    typer.secho("Customer removed successfully.", fg=typer.colors.GREEN)


@customers_app.command("show")
def show_customer(
    ctx: typer.Context,
    customer_id: Annotated[str, typer.Argument(help="Customer ID to display.")],
) -> None:
    """Print a customer's details."""
    with _store_session(ctx, save=False) as store:
        customer = store.get_customer(customer_id)
    typer.echo(f"Customer ID: {customer.customer_id}")
    typer.echo(f"Username: {customer.user_name}")
    typer.echo(f"First Name: {customer.first_name}")
    typer.echo(f"Last Name: {customer.last_name}")
    typer.echo(f"Age: {customer.age}")
    typer.echo(f"Credit Card Number: {customer.credit_card_number}")
    typer.echo(f"Reward Points: {customer.reward_points}")


@customers_app.command("list")
def list_customers(ctx: typer.Context) -> None:
    """List customers in registration order."""
    with _store_session(ctx, save=False) as store:
        customers = list(store.customers)
    for customer in customers:
        typer.echo(
            f"{customer.customer_id}  {customer.user_name}  "
            f"{customer.first_name} {customer.last_name}  "
            f"{customer.reward_points} points"
        )


@products_app.command("add")
def add_product(
    ctx: typer.Context,
    product_id: Annotated[str, typer.Argument(help="'Prod' followed by 5 digits.")],
    product_name: Annotated[str, typer.Argument(help="Display name.")],
    product_price: Annotated[float, typer.Argument(help="Unit price, above 0.")],
    product_inventory: Annotated[int, typer.Argument(help="Units in stock.")],
) -> None:
    """Add a product to the catalog."""
    with _store_session(ctx) as store:
        store.add_product(product_id, product_name, product_price, product_inventory)
    typer.secho("Product added successfully.", fg=typer.colors.GREEN)


@products_app.command("remove")
def remove_product(
    ctx: typer.Context,
    product_id: Annotated[str, typer.Argument(help="Product ID to remove.")],
) -> None:
    """Remove a product. Its ID cannot be reused afterwards."""
    with _store_session(ctx) as store:
        store.remove_product(product_id)
    typer.secho("Product removed successfully.", fg=typer.colors.GREEN)


@products_app.command("list")
def list_products(ctx: typer.Context) -> None:
    """List the catalog."""
    with _store_session(ctx, save=False) as store:
        products = list(store.products)
    for product in products:
        typer.echo(
            f"{product.product_id}  {product.product_name}  "
            f"${product.product_price:.2f}  {product.product_inventory} in stock"
        )


@gifts_app.command("add")
def add_gift(
    ctx: typer.Context,
    gift_name: Annotated[str, typer.Argument(help="Gift name.")],
    required_points: Annotated[int, typer.Argument(help="Points needed.")],
) -> None:
    """Add a redeemable gift."""
    with _store_session(ctx) as store:
        store.add_gift(gift_name, required_points)
    typer.secho(
        f"Gift added: {gift_name} (requires {required_points} points).",
        fg=typer.colors.GREEN,
    )


@gifts_app.command("list")
def list_gifts(ctx: typer.Context) -> None:
    """List redeemable gifts."""
    with _store_session(ctx, save=False) as store:
        gifts = list(store.gifts)
    if not gifts:
        typer.echo("No gifts available for redemption.")
    for index, gift in enumerate(gifts, start=1):
        typer.echo(f"{index}. {gift.gift_name} (requires {gift.required_points} points)")


@app.command("shop")
def shop(
    ctx: typer.Context,
    customer_id: Annotated[str, typer.Argument(help="Buyer's customer ID.")],
    items: Annotated[
        list[str],
        typer.Argument(help="Cart lines as PRODUCT_ID[:QUANTITY]."),
    ],
) -> None:
    """Check out a cart and credit reward points."""
    cart = [_parse_cart_item(item) for item in items]
    with _store_session(ctx) as store:
        transaction = store.checkout(customer_id, cart)
    typer.secho(
        f"Total: ${transaction.total_amount:.2f}, "
        f"Reward Points Earned: {transaction.reward_points}",
        fg=typer.colors.GREEN,
    )


@app.command("redeem")
def redeem(
    ctx: typer.Context,
    customer_id: Annotated[str, typer.Argument(help="Customer ID.")],
    gift_name: Annotated[str, typer.Argument(help="Name of the gift to redeem.")],
) -> None:
    """Spend reward points on a gift."""
    with _store_session(ctx) as store:
        gift = store.redeem_gift(customer_id, gift_name)
        remaining = store.get_customer(customer_id).reward_points
    typer.secho(f"Successfully redeemed: {gift.gift_name}", fg=typer.colors.GREEN)
    typer.echo(f"Remaining points: {remaining}")


@app.command("seed")
def seed(ctx: typer.Context) -> None:
    """Add the demo customers and products."""
    with _store_session(ctx) as store:
        added_customers, added_products = seed_demo_data(store)
    typer.secho(
        f"Added {added_customers} customers and {added_products} products",
        fg=typer.colors.GREEN,
    )


def main() -> None:
    """Entry point for executing the Typer application."""
    app()


if __name__ == "__main__":
    main()
