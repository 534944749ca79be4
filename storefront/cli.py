"""
Command-line storefront.

Usage:
    storefront products [--category NAME]
    storefront cart
    storefront add PRODUCT_ID
    storefront increase CART_ID
    storefront decrease CART_ID
    storefront remove CART_ID
    storefront checkout --name NAME --email EMAIL --address ADDRESS
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from storefront.app import Storefront
from storefront.catalog import ALL_CATEGORIES, UNCATEGORIZED
from storefront.errors import ConfigError
from storefront.logging import get_logger
from storefront.presenter import TextCartPresenter

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Browse products and manage your cart")
    sub = parser.add_subparsers(dest="command", required=True)

    products = sub.add_parser("products", help="List products")
    products.add_argument("--category", default=ALL_CATEGORIES, help="Category name (default: all)")

    sub.add_parser("cart", help="Show the cart")

    add = sub.add_parser("add", help="Add one unit of a product")
    add.add_argument("product_id")

    for name in ("increase", "decrease", "remove"):
        line_cmd = sub.add_parser(name, help=f"{name.capitalize()} a cart item")
        line_cmd.add_argument("cart_id")

    checkout = sub.add_parser("checkout", help="Place an order")
    checkout.add_argument("--name", required=True)
    checkout.add_argument("--email", required=True)
    checkout.add_argument("--address", required=True)

    return parser


async def run(args: argparse.Namespace) -> int:
    presenter = TextCartPresenter()
    shop = await Storefront.create(listener=presenter)

    if args.command == "products":
        known = [ALL_CATEGORIES, UNCATEGORIZED, *shop.catalog.category_names()]
        if args.category not in known:
            print(f"Unknown category: {args.category}. Choose from: {', '.join(known)}", file=sys.stderr)
            return 1
        print(presenter.render_products(shop.catalog, args.category))
        return 0

    if args.command == "cart":
        print(presenter.render_cart())
        return 0

    if args.command == "checkout":
        result = await shop.place_order(args.name, args.email, args.address)
        if not result.ok:
            print(str(result.error), file=sys.stderr)
            return 1
        print(f"Order placed: {result.order_id}")
        return 0

    if args.command == "add":
        ok = await shop.add_to_cart(args.product_id)
    elif args.command == "increase":
        ok = await shop.increase(args.cart_id)
    elif args.command == "decrease":
        ok = await shop.decrease(args.cart_id)
    else:
        ok = await shop.remove(args.cart_id)

    if not ok:
        print(presenter.last_error or "Nothing changed", file=sys.stderr)
        return 1
    print(presenter.render_cart())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except ConfigError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
