#!/usr/bin/env python3
"""
Command line storefront for Vibe Shop.

Usage:
    vibeshop-store products
    vibeshop-store add 3 --qty 2
    vibeshop-store cart
    vibeshop-store checkout --name "Ada" --email ada@example.com
    vibeshop-store --demo products      # Fake Store API + local cart file
"""
import argparse
import os
import sys
from typing import Dict, List

import requests

from storefront.client import DEFAULT_API, StorefrontClient, StorefrontError, cart_count, cart_total
from storefront.demo import DEFAULT_CART_FILE, DemoStorefront


def _name(p: Dict) -> str:
    return p.get("name") or p.get("title") or ""


def render_products(products: List[Dict]) -> str:
    rows = [f"{'ID':>4}  {'NAME':<40} {'PRICE':>10}  {'STOCK':>5}"]
    for p in products:
        stock = p.get("stock", "-")
        rows.append(f"{p['id']:>4}  {_name(p)[:40]:<40} {p['price']:>10.2f}  {stock:>5}")
    return "\n".join(rows)


def render_cart(items: List[Dict]) -> str:
    if not items:
        return "Your cart is empty"
    rows = []
    for it in items:
        product = it.get("product") or it
        price = it.get("price", product.get("price", 0))
        rows.append(f"[{it['id']}] {_name(product)[:40]:<40} {it['quantity']:>3} x {price:>8.2f}")
    rows.append(f"Items: {cart_count(items)}   Total: ${cart_total(items):.2f}")
    return "\n".join(rows)


def render_receipt(receipt: Dict) -> str:
    return "\n".join(
        [
            "Order Confirmed!",
            f"Order #{receipt['orderId']}",
            f"Customer: {receipt['customer']['name']}",
            f"Email:    {receipt['customer']['email']}",
            f"Items:    {len(receipt['items'])}",
            f"Total:    ${receipt['total']:.2f}",
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vibeshop-store", description="Vibe Shop storefront")
    parser.add_argument("--api", default=os.environ.get("VIBESHOP_API", DEFAULT_API))
    parser.add_argument("--user", default="guest", help="cart owner id")
    parser.add_argument("--demo", action="store_true", help="use the Fake Store API and a local cart file")
    parser.add_argument("--cart-file", default=DEFAULT_CART_FILE)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("products")
    sub.add_parser("cart")
    add = sub.add_parser("add")
    add.add_argument("product_id")
    add.add_argument("--qty", type=int, default=1)
    upd = sub.add_parser("update")
    upd.add_argument("item_id", help="cart item id (product id in demo mode)")
    upd.add_argument("quantity", type=int)
    rm = sub.add_parser("remove")
    rm.add_argument("item_id")
    sub.add_parser("clear")
    co = sub.add_parser("checkout")
    co.add_argument("--name", required=True)
    co.add_argument("--email", required=True)
    sub.add_parser("orders")
    return parser


def run_backend(args, client: StorefrontClient) -> str:
    if args.command == "products":
        return render_products(client.list_products())
    if args.command == "cart":
        return render_cart(client.get_cart()["items"])
    if args.command == "add":
        return render_cart(client.add_to_cart(args.product_id, args.qty)["items"])
    if args.command == "update":
        return render_cart(client.update_quantity(int(args.item_id), args.quantity)["items"])
    if args.command == "remove":
        return render_cart(client.remove_from_cart(int(args.item_id))["items"])
    if args.command == "clear":
        return client.clear_cart()["message"]
    if args.command == "checkout":
        return render_receipt(client.checkout(args.name, args.email))
    if args.command == "orders":
        return "\n".join(
            f"{o['orderId']}  {o['status']:<10} ${o['total']:.2f}  {o['customer']['email']}"
            for o in client.list_orders()
        ) or "No orders yet"
    raise ValueError(args.command)


def run_demo(args, store: DemoStorefront) -> str:
    if args.command == "products":
        return render_products(store.list_products())
    if args.command == "cart":
        return render_cart(store.load_cart())
    if args.command == "add":
        product = next((p for p in store.list_products() if str(p["id"]) == args.product_id), None)
        if not product:
            raise StorefrontError(404, "Product not found")
        cart = []
        for _ in range(args.qty):
            cart = store.add_to_cart(product)
        return render_cart(cart)
    if args.command == "update":
        return render_cart(store.update_quantity(int(args.item_id), args.quantity))
    if args.command == "remove":
        return render_cart(store.remove_from_cart(int(args.item_id)))
    if args.command == "clear":
        store.clear_cart()
        return "Cart cleared successfully"
    if args.command == "checkout":
        return render_receipt(store.checkout(args.name, args.email))
    if args.command == "orders":
        return "Orders are not kept in demo mode"
    raise ValueError(args.command)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.demo:
            out = run_demo(args, DemoStorefront(cart_path=args.cart_file))
        else:
            out = run_backend(args, StorefrontClient(base_url=args.api, user_id=args.user))
    except StorefrontError as e:
        print(f"Error: {e.error}" + (f" ({e.message})" if e.message else ""), file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Error: could not reach the shop ({e})", file=sys.stderr)
        return 2
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
