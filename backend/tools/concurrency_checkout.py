"""
Fire concurrent checkouts at one product against a running server and report
how many succeeded against the stock that was available. With the guarded
stock decrement the number of units sold never exceeds the starting stock.

    python tools/concurrency_checkout.py --product 1 --qty 1 --workers 16
"""
import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("VIBESHOP_API", "http://127.0.0.1:5000/api")


def checkout_task(i, product_id, qty):
    payload = {
        "customer": {"name": f"Load Tester {i}", "email": f"load{i}@example.com"},
        "cartItems": [{"productId": product_id, "quantity": qty}],
        "userId": f"load-{i}",
    }
    try:
        r = requests.post(f"{BASE}/checkout", json=payload, timeout=20)
        return (i, r.status_code, r.json())
    except (requests.RequestException, ValueError) as e:
        return (i, "ERR", str(e))


def run(workers, product_id, qty):
    before = requests.get(f"{BASE}/products/{product_id}", timeout=10).json()["stock"]
    print(f"Running checkout test: workers={workers}, product={product_id}, qty={qty}, stock={before}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(checkout_task, i, product_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r[0], r[1], r[2].get("error") if isinstance(r[2], dict) else r[2])
    sold = sum(qty for r in results if r[1] == 201)
    after = requests.get(f"{BASE}/products/{product_id}", timeout=10).json()["stock"]
    print(f"Units sold: {sold}, stock before: {before}, stock after: {after}")
    if sold > before or after != before - sold:
        print("OVERSELL DETECTED")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent checkout tool.")
    parser.add_argument("--product", default="1")
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()
    run(args.workers, args.product, args.qty)
