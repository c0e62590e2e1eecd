"""
Fire concurrent creates of the same SKU at a running server.

Exactly one request should get 201; every other one must get 400 from the
store's unique constraint.

    python tools/concurrency_create.py --workers 16 --sku RACE-1
"""
import argparse
import concurrent.futures
import os
from collections import Counter
from uuid import uuid4

import requests

BASE = os.environ.get("CATALOG_BASE", "http://127.0.0.1:5050")


def login(username, password):
    r = requests.post(
        f"{BASE}/api/auth/login",
        json={"username": username, "password": password},
        timeout=10,
    )
    r.raise_for_status()
    return r.json()["token"]


def create_task(i, token, sku):
    payload = {"name": f"Race {i}", "sku": sku, "brand": "Concurrency"}
    try:
        r = requests.post(
            f"{BASE}/api/products",
            json=payload,
            headers={"Authorization": token},
            timeout=20,
        )
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run_create_concurrent(workers, token, sku):
    print(f"Running create test: workers={workers}, sku={sku}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, token, sku) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    histogram = Counter(r[1] for r in results)
    print("Status histogram:", dict(histogram))
    return histogram


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent duplicate-SKU create test.")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--sku", default=None)
    parser.add_argument("--username", default=os.environ.get("ADMIN_USERNAME", "admin"))
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD", ""))
    args = parser.parse_args()

    token = login(args.username, args.password)
    histogram = run_create_concurrent(args.workers, token, args.sku or f"RACE-{uuid4().hex[:8]}")
    ok = histogram.get(201, 0) == 1 and histogram.get(400, 0) == args.workers - 1
    print("OK" if ok else "UNEXPECTED")
