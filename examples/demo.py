#!/usr/bin/env python3
"""Interactive demo for the monitoring service — index, create, read, misses."""

import argparse
import json
import uuid
from datetime import datetime, timezone

from txmonitor import Response, TransactionClient
from txmonitor.config import DEFAULT_PORT


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _pp(label: str, resp: Response) -> None:
    print(f"\n→ {label}  [{resp.status} {resp.reason}]")
    try:
        print(json.dumps(resp.json(), indent=2))
    except ValueError:
        print(resp.text)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Monitoring service demo")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    client = TransactionClient(host=args.host, port=args.port)

    # ── 1. Service description ──────────────────────────────────
    _pp("GET /", client.index())
    _pp("GET /health", client.health())

    # ── 2. Submit a few transactions ────────────────────────────
    ids = []
    for user_id, amount, currency, merchant in [
        (1009, 42.38, "KES", "Shopify"),
        (1012, 120.50, "USD", "Amazon"),
        (1003, 15.75, "EUR", "Netflix"),
    ]:
        tx_id = str(uuid.uuid4())
        ids.append(tx_id)
        _pp("POST /transactions", client.create_transaction({
            "transaction_id": tx_id,
            "user_id": user_id,
            "amount": amount,
            "currency": currency,
            "metadata": {"merchant": merchant},
            "timestamp": _now(),
        }))

    # ── 3. Read them back ───────────────────────────────────────
    for tx_id in ids:
        _pp(f"GET /transactions/{tx_id}", client.get_transaction(tx_id))

    # ── 4. Failure paths ────────────────────────────────────────
    _pp("GET /transactions/does-not-exist", client.get_transaction("does-not-exist"))
    _pp("POST /transactions (invalid)", client.request("POST", "/transactions", b"{not json"))
    _pp("DELETE /transactions/<id>", client.request("DELETE", f"/transactions/{ids[0]}"))

    print("\nDemo complete!")


if __name__ == "__main__":
    main()
