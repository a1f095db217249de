"""Test helpers for monitoring-service tests."""

import json
from typing import Any, Dict, Optional

from txmonitor import Request, parse_request


def make_transaction(
    transaction_id: str = "T1",
    user_id: int = 7,
    amount: float = 12.5,
    currency: str = "USD",
    metadata: Optional[Dict[str, Any]] = None,
    timestamp: str = "2024-01-01T00:00:00Z",
) -> Dict[str, Any]:
    """Build a wire-level transaction document."""
    return {
        "transaction_id": transaction_id,
        "user_id": user_id,
        "amount": amount,
        "currency": currency,
        "metadata": {} if metadata is None else metadata,
        "timestamp": timestamp,
    }


def raw_request(method: str, path: str, body: bytes = b"") -> bytes:
    """Frame a request the way a minimal HTTP client would."""
    head = f"{method} {path} HTTP/1.1\r\nHost: localhost\r\n"
    if body:
        head += f"Content-Length: {len(body)}\r\n"
    return head.encode("ascii") + b"\r\n" + body


def request(method: str, path: str, body: Any = b"") -> Request:
    """Build a parsed Request; dict bodies are JSON-encoded."""
    if isinstance(body, dict):
        body = json.dumps(body).encode("utf-8")
    return parse_request(raw_request(method, path, body))
